"""
Servicios de terceros: clientes y proveedores de un grupo económico
"""
from typing import List, Tuple, Type, Union

from sqlalchemy.ext.asyncio import AsyncSession

from kontaflow.models.third_party import Customer, Supplier
from kontaflow.repositories.third_party import (
    CustomerRepository, SupplierRepository, ThirdPartyRepository
)
from kontaflow.schemas.third_party import ThirdPartyCreate, ThirdPartyFilter, ThirdPartyUpdate
from kontaflow.services.economic_group_service import ensure_group_access, get_accessible_group
from kontaflow.utils.exceptions import BusinessRuleError, NotFoundError
from kontaflow.utils.logging import get_logger
from kontaflow.utils.validators import is_valid_email

logger = get_logger(__name__)

ThirdParty = Union[Customer, Supplier]


class ThirdPartyService:
    """
    Operaciones comunes de clientes y proveedores.

    Las subclases definen el modelo, el repositorio y las etiquetas usadas
    en mensajes y códigos de regla.
    """
    model: Type[ThirdParty]
    repository_class: Type[ThirdPartyRepository]
    label: str
    plural: str

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = self.repository_class(db)

    @property
    def duplicate_rule(self) -> str:
        return f"DUPLICATE_{self.label.upper()}_NAME"

    def _validate_fields(self, name: str, email) -> None:
        if len(name.strip()) < 3:
            raise BusinessRuleError("Name must be at least 3 characters")
        if email and not is_valid_email(str(email)):
            raise BusinessRuleError("Invalid email format", "INVALID_EMAIL")

    async def list_items(
        self,
        filters: ThirdPartyFilter,
        user_id: int,
        offset: int,
        limit: int
    ) -> Tuple[List[ThirdParty], int]:
        if filters.economic_group_id is not None:
            await ensure_group_access(self.db, filters.economic_group_id, user_id)
        return await self.repository.list(filters, user_id, offset, limit)

    async def list_by_group(self, group_id: int, user_id: int) -> List[ThirdParty]:
        await get_accessible_group(self.db, group_id, user_id)
        return await self.repository.list_by_group(group_id)

    async def get_item(self, item_id: int, user_id: int) -> ThirdParty:
        item = await self.repository.get_by_id(item_id)
        if item is None:
            raise NotFoundError(self.label, item_id)
        await ensure_group_access(
            self.db, item.economic_group_id, user_id, f"You do not have access to this {self.label.lower()}"
        )
        return item

    async def create_item(self, data: ThirdPartyCreate, user_id: int) -> ThirdParty:
        group = await get_accessible_group(self.db, data.economic_group_id, user_id)

        if not group.active:
            raise BusinessRuleError(
                f"Cannot create {self.plural} for an inactive economic group",
                "INACTIVE_ECONOMIC_GROUP"
            )

        self._validate_fields(data.name, data.email)

        if await self.repository.name_exists_in_group(data.economic_group_id, data.name):
            raise BusinessRuleError(
                f"A {self.label.lower()} with this name already exists in the economic group",
                self.duplicate_rule
            )

        item = self.model(**data.model_dump(), active=True)
        await self.repository.add(item)
        await self.db.commit()
        await self.db.refresh(item)

        logger.info(f"{self.label} created: id={item.id} group={item.economic_group_id}")
        return item

    async def update_item(self, item_id: int, data: ThirdPartyUpdate, user_id: int) -> ThirdParty:
        item = await self.get_item(item_id, user_id)
        update_data = data.model_dump(exclude_unset=True)
        for field in ("name", "active"):
            if field in update_data and update_data[field] is None:
                del update_data[field]

        self._validate_fields(update_data.get("name", item.name), update_data.get("email"))

        if "name" in update_data and await self.repository.name_exists_in_group(
            item.economic_group_id, update_data["name"], exclude_id=item.id
        ):
            raise BusinessRuleError(
                f"A {self.label.lower()} with this name already exists in the economic group",
                self.duplicate_rule
            )

        await self.repository.update(item, update_data)
        await self.db.commit()
        await self.db.refresh(item)

        logger.info(f"{self.label} updated: id={item.id}")
        return item

    async def delete_item(self, item_id: int, user_id: int) -> None:
        """Baja lógica; repetirla deja el registro inactivo sin error"""
        item = await self.get_item(item_id, user_id)
        await self.repository.soft_delete(item)
        await self.db.commit()
        logger.info(f"{self.label} deactivated: id={item_id}")


class CustomerService(ThirdPartyService):
    model = Customer
    repository_class = CustomerRepository
    label = "Customer"
    plural = "customers"


class SupplierService(ThirdPartyService):
    model = Supplier
    repository_class = SupplierRepository
    label = "Supplier"
    plural = "suppliers"
