from typing import List, Optional, Tuple, Type, Union

from sqlalchemy import func, or_, select

from kontaflow.models.third_party import Customer, Supplier
from kontaflow.repositories.base import BaseRepository
from kontaflow.repositories.economic_group import member_group_ids
from kontaflow.schemas.third_party import ThirdPartyFilter

ThirdParty = Union[Customer, Supplier]


class ThirdPartyRepository(BaseRepository[ThirdParty]):
    """Consultas comunes a clientes y proveedores"""
    model: Type[ThirdParty]

    async def list(
        self,
        filters: ThirdPartyFilter,
        user_id: int,
        offset: int,
        limit: int
    ) -> Tuple[List[ThirdParty], int]:
        model = self.model
        query = select(model)

        if filters.economic_group_id is not None:
            query = query.where(model.economic_group_id == filters.economic_group_id)
        else:
            query = query.where(model.economic_group_id.in_(member_group_ids(user_id)))

        if filters.search:
            pattern = f"%{filters.search}%"
            query = query.where(
                or_(model.name.ilike(pattern), model.rut.ilike(pattern), model.email.ilike(pattern))
            )
        if filters.active is not None:
            query = query.where(model.active == filters.active)

        query = query.order_by(model.name, model.id)
        return await self.paginate(query, offset, limit)

    async def list_by_group(self, group_id: int) -> List[ThirdParty]:
        items = await self.all(
            select(self.model).where(self.model.economic_group_id == group_id).order_by(self.model.name)
        )
        return list(items)

    async def name_exists_in_group(self, group_id: int, name: str, exclude_id: Optional[int] = None) -> bool:
        conditions = [
            self.model.economic_group_id == group_id,
            func.lower(self.model.name) == name.lower()
        ]
        if exclude_id is not None:
            conditions.append(self.model.id != exclude_id)
        return await self.exists(*conditions)


class CustomerRepository(ThirdPartyRepository):
    model = Customer


class SupplierRepository(ThirdPartyRepository):
    model = Supplier
