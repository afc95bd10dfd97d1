"""
Servicio de grupos económicos: alta con aprovisionamiento y control de acceso
"""
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from kontaflow.core.settings import settings
from kontaflow.models.chart_of_accounts import ChartOfAccounts
from kontaflow.models.economic_group import AccountingConfiguration, EconomicGroup
from kontaflow.models.user import UserGroup, UserRole
from kontaflow.repositories.economic_group import EconomicGroupRepository
from kontaflow.schemas.economic_group import EconomicGroupCreate, EconomicGroupUpdate
from kontaflow.utils.exceptions import BusinessRuleError, ForbiddenError, NotFoundError
from kontaflow.utils.logging import get_logger
from kontaflow.utils.validators import COUNTRY_CURRENCIES, is_currency_valid_for_country

logger = get_logger(__name__)

GROUP_ACCESS_DENIED = "You do not have access to this economic group"


def ensure_currency_for_country(country, currency) -> None:
    """Valida la moneda contra la lista blanca del país"""
    if not is_currency_valid_for_country(country, currency):
        country = getattr(country, "value", country)
        allowed = ", ".join(COUNTRY_CURRENCIES.get(country, ()))
        raise BusinessRuleError(
            f"For {country}, functional currency must be one of: {allowed}",
            "INVALID_CURRENCY_FOR_COUNTRY"
        )


async def get_accessible_group(
    db: AsyncSession,
    group_id: int,
    user_id: int,
    forbidden_message: str = GROUP_ACCESS_DENIED
) -> EconomicGroup:
    """
    Carga un grupo verificando existencia y luego membresía del usuario.

    Raises:
        NotFoundError: si el grupo no existe
        ForbiddenError: si el usuario no pertenece al grupo
    """
    repository = EconomicGroupRepository(db)
    group = await repository.get_by_id(group_id)
    if group is None:
        raise NotFoundError("Economic Group", group_id)
    await ensure_group_access(db, group_id, user_id, forbidden_message)
    return group


async def ensure_group_access(
    db: AsyncSession,
    group_id: int,
    user_id: int,
    forbidden_message: str = GROUP_ACCESS_DENIED
) -> None:
    if not await EconomicGroupRepository(db).user_has_access(group_id, user_id):
        raise ForbiddenError(forbidden_message)


class EconomicGroupService:
    """Servicio para operaciones de grupos económicos"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = EconomicGroupRepository(db)

    async def list_groups(
        self,
        user_id: int,
        offset: int,
        limit: int,
        search: Optional[str] = None,
        active: Optional[bool] = None,
        main_country: Optional[str] = None
    ) -> Tuple[List[EconomicGroup], int]:
        return await self.repository.list(user_id, offset, limit, search, active, main_country)

    async def get_my_groups(self, user_id: int) -> List[UserGroup]:
        return await self.repository.get_memberships(user_id)

    async def get_group(self, group_id: int, user_id: int) -> EconomicGroup:
        return await get_accessible_group(self.db, group_id, user_id)

    async def create_group(self, data: EconomicGroupCreate, user_id: int) -> EconomicGroup:
        """
        Crea el grupo y aprovisiona en la misma transacción:
        membresía ADMIN del creador, configuración contable por defecto
        y un plan de cuentas vacío.
        """
        ensure_currency_for_country(data.main_country, data.base_currency)

        group = EconomicGroup(
            name=data.name,
            main_country=data.main_country.value,
            base_currency=data.base_currency.value,
            active=True
        )
        await self.repository.add(group)

        self.db.add_all([
            UserGroup(user_id=user_id, economic_group_id=group.id, role=UserRole.ADMIN),
            AccountingConfiguration(
                economic_group_id=group.id,
                allow_entries_in_closed_period=False,
                require_global_approval=False,
                minimum_approval_amount=settings.DEFAULT_MINIMUM_APPROVAL_AMOUNT,
                allow_unbalanced_entries=False,
                amount_decimals=settings.DEFAULT_AMOUNT_DECIMALS,
                exchange_rate_decimals=settings.DEFAULT_EXCHANGE_RATE_DECIMALS
            ),
            ChartOfAccounts(
                economic_group_id=group.id,
                name=f"Chart of Accounts - {group.name}",
                description="Default chart of accounts",
                active=True
            ),
        ])
        await self.db.flush()
        await self.db.commit()
        await self.db.refresh(group)

        logger.info(f"Economic group created: id={group.id} by user={user_id}")
        return group

    async def update_group(self, group_id: int, data: EconomicGroupUpdate, user_id: int) -> EconomicGroup:
        group = await get_accessible_group(self.db, group_id, user_id)
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        for field in ("main_country", "base_currency"):
            if field in update_data:
                update_data[field] = update_data[field].value

        # El par resultante (país, moneda) debe ser compatible
        if "main_country" in update_data or "base_currency" in update_data:
            ensure_currency_for_country(
                update_data.get("main_country", group.main_country),
                update_data.get("base_currency", group.base_currency)
            )

        await self.repository.update(group, update_data)
        await self.db.commit()
        await self.db.refresh(group)

        logger.info(f"Economic group updated: id={group.id}")
        return group

    async def delete_group(self, group_id: int, user_id: int) -> None:
        group = await get_accessible_group(self.db, group_id, user_id)

        if await self.repository.count_active_companies(group_id) > 0:
            raise BusinessRuleError(
                "Cannot delete a group with active companies. Deactivate companies first.",
                "ACTIVE_COMPANIES"
            )

        await self.repository.soft_delete(group)
        await self.db.commit()
        logger.info(f"Economic group deactivated: id={group_id}")
