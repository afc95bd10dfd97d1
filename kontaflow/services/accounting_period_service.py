"""
Servicio de períodos contables: alta, cierre y reapertura
"""
from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from kontaflow.models.accounting_period import AccountingPeriod, PeriodType
from kontaflow.models.base import utcnow
from kontaflow.models.journal_entry import OPEN_ENTRY_STATUSES
from kontaflow.repositories.accounting_period import AccountingPeriodRepository
from kontaflow.schemas.accounting_period import (
    AccountingPeriodCreate, AccountingPeriodFilter, AccountingPeriodUpdate
)
from kontaflow.services.economic_group_service import ensure_group_access, get_accessible_group
from kontaflow.utils.exceptions import BusinessRuleError, NotFoundError
from kontaflow.utils.logging import get_logger

logger = get_logger(__name__)

PERIOD_ACCESS_DENIED = "You do not have access to this accounting period"


def validate_period_fields(
    period_type: PeriodType,
    month: Optional[int],
    start_date: date,
    end_date: date
) -> None:
    """
    Reglas cruzadas del período: mes según el tipo y rango de fechas.

    Raises:
        BusinessRuleError: con la regla incumplida
    """
    if period_type == PeriodType.FISCAL_YEAR and month is not None:
        raise BusinessRuleError(
            "FISCAL_YEAR type periods should not have a month",
            "INVALID_FISCAL_YEAR_MONTH"
        )

    if period_type == PeriodType.MONTH:
        if month is None:
            raise BusinessRuleError("MONTH type periods must have a month (1-12)", "MISSING_MONTH")
        if not 1 <= month <= 12:
            raise BusinessRuleError("Month must be between 1 and 12", "INVALID_MONTH")

    if start_date >= end_date:
        raise BusinessRuleError("Start date must be before end date", "INVALID_DATE_RANGE")

    # Se admiten períodos que cruzan el año, pero se avisa si el salto es mayor
    if abs(end_date.year - start_date.year) > 1:
        logger.warning(f"Period spans more than one calendar year: {start_date} - {end_date}")


class AccountingPeriodService:
    """Servicio para operaciones de períodos contables"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = AccountingPeriodRepository(db)

    async def list_periods(
        self,
        filters: AccountingPeriodFilter,
        user_id: int,
        offset: int,
        limit: int
    ) -> Tuple[List[AccountingPeriod], int]:
        if filters.economic_group_id is not None:
            await ensure_group_access(self.db, filters.economic_group_id, user_id)
        return await self.repository.list(filters, user_id, offset, limit)

    async def list_by_group(self, group_id: int, user_id: int) -> List[AccountingPeriod]:
        await get_accessible_group(self.db, group_id, user_id)
        return await self.repository.list_by_group(group_id)

    async def get_period(self, period_id: int, user_id: int) -> AccountingPeriod:
        period = await self.repository.get_by_id(period_id)
        if period is None:
            raise NotFoundError("Accounting Period", period_id)
        await ensure_group_access(self.db, period.economic_group_id, user_id, PERIOD_ACCESS_DENIED)
        return period

    async def create_period(self, data: AccountingPeriodCreate, user_id: int) -> AccountingPeriod:
        await get_accessible_group(self.db, data.economic_group_id, user_id)

        validate_period_fields(data.type, data.month, data.start_date, data.end_date)

        if await self.repository.combination_exists(
            data.economic_group_id, data.type, data.fiscal_year, data.month
        ):
            description = (
                f"Fiscal Year {data.fiscal_year}"
                if data.type == PeriodType.FISCAL_YEAR
                else f"{data.fiscal_year}-{data.month}"
            )
            raise BusinessRuleError(
                f"An accounting period for {description} already exists in this economic group",
                "DUPLICATE_PERIOD"
            )

        overlapping = await self.repository.find_overlapping(
            data.economic_group_id, data.type, data.start_date, data.end_date
        )
        if overlapping is not None:
            raise BusinessRuleError(
                "The date range overlaps with an existing accounting period",
                "OVERLAPPING_PERIOD"
            )

        period = AccountingPeriod(
            economic_group_id=data.economic_group_id,
            type=data.type,
            fiscal_year=data.fiscal_year,
            month=data.month,
            start_date=data.start_date,
            end_date=data.end_date,
            closed=False
        )
        await self.repository.add(period)
        await self.db.commit()
        await self.db.refresh(period)

        logger.info(f"Accounting period created: id={period.id} group={period.economic_group_id}")
        return period

    async def update_period(self, period_id: int, data: AccountingPeriodUpdate, user_id: int) -> AccountingPeriod:
        """Sólo cambia el estado de cierre, con las reglas de cerrar/reabrir"""
        if data.closed is True:
            return await self.close_period(period_id, user_id)
        if data.closed is False:
            return await self.reopen_period(period_id, user_id)
        return await self.get_period(period_id, user_id)

    async def close_period(self, period_id: int, user_id: int) -> AccountingPeriod:
        """
        Cierra el período si no quedan asientos abiertos en su rango.

        Se consideran abiertos los asientos en DRAFT o PENDING_APPROVAL de
        cualquier empresa del grupo.
        """
        logger.warning(f"Closing accounting period: id={period_id} user={user_id}")
        period = await self.get_period(period_id, user_id)

        if period.closed:
            raise BusinessRuleError("This period is already closed", "ALREADY_CLOSED")

        open_entries = await self.repository.count_entries_in_range(
            period.economic_group_id, period.start_date, period.end_date, OPEN_ENTRY_STATUSES
        )
        if open_entries > 0:
            raise BusinessRuleError(
                "Cannot close period: Period has DRAFT or PENDING_APPROVAL journal entries. "
                f"Found {open_entries} problematic entries.",
                "PERIOD_NOT_CLOSABLE"
            )

        await self.repository.update(period, {"closed": True, "closed_at": utcnow(), "closed_by": user_id})
        await self.db.commit()
        await self.db.refresh(period)
        return period

    async def reopen_period(self, period_id: int, user_id: int) -> AccountingPeriod:
        logger.warning(f"Reopening accounting period: id={period_id} user={user_id}")
        period = await self.get_period(period_id, user_id)

        if not period.closed:
            raise BusinessRuleError("This period is already open", "ALREADY_OPEN")

        await self.repository.update(period, {"closed": False, "closed_at": None, "closed_by": None})
        await self.db.commit()
        await self.db.refresh(period)
        return period

    async def delete_period(self, period_id: int, user_id: int) -> None:
        logger.warning(f"Deleting accounting period: id={period_id} user={user_id}")
        period = await self.get_period(period_id, user_id)

        entry_count = await self.repository.count_entries_in_range(
            period.economic_group_id, period.start_date, period.end_date
        )
        if entry_count > 0:
            raise BusinessRuleError(
                f"Cannot delete period with {entry_count} journal entries.",
                "HAS_JOURNAL_ENTRIES"
            )

        await self.repository.delete(period)
        await self.db.commit()
