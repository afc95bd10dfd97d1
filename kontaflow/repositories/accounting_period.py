from datetime import date
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import func, select

from kontaflow.models.accounting_period import AccountingPeriod, PeriodType
from kontaflow.models.company import Company
from kontaflow.models.journal_entry import EntryStatus, JournalEntry
from kontaflow.repositories.base import BaseRepository
from kontaflow.repositories.economic_group import member_group_ids
from kontaflow.schemas.accounting_period import AccountingPeriodFilter


class AccountingPeriodRepository(BaseRepository[AccountingPeriod]):
    model = AccountingPeriod

    async def list(
        self,
        filters: AccountingPeriodFilter,
        user_id: int,
        offset: int,
        limit: int
    ) -> Tuple[List[AccountingPeriod], int]:
        query = select(AccountingPeriod)

        if filters.economic_group_id is not None:
            query = query.where(AccountingPeriod.economic_group_id == filters.economic_group_id)
        else:
            query = query.where(AccountingPeriod.economic_group_id.in_(member_group_ids(user_id)))

        if filters.type:
            query = query.where(AccountingPeriod.type == filters.type)
        if filters.fiscal_year is not None:
            query = query.where(AccountingPeriod.fiscal_year == filters.fiscal_year)
        if filters.closed is not None:
            query = query.where(AccountingPeriod.closed == filters.closed)

        query = query.order_by(
            AccountingPeriod.fiscal_year.desc(),
            AccountingPeriod.month.desc(),
            AccountingPeriod.id
        )
        return await self.paginate(query, offset, limit)

    async def list_by_group(self, group_id: int) -> List[AccountingPeriod]:
        periods = await self.all(
            select(AccountingPeriod)
            .where(AccountingPeriod.economic_group_id == group_id)
            .order_by(AccountingPeriod.fiscal_year.desc(), AccountingPeriod.month.desc())
        )
        return list(periods)

    async def combination_exists(
        self,
        group_id: int,
        period_type: PeriodType,
        fiscal_year: int,
        month: Optional[int]
    ) -> bool:
        month_condition = AccountingPeriod.month.is_(None) if month is None else AccountingPeriod.month == month
        return await self.exists(
            AccountingPeriod.economic_group_id == group_id,
            AccountingPeriod.type == period_type,
            AccountingPeriod.fiscal_year == fiscal_year,
            month_condition
        )

    async def find_overlapping(
        self,
        group_id: int,
        period_type: PeriodType,
        start_date: date,
        end_date: date
    ) -> Optional[AccountingPeriod]:
        """Primer período del mismo tipo cuyo rango se solapa con [start_date, end_date]"""
        return await self.db.scalar(
            select(AccountingPeriod)
            .where(
                AccountingPeriod.economic_group_id == group_id,
                AccountingPeriod.type == period_type,
                AccountingPeriod.start_date <= end_date,
                AccountingPeriod.end_date >= start_date
            )
            .order_by(AccountingPeriod.start_date)
            .limit(1)
        )

    async def count_entries_in_range(
        self,
        group_id: int,
        start_date: date,
        end_date: date,
        statuses: Optional[Iterable[EntryStatus]] = None
    ) -> int:
        """Asientos de las empresas del grupo fechados dentro del rango"""
        group_companies = select(Company.id).where(Company.economic_group_id == group_id)
        query = select(func.count(JournalEntry.id)).where(
            JournalEntry.company_id.in_(group_companies),
            JournalEntry.date >= start_date,
            JournalEntry.date <= end_date
        )
        if statuses is not None:
            query = query.where(JournalEntry.status.in_(list(statuses)))
        total = await self.db.scalar(query)
        return total or 0

    async def find_closed_for_date(self, group_id: int, on_date: date) -> Optional[AccountingPeriod]:
        return await self.db.scalar(
            select(AccountingPeriod)
            .where(
                AccountingPeriod.economic_group_id == group_id,
                AccountingPeriod.closed.is_(True),
                AccountingPeriod.start_date <= on_date,
                AccountingPeriod.end_date >= on_date
            )
            .limit(1)
        )
