from typing import List, Optional, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.orm import selectinload

from kontaflow.models.account import Account
from kontaflow.models.chart_of_accounts import ChartOfAccounts
from kontaflow.models.journal_entry import EntryLine
from kontaflow.repositories.base import BaseRepository
from kontaflow.repositories.economic_group import member_group_ids
from kontaflow.schemas.account import AccountFilter


class AccountRepository(BaseRepository[Account]):
    model = Account

    async def list(
        self,
        filters: AccountFilter,
        user_id: int,
        offset: int,
        limit: int
    ) -> Tuple[List[Account], int]:
        query = select(Account)

        if filters.chart_of_accounts_id is not None:
            query = query.where(Account.chart_of_accounts_id == filters.chart_of_accounts_id)
        else:
            accessible_charts = select(ChartOfAccounts.id).where(
                ChartOfAccounts.economic_group_id.in_(member_group_ids(user_id))
            )
            query = query.where(Account.chart_of_accounts_id.in_(accessible_charts))

        if filters.search:
            pattern = f"%{filters.search}%"
            query = query.where(or_(Account.code.ilike(pattern), Account.name.ilike(pattern)))
        if filters.type:
            query = query.where(Account.type == filters.type)
        if filters.level is not None:
            query = query.where(Account.level == filters.level)
        if filters.postable is not None:
            query = query.where(Account.postable == filters.postable)
        if filters.active is not None:
            query = query.where(Account.active == filters.active)
        if filters.parent_account_id is not None:
            query = query.where(Account.parent_account_id == filters.parent_account_id)

        query = query.order_by(Account.code)
        return await self.paginate(query, offset, limit)

    async def get_detail(self, account_id: int) -> Optional[Account]:
        """Cuenta con su cuenta padre cargada"""
        return await self.db.scalar(
            select(Account)
            .options(selectinload(Account.parent_account))
            .where(Account.id == account_id)
            .execution_options(populate_existing=True)
        )

    async def list_active_by_chart(self, chart_id: int) -> List[Account]:
        accounts = await self.all(
            select(Account)
            .where(Account.chart_of_accounts_id == chart_id, Account.active.is_(True))
            .order_by(Account.code)
        )
        return list(accounts)

    async def code_exists_in_chart(self, chart_id: int, code: str, exclude_id: Optional[int] = None) -> bool:
        conditions = [Account.chart_of_accounts_id == chart_id, Account.code == code]
        if exclude_id is not None:
            conditions.append(Account.id != exclude_id)
        return await self.exists(*conditions)

    async def count_subaccounts(self, account_id: int) -> int:
        total = await self.db.scalar(
            select(func.count(Account.id)).where(Account.parent_account_id == account_id)
        )
        return total or 0

    async def count_entry_lines(self, account_id: int) -> int:
        total = await self.db.scalar(
            select(func.count(EntryLine.id)).where(EntryLine.account_id == account_id)
        )
        return total or 0
