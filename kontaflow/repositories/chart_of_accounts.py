from typing import List, Optional, Tuple

from sqlalchemy import func, select

from kontaflow.models.account import Account
from kontaflow.models.chart_of_accounts import ChartOfAccounts
from kontaflow.repositories.base import BaseRepository
from kontaflow.repositories.economic_group import member_group_ids
from kontaflow.schemas.chart_of_accounts import ChartOfAccountsFilter


class ChartOfAccountsRepository(BaseRepository[ChartOfAccounts]):
    model = ChartOfAccounts

    async def list(
        self,
        filters: ChartOfAccountsFilter,
        user_id: int,
        offset: int,
        limit: int
    ) -> Tuple[List[ChartOfAccounts], int]:
        query = select(ChartOfAccounts)

        if filters.economic_group_id is not None:
            query = query.where(ChartOfAccounts.economic_group_id == filters.economic_group_id)
        else:
            query = query.where(ChartOfAccounts.economic_group_id.in_(member_group_ids(user_id)))

        if filters.search:
            query = query.where(ChartOfAccounts.name.ilike(f"%{filters.search}%"))
        if filters.active is not None:
            query = query.where(ChartOfAccounts.active == filters.active)

        query = query.order_by(ChartOfAccounts.name, ChartOfAccounts.id)
        return await self.paginate(query, offset, limit)

    async def get_by_group(self, group_id: int) -> Optional[ChartOfAccounts]:
        return await self.db.scalar(
            select(ChartOfAccounts).where(ChartOfAccounts.economic_group_id == group_id)
        )

    async def count_accounts(self, chart_id: int) -> int:
        total = await self.db.scalar(
            select(func.count(Account.id)).where(Account.chart_of_accounts_id == chart_id)
        )
        return total or 0
