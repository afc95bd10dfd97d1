from typing import List, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from kontaflow.models.chart_of_accounts import ChartOfAccounts
from kontaflow.repositories.chart_of_accounts import ChartOfAccountsRepository
from kontaflow.schemas.chart_of_accounts import (
    ChartOfAccountsCreate, ChartOfAccountsFilter, ChartOfAccountsUpdate
)
from kontaflow.services.economic_group_service import ensure_group_access, get_accessible_group
from kontaflow.utils.exceptions import BusinessRuleError, ConflictError, NotFoundError
from kontaflow.utils.logging import get_logger

logger = get_logger(__name__)

CHART_ACCESS_DENIED = "You do not have access to this chart of accounts"


class ChartOfAccountsService:
    """Servicio para planes de cuentas (uno por grupo económico)"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = ChartOfAccountsRepository(db)

    async def list_charts(
        self,
        filters: ChartOfAccountsFilter,
        user_id: int,
        offset: int,
        limit: int
    ) -> Tuple[List[ChartOfAccounts], int]:
        if filters.economic_group_id is not None:
            await ensure_group_access(self.db, filters.economic_group_id, user_id)
        return await self.repository.list(filters, user_id, offset, limit)

    async def get_chart(self, chart_id: int, user_id: int) -> ChartOfAccounts:
        chart = await self.repository.get_by_id(chart_id)
        if chart is None:
            raise NotFoundError("Chart of Accounts", chart_id)
        await ensure_group_access(self.db, chart.economic_group_id, user_id, CHART_ACCESS_DENIED)
        return chart

    async def get_by_group(self, group_id: int, user_id: int) -> ChartOfAccounts:
        await get_accessible_group(self.db, group_id, user_id)
        chart = await self.repository.get_by_group(group_id)
        if chart is None:
            raise NotFoundError("Chart of Accounts for this Economic Group")
        return chart

    async def create_chart(self, data: ChartOfAccountsCreate, user_id: int) -> ChartOfAccounts:
        await get_accessible_group(self.db, data.economic_group_id, user_id)

        if await self.repository.get_by_group(data.economic_group_id) is not None:
            raise ConflictError("Economic Group already has a Chart of Accounts", "economicGroupId")

        chart = ChartOfAccounts(
            economic_group_id=data.economic_group_id,
            name=data.name,
            description=data.description,
            active=True
        )
        await self.repository.add(chart)
        await self.db.commit()
        await self.db.refresh(chart)

        logger.info(f"Chart of accounts created: id={chart.id} group={chart.economic_group_id}")
        return chart

    async def update_chart(self, chart_id: int, data: ChartOfAccountsUpdate, user_id: int) -> ChartOfAccounts:
        chart = await self.get_chart(chart_id, user_id)
        update_data = data.model_dump(exclude_unset=True)
        if update_data.get("name") is None:
            update_data.pop("name", None)
        if update_data.get("active") is None:
            update_data.pop("active", None)

        await self.repository.update(chart, update_data)
        await self.db.commit()
        await self.db.refresh(chart)

        logger.info(f"Chart of accounts updated: id={chart.id}")
        return chart

    async def delete_chart(self, chart_id: int, user_id: int) -> None:
        chart = await self.get_chart(chart_id, user_id)

        account_count = await self.repository.count_accounts(chart_id)
        if account_count > 0:
            raise BusinessRuleError(
                f"Cannot delete Chart of Accounts with {account_count} account(s). Delete all accounts first.",
                "HAS_ACCOUNTS"
            )

        await self.repository.soft_delete(chart)
        await self.db.commit()
        logger.info(f"Chart of accounts deactivated: id={chart_id}")
