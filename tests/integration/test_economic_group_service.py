"""
Tests del aprovisionamiento de grupos económicos a nivel de servicio
"""
import pytest
from sqlalchemy import event, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from kontaflow.models import AccountingConfiguration, ChartOfAccounts, EconomicGroup, UserGroup
from kontaflow.schemas.economic_group import EconomicGroupCreate
from kontaflow.services.economic_group_service import EconomicGroupService


class ChartInsertFailed(Exception):
    pass


@pytest.mark.integration
class TestEconomicGroupProvisioning:

    @pytest.fixture
    def failing_chart_insert(self):
        def fail(mapper, connection, target):
            raise ChartInsertFailed("chart insert failed")

        event.listen(ChartOfAccounts, "before_insert", fail)
        yield
        event.remove(ChartOfAccounts, "before_insert", fail)

    async def _count(self, db: AsyncSession, model) -> int:
        return await db.scalar(select(func.count()).select_from(model))

    async def test_create_group_provisions_everything(self, db_session: AsyncSession, owner):
        group = await EconomicGroupService(db_session).create_group(
            EconomicGroupCreate(name="Grupo Norte", main_country="UY", base_currency="UYU"), owner.id
        )

        assert await self._count(db_session, EconomicGroup) == 1
        membership = await db_session.scalar(select(UserGroup).where(UserGroup.economic_group_id == group.id))
        assert membership.user_id == owner.id
        assert await self._count(db_session, AccountingConfiguration) == 1
        chart = await db_session.scalar(select(ChartOfAccounts).where(ChartOfAccounts.economic_group_id == group.id))
        assert chart.name == "Chart of Accounts - Grupo Norte"

    async def test_failed_provisioning_leaves_no_rows(
        self, db_session: AsyncSession, owner, failing_chart_insert
    ):
        with pytest.raises(ChartInsertFailed):
            await EconomicGroupService(db_session).create_group(
                EconomicGroupCreate(name="Grupo Norte", main_country="UY", base_currency="UYU"), owner.id
            )
        await db_session.rollback()

        assert await self._count(db_session, EconomicGroup) == 0
        assert await self._count(db_session, UserGroup) == 0
        assert await self._count(db_session, AccountingConfiguration) == 0
        assert await self._count(db_session, ChartOfAccounts) == 0
