from typing import List, Optional, Tuple

from sqlalchemy import Select, select
from sqlalchemy.orm import selectinload

from kontaflow.models.company import Company
from kontaflow.models.economic_group import AccountingConfiguration, EconomicGroup
from kontaflow.models.user import UserGroup
from kontaflow.repositories.base import BaseRepository


def member_group_ids(user_id: int) -> Select:
    """Subconsulta con los grupos a los que pertenece un usuario"""
    return select(UserGroup.economic_group_id).where(UserGroup.user_id == user_id)


class EconomicGroupRepository(BaseRepository[EconomicGroup]):
    model = EconomicGroup

    async def list(
        self,
        user_id: int,
        offset: int,
        limit: int,
        search: Optional[str] = None,
        active: Optional[bool] = None,
        main_country: Optional[str] = None
    ) -> Tuple[List[EconomicGroup], int]:
        query = select(EconomicGroup).where(EconomicGroup.id.in_(member_group_ids(user_id)))

        if search:
            query = query.where(EconomicGroup.name.ilike(f"%{search}%"))
        if active is not None:
            query = query.where(EconomicGroup.active == active)
        if main_country:
            query = query.where(EconomicGroup.main_country == main_country)

        query = query.order_by(EconomicGroup.created_at.desc(), EconomicGroup.id.desc())
        return await self.paginate(query, offset, limit)

    async def get_memberships(self, user_id: int) -> List[UserGroup]:
        result = await self.db.execute(
            select(UserGroup)
            .options(selectinload(UserGroup.economic_group))
            .where(UserGroup.user_id == user_id)
            .order_by(UserGroup.id)
        )
        return list(result.scalars().all())

    async def user_has_access(self, group_id: int, user_id: int) -> bool:
        membership = await self.db.scalar(
            select(UserGroup.id).where(
                UserGroup.economic_group_id == group_id,
                UserGroup.user_id == user_id
            )
        )
        return membership is not None

    async def count_active_companies(self, group_id: int) -> int:
        return await self.count(
            select(Company.id).where(Company.economic_group_id == group_id, Company.active.is_(True))
        )

    async def get_configuration(self, group_id: int) -> Optional[AccountingConfiguration]:
        return await self.db.scalar(
            select(AccountingConfiguration).where(AccountingConfiguration.economic_group_id == group_id)
        )
