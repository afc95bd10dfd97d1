from typing import List, Optional, Tuple

from sqlalchemy import Select, select
from sqlalchemy.orm import selectinload

from kontaflow.models.company import Company
from kontaflow.models.user_company import UserCompany
from kontaflow.repositories.base import BaseRepository
from kontaflow.repositories.economic_group import member_group_ids
from kontaflow.schemas.user_company import UserCompanyFilter


class UserCompanyRepository(BaseRepository[UserCompany]):
    model = UserCompany

    def _with_relations(self) -> Select:
        return select(UserCompany).options(
            selectinload(UserCompany.user),
            selectinload(UserCompany.company)
        )

    async def list(
        self,
        filters: UserCompanyFilter,
        user_id: int,
        offset: int,
        limit: int
    ) -> Tuple[List[UserCompany], int]:
        visible_companies = select(Company.id).where(Company.economic_group_id.in_(member_group_ids(user_id)))
        query = self._with_relations().where(UserCompany.company_id.in_(visible_companies))

        if filters.user_id is not None:
            query = query.where(UserCompany.user_id == filters.user_id)
        if filters.company_id is not None:
            query = query.where(UserCompany.company_id == filters.company_id)
        if filters.can_write is not None:
            query = query.where(UserCompany.can_write == filters.can_write)

        query = query.order_by(UserCompany.created_at.desc(), UserCompany.id.desc())
        return await self.paginate(query, offset, limit)

    async def get_pair(self, user_id: int, company_id: int) -> Optional[UserCompany]:
        return await self.db.scalar(
            self._with_relations().where(
                UserCompany.user_id == user_id,
                UserCompany.company_id == company_id
            )
        )

    async def list_by_user(self, user_id: int, viewer_id: int) -> List[UserCompany]:
        visible_companies = select(Company.id).where(Company.economic_group_id.in_(member_group_ids(viewer_id)))
        items = await self.all(
            self._with_relations()
            .where(UserCompany.user_id == user_id, UserCompany.company_id.in_(visible_companies))
            .order_by(UserCompany.id)
        )
        return list(items)

    async def list_by_company(self, company_id: int) -> List[UserCompany]:
        items = await self.all(
            self._with_relations().where(UserCompany.company_id == company_id).order_by(UserCompany.id)
        )
        return list(items)
