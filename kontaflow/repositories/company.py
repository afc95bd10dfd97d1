from typing import List, Optional, Tuple

from sqlalchemy import func, or_, select

from kontaflow.models.company import Company
from kontaflow.models.journal_entry import JournalEntry
from kontaflow.repositories.base import BaseRepository
from kontaflow.repositories.economic_group import member_group_ids
from kontaflow.schemas.company import CompanyFilter


class CompanyRepository(BaseRepository[Company]):
    model = Company

    async def list(
        self,
        filters: CompanyFilter,
        user_id: int,
        offset: int,
        limit: int
    ) -> Tuple[List[Company], int]:
        query = select(Company)

        if filters.economic_group_id is not None:
            query = query.where(Company.economic_group_id == filters.economic_group_id)
        else:
            query = query.where(Company.economic_group_id.in_(member_group_ids(user_id)))

        if filters.search:
            pattern = f"%{filters.search}%"
            query = query.where(
                or_(
                    Company.name.ilike(pattern),
                    Company.trade_name.ilike(pattern),
                    Company.rut.ilike(pattern)
                )
            )
        if filters.active is not None:
            query = query.where(Company.active == filters.active)
        if filters.country:
            query = query.where(Company.country == filters.country.value)

        query = query.order_by(Company.name, Company.id)
        return await self.paginate(query, offset, limit)

    async def list_by_group(self, group_id: int) -> List[Company]:
        companies = await self.all(
            select(Company).where(Company.economic_group_id == group_id).order_by(Company.name)
        )
        return list(companies)

    async def rut_exists_in_group(self, group_id: int, rut: str, exclude_id: Optional[int] = None) -> bool:
        conditions = [Company.economic_group_id == group_id, Company.rut == rut]
        if exclude_id is not None:
            conditions.append(Company.id != exclude_id)
        return await self.exists(*conditions)

    async def count_journal_entries(self, company_id: int) -> int:
        total = await self.db.scalar(
            select(func.count(JournalEntry.id)).where(JournalEntry.company_id == company_id)
        )
        return total or 0

    async def ids_for_group(self, group_id: int) -> List[int]:
        result = await self.db.execute(select(Company.id).where(Company.economic_group_id == group_id))
        return list(result.scalars().all())
