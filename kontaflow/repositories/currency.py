from typing import List, Optional, Tuple

from sqlalchemy import func, or_, select

from kontaflow.models.company import Company
from kontaflow.models.currency import Currency, ExchangeRate
from kontaflow.models.economic_group import EconomicGroup
from kontaflow.repositories.base import BaseRepository
from kontaflow.repositories.economic_group import member_group_ids
from kontaflow.schemas.currency import CurrencyFilter, ExchangeRateFilter


class CurrencyRepository(BaseRepository[Currency]):
    model = Currency

    async def list(self, filters: CurrencyFilter, offset: int, limit: int) -> Tuple[List[Currency], int]:
        query = select(Currency)

        if filters.search:
            pattern = f"%{filters.search}%"
            query = query.where(or_(Currency.code.ilike(pattern), Currency.name.ilike(pattern)))
        if filters.active is not None:
            query = query.where(Currency.active == filters.active)

        query = query.order_by(Currency.code)
        return await self.paginate(query, offset, limit)

    async def list_active(self) -> List[Currency]:
        currencies = await self.all(
            select(Currency).where(Currency.active.is_(True)).order_by(Currency.code)
        )
        return list(currencies)

    async def get_default_functional(self, exclude_code: Optional[str] = None) -> Optional[Currency]:
        query = select(Currency).where(Currency.is_default_functional.is_(True))
        if exclude_code is not None:
            query = query.where(Currency.code != exclude_code)
        return await self.db.scalar(query.limit(1))

    async def count_usages(self, code: str) -> int:
        """Empresas, grupos y tipos de cambio que referencian la moneda"""
        companies = await self.db.scalar(
            select(func.count(Company.id)).where(Company.functional_currency == code)
        )
        groups = await self.db.scalar(
            select(func.count(EconomicGroup.id)).where(EconomicGroup.base_currency == code)
        )
        rates = await self.db.scalar(
            select(func.count(ExchangeRate.id)).where(
                or_(ExchangeRate.source_currency == code, ExchangeRate.target_currency == code)
            )
        )
        return (companies or 0) + (groups or 0) + (rates or 0)


class ExchangeRateRepository(BaseRepository[ExchangeRate]):
    model = ExchangeRate

    async def list(
        self,
        filters: ExchangeRateFilter,
        user_id: int,
        offset: int,
        limit: int
    ) -> Tuple[List[ExchangeRate], int]:
        query = select(ExchangeRate)

        if filters.economic_group_id is not None:
            query = query.where(ExchangeRate.economic_group_id == filters.economic_group_id)
        else:
            query = query.where(ExchangeRate.economic_group_id.in_(member_group_ids(user_id)))

        if filters.source_currency:
            query = query.where(ExchangeRate.source_currency == filters.source_currency)
        if filters.target_currency:
            query = query.where(ExchangeRate.target_currency == filters.target_currency)
        if filters.date_from:
            query = query.where(ExchangeRate.date >= filters.date_from)
        if filters.date_to:
            query = query.where(ExchangeRate.date <= filters.date_to)

        query = query.order_by(ExchangeRate.date.desc(), ExchangeRate.source_currency, ExchangeRate.id)
        return await self.paginate(query, offset, limit)

    async def list_by_group(self, group_id: int) -> List[ExchangeRate]:
        rates = await self.all(
            select(ExchangeRate)
            .where(ExchangeRate.economic_group_id == group_id)
            .order_by(ExchangeRate.date.desc(), ExchangeRate.source_currency)
        )
        return list(rates)

    async def rate_exists(self, group_id: int, rate_date, source_currency: str, target_currency: str) -> bool:
        return await self.exists(
            ExchangeRate.economic_group_id == group_id,
            ExchangeRate.date == rate_date,
            ExchangeRate.source_currency == source_currency,
            ExchangeRate.target_currency == target_currency
        )
