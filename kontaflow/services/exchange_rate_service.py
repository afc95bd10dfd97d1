from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from kontaflow.models.currency import ExchangeRate
from kontaflow.models.economic_group import EconomicGroup
from kontaflow.repositories.currency import ExchangeRateRepository
from kontaflow.schemas.currency import ExchangeRateCreate, ExchangeRateFilter, ExchangeRateUpdate
from kontaflow.services.economic_group_service import ensure_group_access, get_accessible_group
from kontaflow.utils.exceptions import BusinessRuleError, NotFoundError
from kontaflow.utils.logging import get_logger
from kontaflow.utils.validators import is_future_date

logger = get_logger(__name__)

RATE_ACCESS_DENIED = "You do not have access to this exchange rate"


def validate_rate_value(rate: Decimal) -> None:
    if rate <= 0:
        raise BusinessRuleError("Exchange rate must be greater than 0", "INVALID_RATE")


def validate_rate_currencies(
    group: EconomicGroup,
    source_currency: str,
    target_currency: str,
    rate_date: date,
    today: Optional[date] = None
) -> None:
    """
    La cotización va de una moneda distinta hacia la moneda base del
    grupo y no puede ser de una fecha futura.
    """
    if source_currency == target_currency:
        raise BusinessRuleError("Source and target currencies must be different", "SAME_CURRENCIES")

    if target_currency != group.base_currency:
        raise BusinessRuleError(
            f"Target currency must be the economic group's base currency ({group.base_currency})",
            "INVALID_TARGET_CURRENCY"
        )

    if is_future_date(rate_date, today):
        raise BusinessRuleError("Exchange rate date cannot be in the future", "FUTURE_DATE")


class ExchangeRateService:
    """Servicio para tipos de cambio de un grupo económico"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = ExchangeRateRepository(db)

    async def list_rates(
        self,
        filters: ExchangeRateFilter,
        user_id: int,
        offset: int,
        limit: int
    ) -> Tuple[List[ExchangeRate], int]:
        if filters.economic_group_id is not None:
            await ensure_group_access(self.db, filters.economic_group_id, user_id)
        return await self.repository.list(filters, user_id, offset, limit)

    async def list_by_group(self, group_id: int, user_id: int) -> List[ExchangeRate]:
        await get_accessible_group(self.db, group_id, user_id)
        return await self.repository.list_by_group(group_id)

    async def get_rate(self, rate_id: int, user_id: int) -> ExchangeRate:
        rate = await self.repository.get_by_id(rate_id)
        if rate is None:
            raise NotFoundError("Exchange Rate", rate_id)
        await ensure_group_access(self.db, rate.economic_group_id, user_id, RATE_ACCESS_DENIED)
        return rate

    async def create_rate(self, data: ExchangeRateCreate, user_id: int) -> ExchangeRate:
        group = await get_accessible_group(self.db, data.economic_group_id, user_id)

        if not group.active:
            raise BusinessRuleError(
                "Cannot create exchange rates for an inactive economic group",
                "INACTIVE_ECONOMIC_GROUP"
            )

        validate_rate_value(data.rate)
        validate_rate_currencies(group, data.source_currency, data.target_currency, data.date)

        if await self.repository.rate_exists(
            data.economic_group_id, data.date, data.source_currency, data.target_currency
        ):
            raise BusinessRuleError(
                "An exchange rate for this date and currency pair already exists",
                "DUPLICATE_EXCHANGE_RATE"
            )

        rate = ExchangeRate(**data.model_dump())
        await self.repository.add(rate)
        await self.db.commit()
        await self.db.refresh(rate)

        logger.info(
            f"Exchange rate created: id={rate.id} {rate.source_currency}->{rate.target_currency} {rate.date}"
        )
        return rate

    async def update_rate(self, rate_id: int, data: ExchangeRateUpdate, user_id: int) -> ExchangeRate:
        rate = await self.get_rate(rate_id, user_id)
        update_data = data.model_dump(exclude_unset=True)

        if "rate" in update_data:
            if update_data["rate"] is None:
                del update_data["rate"]
            else:
                validate_rate_value(update_data["rate"])

        await self.repository.update(rate, update_data)
        await self.db.commit()
        await self.db.refresh(rate)

        logger.info(f"Exchange rate updated: id={rate.id}")
        return rate

    async def delete_rate(self, rate_id: int, user_id: int) -> None:
        rate = await self.get_rate(rate_id, user_id)
        await self.repository.delete(rate)
        await self.db.commit()
        logger.info(f"Exchange rate deleted: id={rate_id}")
