"""
Servicio del catálogo de monedas
"""
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from kontaflow.models.currency import Currency
from kontaflow.repositories.currency import CurrencyRepository
from kontaflow.schemas.currency import CurrencyCreate, CurrencyFilter, CurrencyUpdate
from kontaflow.utils.exceptions import BusinessRuleError, ConflictError, NotFoundError
from kontaflow.utils.logging import get_logger
from kontaflow.utils.validators import CURRENCY_CODE_PATTERN

logger = get_logger(__name__)


class CurrencyService:
    """Servicio para el catálogo global de monedas (ISO 4217)"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = CurrencyRepository(db)

    async def _ensure_single_default(self, exclude_code: Optional[str] = None) -> None:
        """Sólo una moneda puede ser la funcional por defecto"""
        current_default = await self.repository.get_default_functional(exclude_code)
        if current_default is not None:
            raise BusinessRuleError(
                f"Currency {current_default.code} is already set as default functional currency. "
                "Please unset it first before setting a new default.",
                "MULTIPLE_DEFAULT_FUNCTIONAL"
            )

    async def list_currencies(self, filters: CurrencyFilter, offset: int, limit: int) -> Tuple[List[Currency], int]:
        return await self.repository.list(filters, offset, limit)

    async def list_active(self) -> List[Currency]:
        return await self.repository.list_active()

    async def get_currency(self, code: str) -> Currency:
        currency = await self.repository.get_by_id(code)
        if currency is None:
            raise NotFoundError("Currency", code)
        return currency

    async def create_currency(self, data: CurrencyCreate) -> Currency:
        if not CURRENCY_CODE_PATTERN.match(data.code):
            raise BusinessRuleError(
                "Currency code must follow ISO 4217 standard (3 uppercase letters)",
                "INVALID_CURRENCY_CODE"
            )

        if await self.repository.get_by_id(data.code) is not None:
            raise ConflictError(f"Currency with code {data.code} already exists", "code")

        if data.is_default_functional:
            await self._ensure_single_default()

        currency = Currency(**data.model_dump())
        await self.repository.add(currency)
        await self.db.commit()
        await self.db.refresh(currency)

        logger.info(f"Currency created: code={currency.code}")
        return currency

    async def update_currency(self, code: str, data: CurrencyUpdate) -> Currency:
        currency = await self.get_currency(code)
        update_data = data.model_dump(exclude_unset=True)
        for field in ("name", "decimals", "active", "is_default_functional"):
            if field in update_data and update_data[field] is None:
                del update_data[field]

        if update_data.get("is_default_functional") and not currency.is_default_functional:
            await self._ensure_single_default(exclude_code=code)

        if update_data.get("active") is False and currency.active:
            if await self.repository.count_usages(code) > 0:
                raise BusinessRuleError(
                    f"Cannot deactivate currency {code} because it is currently in use by companies, "
                    "economic groups, or exchange rates",
                    "CURRENCY_IN_USE"
                )

        await self.repository.update(currency, update_data)
        await self.db.commit()
        await self.db.refresh(currency)

        logger.info(f"Currency updated: code={code}")
        return currency

    async def delete_currency(self, code: str) -> None:
        currency = await self.get_currency(code)

        if currency.is_default_functional:
            raise BusinessRuleError(
                f"Cannot delete the default functional currency {code}. Please set another currency as default first.",
                "DELETE_DEFAULT_FUNCTIONAL"
            )

        if await self.repository.count_usages(code) > 0:
            raise BusinessRuleError(
                f"Cannot delete currency {code} because it is currently in use by companies, economic groups, "
                "or exchange rates. Deactivate it instead if you want to prevent new usage.",
                "CURRENCY_IN_USE"
            )

        await self.repository.delete(currency)
        await self.db.commit()
        logger.info(f"Currency deleted: code={code}")
