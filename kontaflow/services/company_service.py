"""
Servicio para manejo de empresas de un grupo económico
"""
from typing import List, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from kontaflow.models.company import Company
from kontaflow.repositories.company import CompanyRepository
from kontaflow.schemas.company import CompanyCreate, CompanyFilter, CompanyUpdate
from kontaflow.services.economic_group_service import (
    ensure_currency_for_country, ensure_group_access, get_accessible_group
)
from kontaflow.utils.exceptions import BusinessRuleError, NotFoundError
from kontaflow.utils.logging import get_logger
from kontaflow.utils.validators import is_valid_rut

logger = get_logger(__name__)

COMPANY_ACCESS_DENIED = "You do not have access to this company"


class CompanyService:
    """Servicio para operaciones con empresas"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = CompanyRepository(db)

    async def _validate_company_data(self, name: str, country, rut: str, functional_currency) -> None:
        """Reglas de nombre, formato de RUT y compatibilidad país/moneda"""
        if len(name.strip()) < 3:
            raise BusinessRuleError("Name must be at least 3 characters")
        if not is_valid_rut(country, rut):
            raise BusinessRuleError("For Uruguay, RUT must be exactly 12 digits", "INVALID_RUT_FORMAT")
        ensure_currency_for_country(country, functional_currency)

    async def list_companies(
        self,
        filters: CompanyFilter,
        user_id: int,
        offset: int,
        limit: int
    ) -> Tuple[List[Company], int]:
        if filters.economic_group_id is not None:
            await ensure_group_access(self.db, filters.economic_group_id, user_id)
        return await self.repository.list(filters, user_id, offset, limit)

    async def list_by_group(self, group_id: int, user_id: int) -> List[Company]:
        await get_accessible_group(self.db, group_id, user_id)
        return await self.repository.list_by_group(group_id)

    async def get_company(self, company_id: int, user_id: int) -> Company:
        company = await self.repository.get_by_id(company_id)
        if company is None:
            raise NotFoundError("Company", company_id)
        await ensure_group_access(self.db, company.economic_group_id, user_id, COMPANY_ACCESS_DENIED)
        return company

    async def create_company(self, data: CompanyCreate, user_id: int) -> Company:
        """Crear una nueva empresa dentro de un grupo"""
        await get_accessible_group(self.db, data.economic_group_id, user_id)

        await self._validate_company_data(data.name, data.country, data.rut, data.functional_currency)

        # Validar que el RUT no exista en el grupo
        if await self.repository.rut_exists_in_group(data.economic_group_id, data.rut):
            raise BusinessRuleError(
                f"A company with RUT {data.rut} already exists in this economic group",
                "DUPLICATE_RUT"
            )

        company = Company(
            economic_group_id=data.economic_group_id,
            name=data.name,
            trade_name=data.trade_name,
            rut=data.rut,
            country=data.country.value,
            functional_currency=data.functional_currency.value,
            start_date=data.start_date,
            active=True
        )
        await self.repository.add(company)
        await self.db.commit()
        await self.db.refresh(company)

        logger.info(f"Company created: id={company.id} group={company.economic_group_id}")
        return company

    async def update_company(self, company_id: int, data: CompanyUpdate, user_id: int) -> Company:
        company = await self.get_company(company_id, user_id)
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        for field in ("country", "functional_currency"):
            if field in update_data:
                update_data[field] = update_data[field].value

        # Las reglas se evalúan sobre el registro resultante
        rut = update_data.get("rut", company.rut)
        await self._validate_company_data(
            update_data.get("name", company.name),
            update_data.get("country", company.country),
            rut,
            update_data.get("functional_currency", company.functional_currency)
        )

        if "rut" in update_data and await self.repository.rut_exists_in_group(
            company.economic_group_id, rut, exclude_id=company.id
        ):
            raise BusinessRuleError(
                f"A company with RUT {rut} already exists in this economic group",
                "DUPLICATE_RUT"
            )

        await self.repository.update(company, update_data)
        await self.db.commit()
        await self.db.refresh(company)

        logger.info(f"Company updated: id={company.id}")
        return company

    async def delete_company(self, company_id: int, user_id: int) -> None:
        """Baja lógica; se bloquea si la empresa tiene asientos"""
        company = await self.get_company(company_id, user_id)

        entry_count = await self.repository.count_journal_entries(company_id)
        if entry_count > 0:
            raise BusinessRuleError(
                f"Cannot delete a company with {entry_count} journal entries. You can deactivate it instead.",
                "HAS_JOURNAL_ENTRIES"
            )

        await self.repository.soft_delete(company)
        await self.db.commit()
        logger.info(f"Company deactivated: id={company_id}")
