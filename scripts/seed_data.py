#!/usr/bin/env python3
"""
Carga de datos de ejemplo
=========================

Crea un usuario administrador con un grupo económico uruguayo, dos
empresas, un plan de cuentas mínimo, los períodos de 2024, monedas,
cotizaciones, terceros y un asiento confirmado.

Las altas pasan por los servicios, de modo que se aplican las mismas
reglas que en la API. Ejecutar con la base migrada:

    alembic upgrade head
    python scripts/seed_data.py
"""

import asyncio
from calendar import monthrange
from datetime import date
from decimal import Decimal
from typing import Dict

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kontaflow.core.settings import settings
from kontaflow.database import AsyncSessionLocal
from kontaflow.models import User
from kontaflow.repositories.chart_of_accounts import ChartOfAccountsRepository
from kontaflow.schemas.account import AccountCreate
from kontaflow.schemas.accounting_period import AccountingPeriodCreate
from kontaflow.schemas.company import CompanyCreate
from kontaflow.schemas.currency import CurrencyCreate, ExchangeRateCreate
from kontaflow.schemas.economic_group import EconomicGroupCreate
from kontaflow.schemas.journal_entry import JournalEntryInput
from kontaflow.schemas.third_party import CustomerCreate, SupplierCreate
from kontaflow.services.account_service import AccountService
from kontaflow.services.accounting_period_service import AccountingPeriodService
from kontaflow.services.company_service import CompanyService
from kontaflow.services.currency_service import CurrencyService
from kontaflow.services.economic_group_service import EconomicGroupService
from kontaflow.services.exchange_rate_service import ExchangeRateService
from kontaflow.services.journal_entry_service import JournalEntryService
from kontaflow.services.third_party_service import CustomerService, SupplierService
from kontaflow.utils.logging import configure_logging, get_logger

logger = get_logger("seed_data")

ADMIN_EMAIL = "admin@kontaflow.local"

CURRENCIES = [
    {"code": "UYU", "name": "Peso uruguayo", "symbol": "$", "is_default_functional": True},
    {"code": "USD", "name": "Dólar estadounidense", "symbol": "US$"},
    {"code": "ARS", "name": "Peso argentino", "symbol": "AR$"},
    {"code": "EUR", "name": "Euro", "symbol": "€"},
]

# (código, nombre, tipo, padre, imputable, naturaleza)
ACCOUNTS = [
    ("1", "ACTIVO", "ASSET", None, False, "CURRENT"),
    ("1.1", "Caja y bancos", "ASSET", "1", True, "CURRENT"),
    ("1.2", "Deudores por ventas", "ASSET", "1", True, "CURRENT"),
    ("2", "PASIVO", "LIABILITY", None, False, "CURRENT"),
    ("2.1", "Proveedores", "LIABILITY", "2", True, "CURRENT"),
    ("3", "PATRIMONIO", "EQUITY", None, True, None),
    ("4", "INGRESOS", "INCOME", None, False, None),
    ("4.1", "Ventas", "INCOME", "4", True, None),
    ("5", "GASTOS", "EXPENSE", None, False, None),
    ("5.1", "Gastos de administración", "EXPENSE", "5", True, None),
]


async def get_or_create_admin(db: AsyncSession) -> User:
    user = await db.scalar(select(User).where(User.email == ADMIN_EMAIL))
    if user is None:
        user = User(email=ADMIN_EMAIL, name="Administrador", active=True)
        db.add(user)
        await db.commit()
        logger.info(f"Usuario creado: id={user.id} email={user.email}")
    return user


async def seed_currencies(db: AsyncSession) -> None:
    service = CurrencyService(db)
    for data in CURRENCIES:
        if await service.repository.get_by_id(data["code"]) is None:
            await service.create_currency(CurrencyCreate(**data))


async def seed_accounts(db: AsyncSession, chart_id: int, user_id: int) -> Dict[str, int]:
    service = AccountService(db)
    ids: Dict[str, int] = {}
    for code, name, account_type, parent, postable, nature in ACCOUNTS:
        account = await service.create_account(
            AccountCreate(
                chart_of_accounts_id=chart_id,
                code=code,
                name=name,
                type=account_type,
                parent_account_id=ids.get(parent),
                level=code.count(".") + 1,
                postable=postable,
                nature=nature
            ),
            user_id
        )
        ids[code] = account.id
    return ids


async def seed_periods(db: AsyncSession, group_id: int, user_id: int) -> None:
    service = AccountingPeriodService(db)
    await service.create_period(
        AccountingPeriodCreate(
            economic_group_id=group_id,
            type="FISCAL_YEAR",
            fiscal_year=2024,
            start_date=date(2024, 1, 1),
            end_date=date(2024, 12, 31)
        ),
        user_id
    )
    for month in range(1, 13):
        await service.create_period(
            AccountingPeriodCreate(
                economic_group_id=group_id,
                type="MONTH",
                fiscal_year=2024,
                month=month,
                start_date=date(2024, month, 1),
                end_date=date(2024, month, monthrange(2024, month)[1])
            ),
            user_id
        )


async def seed() -> None:
    async with AsyncSessionLocal() as db:
        admin = await get_or_create_admin(db)
        await seed_currencies(db)

        group_service = EconomicGroupService(db)
        existing, _ = await group_service.list_groups(admin.id, 0, 1)
        if existing:
            logger.info("El usuario ya tiene un grupo económico; no se cargan datos de ejemplo")
            return

        group = await group_service.create_group(
            EconomicGroupCreate(name="Grupo Demo", main_country="UY", base_currency="UYU"),
            admin.id
        )

        companies = CompanyService(db)
        main_company = await companies.create_company(
            CompanyCreate(
                economic_group_id=group.id,
                name="Demo Comercial S.A.",
                trade_name="Demo",
                rut="211111110019",
                country="UY",
                functional_currency="UYU",
                start_date=date(2024, 1, 1)
            ),
            admin.id
        )
        await companies.create_company(
            CompanyCreate(
                economic_group_id=group.id,
                name="Demo Servicios S.R.L.",
                rut="212222220015",
                country="UY",
                functional_currency="USD"
            ),
            admin.id
        )

        chart = await ChartOfAccountsRepository(db).get_by_group(group.id)
        account_ids = await seed_accounts(db, chart.id, admin.id)
        await seed_periods(db, group.id, admin.id)

        await CustomerService(db).create_item(
            CustomerCreate(economic_group_id=group.id, name="Cliente Mayorista", email="compras@mayorista.com.uy"),
            admin.id
        )
        await SupplierService(db).create_item(
            SupplierCreate(economic_group_id=group.id, name="Proveedor de Servicios", rut="213333330011"),
            admin.id
        )

        rates = ExchangeRateService(db)
        for source_currency, rate in (("USD", Decimal("39.1250")), ("EUR", Decimal("42.3800"))):
            await rates.create_rate(
                ExchangeRateCreate(
                    economic_group_id=group.id,
                    date=date(2024, 1, 2),
                    source_currency=source_currency,
                    target_currency="UYU",
                    rate=rate,
                    source="BCU"
                ),
                admin.id
            )

        journal = JournalEntryService(db)
        entry = await journal.create_draft(
            JournalEntryInput(
                company_id=main_company.id,
                date=date(2024, 1, 15),
                description="Venta de contado",
                lines=[
                    {"account_id": account_ids["1.1"], "debit": Decimal("12200.00"), "currency": "UYU"},
                    {"account_id": account_ids["4.1"], "credit": Decimal("12200.00"), "currency": "UYU"},
                ]
            ),
            admin.id
        )
        await journal.confirm(entry.id)

        logger.info(f"Datos de ejemplo cargados: grupo={group.id} usuario={admin.id}")
        logger.info(f"Usar la cabecera {settings.AUTH_USER_HEADER}: {admin.id}")


if __name__ == "__main__":
    configure_logging(settings.LOG_LEVEL)
    asyncio.run(seed())
