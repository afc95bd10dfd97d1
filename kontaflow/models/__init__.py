# Importar todos los modelos para que SQLAlchemy los reconozca
from kontaflow.models.base import Base
from kontaflow.models.user import User, UserGroup, UserRole
from kontaflow.models.economic_group import EconomicGroup, AccountingConfiguration
from kontaflow.models.company import Company
from kontaflow.models.chart_of_accounts import ChartOfAccounts
from kontaflow.models.account import (
    Account, AccountType, AuxiliaryType, AccountCurrency, AccountNature,
    IFRSCategory, ValuationMethod
)
from kontaflow.models.accounting_period import AccountingPeriod, PeriodType
from kontaflow.models.third_party import Customer, Supplier
from kontaflow.models.currency import Currency, ExchangeRate
from kontaflow.models.journal_entry import (
    JournalEntry, EntryLine, EntryStatus, EntryType, OPEN_ENTRY_STATUSES
)
from kontaflow.models.obligation import (
    Obligation, Installment, Payment, ObligationType, ObligationStatus, InstallmentStatus
)
from kontaflow.models.user_company import UserCompany

from sqlalchemy import func, select
from sqlalchemy.orm import column_property

# Totales calculados (_count). Van después de importar todos los modelos:
# nada aquí debe configurar los mappers antes de que existan todos.
_subaccounts = Account.__table__.alias("subaccounts")

Account.subaccount_count = column_property(
    select(func.count(_subaccounts.c.id))
    .where(_subaccounts.c.parent_account_id == Account.__table__.c.id)
    .correlate_except(_subaccounts)
    .scalar_subquery()
)

ChartOfAccounts.account_count = column_property(
    select(func.count(Account.id))
    .where(Account.chart_of_accounts_id == ChartOfAccounts.id)
    .correlate_except(Account)
    .scalar_subquery()
)

EconomicGroup.company_count = column_property(
    select(func.count(Company.id))
    .where(Company.economic_group_id == EconomicGroup.id)
    .correlate_except(Company)
    .scalar_subquery()
)

EconomicGroup.customer_count = column_property(
    select(func.count(Customer.id))
    .where(Customer.economic_group_id == EconomicGroup.id)
    .correlate_except(Customer)
    .scalar_subquery()
)

EconomicGroup.supplier_count = column_property(
    select(func.count(Supplier.id))
    .where(Supplier.economic_group_id == EconomicGroup.id)
    .correlate_except(Supplier)
    .scalar_subquery()
)

# Exportar para facilitar importaciones
__all__ = [
    "Base",
    "User",
    "UserGroup",
    "UserRole",
    "EconomicGroup",
    "AccountingConfiguration",
    "Company",
    "ChartOfAccounts",
    "Account",
    "AccountType",
    "AuxiliaryType",
    "AccountCurrency",
    "AccountNature",
    "IFRSCategory",
    "ValuationMethod",
    "AccountingPeriod",
    "PeriodType",
    "Customer",
    "Supplier",
    "Currency",
    "ExchangeRate",
    "JournalEntry",
    "EntryLine",
    "EntryStatus",
    "EntryType",
    "OPEN_ENTRY_STATUSES",
    "Obligation",
    "Installment",
    "Payment",
    "ObligationType",
    "ObligationStatus",
    "InstallmentStatus",
    "UserCompany",
]
