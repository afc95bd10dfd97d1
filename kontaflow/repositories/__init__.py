from kontaflow.repositories.account import AccountRepository
from kontaflow.repositories.accounting_period import AccountingPeriodRepository
from kontaflow.repositories.chart_of_accounts import ChartOfAccountsRepository
from kontaflow.repositories.company import CompanyRepository
from kontaflow.repositories.currency import CurrencyRepository, ExchangeRateRepository
from kontaflow.repositories.economic_group import EconomicGroupRepository, member_group_ids
from kontaflow.repositories.third_party import CustomerRepository, SupplierRepository
from kontaflow.repositories.user import UserRepository
from kontaflow.repositories.user_company import UserCompanyRepository

__all__ = [
    "AccountRepository",
    "AccountingPeriodRepository",
    "ChartOfAccountsRepository",
    "CompanyRepository",
    "CurrencyRepository",
    "CustomerRepository",
    "EconomicGroupRepository",
    "ExchangeRateRepository",
    "SupplierRepository",
    "UserCompanyRepository",
    "UserRepository",
    "member_group_ids",
]
