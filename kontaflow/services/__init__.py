# Importar todos los servicios
from kontaflow.services.account_service import AccountService
from kontaflow.services.accounting_period_service import AccountingPeriodService
from kontaflow.services.chart_of_accounts_service import ChartOfAccountsService
from kontaflow.services.company_service import CompanyService
from kontaflow.services.currency_service import CurrencyService
from kontaflow.services.economic_group_service import EconomicGroupService
from kontaflow.services.exchange_rate_service import ExchangeRateService
from kontaflow.services.journal_entry_service import JournalEntryService
from kontaflow.services.third_party_service import CustomerService, SupplierService
from kontaflow.services.user_company_service import UserCompanyService

__all__ = [
    "AccountService",
    "AccountingPeriodService",
    "ChartOfAccountsService",
    "CompanyService",
    "CurrencyService",
    "CustomerService",
    "EconomicGroupService",
    "ExchangeRateService",
    "JournalEntryService",
    "SupplierService",
    "UserCompanyService",
]
