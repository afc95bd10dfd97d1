# Importar todos los esquemas
from kontaflow.schemas.common import (
    CamelModel, InputModel, DataResponse, MessageResponse, DeleteResponse, ErrorResponse
)
from kontaflow.schemas.economic_group import (
    EconomicGroupCreate, EconomicGroupUpdate, EconomicGroupRead, EconomicGroupMembership,
    AccountingConfigurationRead
)
from kontaflow.schemas.company import CompanyCreate, CompanyUpdate, CompanyFilter, CompanyRead
from kontaflow.schemas.chart_of_accounts import (
    ChartOfAccountsCreate, ChartOfAccountsUpdate, ChartOfAccountsFilter, ChartOfAccountsRead
)
from kontaflow.schemas.account import (
    AccountCreate, AccountUpdate, AccountFilter, AccountRead, AccountDetail, AccountTree
)
from kontaflow.schemas.accounting_period import (
    AccountingPeriodCreate, AccountingPeriodUpdate, AccountingPeriodFilter, AccountingPeriodRead
)
from kontaflow.schemas.third_party import (
    ThirdPartyFilter, CustomerCreate, CustomerUpdate, CustomerRead,
    SupplierCreate, SupplierUpdate, SupplierRead
)
from kontaflow.schemas.currency import (
    CurrencyCreate, CurrencyUpdate, CurrencyFilter, CurrencyRead,
    ExchangeRateCreate, ExchangeRateUpdate, ExchangeRateFilter, ExchangeRateRead
)
from kontaflow.schemas.user_company import (
    UserCompanyCreate, UserCompanyUpdate, UserCompanyFilter, UserCompanyRead
)
from kontaflow.schemas.journal_entry import EntryLineInput, JournalEntryInput
from kontaflow.schemas.user import CurrentUser
