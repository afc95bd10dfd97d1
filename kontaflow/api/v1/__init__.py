"""
API v1 router configuration.
"""
from fastapi import APIRouter

from kontaflow.api.v1 import (
    accounting_periods, accounts, charts_of_accounts, companies, currencies,
    customers, economic_groups, exchange_rates, suppliers, user_companies
)

api_router = APIRouter()

# Economic group routes
api_router.include_router(economic_groups.router, prefix="/economic-groups", tags=["economic-groups"])

# Company routes
api_router.include_router(companies.router, prefix="/companies", tags=["companies"])

# Chart of accounts routes
api_router.include_router(charts_of_accounts.router, prefix="/charts-of-accounts", tags=["charts-of-accounts"])

# Account routes
api_router.include_router(accounts.router, prefix="/accounts", tags=["accounts"])

# Accounting period routes
api_router.include_router(accounting_periods.router, prefix="/accounting-periods", tags=["accounting-periods"])

# Third party routes
api_router.include_router(customers.router, prefix="/customers", tags=["customers"])
api_router.include_router(suppliers.router, prefix="/suppliers", tags=["suppliers"])

# Currency routes
api_router.include_router(exchange_rates.router, prefix="/exchange-rates", tags=["exchange-rates"])
api_router.include_router(currencies.router, prefix="/currencies", tags=["currencies"])

# Permission routes
api_router.include_router(user_companies.router, prefix="/user-companies", tags=["user-companies"])
