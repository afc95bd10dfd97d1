from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import AliasChoices, Field

from kontaflow.models.user import UserRole
from kontaflow.schemas.common import CamelModel, InputModel
from kontaflow.utils.validators import Country, CurrencyCode


class EconomicGroupCreate(InputModel):
    """Schema para crear grupos económicos"""
    name: str = Field(..., min_length=3, max_length=200, description="Nombre del grupo")
    main_country: Country = Field(..., description="País principal")
    base_currency: CurrencyCode = Field(..., description="Moneda base del grupo")


class EconomicGroupUpdate(InputModel):
    """Schema para actualizar grupos económicos"""
    name: Optional[str] = Field(None, min_length=3, max_length=200)
    main_country: Optional[Country] = None
    base_currency: Optional[CurrencyCode] = None
    active: Optional[bool] = None


class EconomicGroupCounts(CamelModel):
    companies: int = 0
    customers: int = 0
    suppliers: int = 0


class EconomicGroupRead(CamelModel):
    """Schema para leer grupos económicos"""
    id: int
    name: str
    main_country: str
    base_currency: str
    active: bool
    created_at: datetime
    updated_at: datetime
    count: Optional[EconomicGroupCounts] = Field(
        None,
        validation_alias=AliasChoices("_count", "counts"),
        serialization_alias="_count"
    )


class EconomicGroupMembership(CamelModel):
    """Grupo del usuario autenticado junto con su rol"""
    role: UserRole
    economic_group: EconomicGroupRead


class AccountingConfigurationRead(CamelModel):
    id: int
    economic_group_id: int
    allow_entries_in_closed_period: bool
    require_global_approval: bool
    minimum_approval_amount: Decimal
    allow_unbalanced_entries: bool
    amount_decimals: int
    exchange_rate_decimals: int
