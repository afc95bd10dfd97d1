"""
Esquemas de monedas y tipos de cambio
"""
from datetime import date as date_type, datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field

from kontaflow.schemas.common import CamelModel, InputModel

CURRENCY_REGEX = r"^[A-Z]{3}$"
MAX_RATE = Decimal("999999.9999")


# ====================
# Monedas
# ====================

class CurrencyCreate(InputModel):
    """Schema para crear monedas"""
    code: str = Field(..., min_length=3, max_length=3, description="Código ISO 4217")
    name: str = Field(..., min_length=1, max_length=100)
    symbol: Optional[str] = Field(None, max_length=10)
    decimals: int = Field(2, ge=0, le=4)
    active: bool = True
    is_default_functional: bool = False


class CurrencyUpdate(InputModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    symbol: Optional[str] = Field(None, max_length=10)
    decimals: Optional[int] = Field(None, ge=0, le=4)
    active: Optional[bool] = None
    is_default_functional: Optional[bool] = None


class CurrencyFilter(CamelModel):
    search: Optional[str] = None
    active: Optional[bool] = None


class CurrencyRead(CamelModel):
    code: str
    name: str
    symbol: Optional[str]
    decimals: int
    active: bool
    is_default_functional: bool
    created_at: datetime
    updated_at: datetime


# ====================
# Tipos de cambio
# ====================

class ExchangeRateCreate(InputModel):
    """Schema para crear tipos de cambio"""
    economic_group_id: int = Field(..., gt=0)
    date: date_type = Field(..., description="Fecha de la cotización (YYYY-MM-DD)")
    source_currency: str = Field(..., pattern=CURRENCY_REGEX)
    target_currency: str = Field(..., pattern=CURRENCY_REGEX)
    rate: Decimal = Field(..., gt=0, le=MAX_RATE, decimal_places=6)
    source: Optional[str] = Field(None, max_length=100)


class ExchangeRateUpdate(InputModel):
    """Sólo la cotización y su fuente son modificables"""
    rate: Optional[Decimal] = Field(None, gt=0, le=MAX_RATE, decimal_places=6)
    source: Optional[str] = Field(None, max_length=100)


class ExchangeRateFilter(CamelModel):
    economic_group_id: Optional[int] = None
    source_currency: Optional[str] = None
    target_currency: Optional[str] = None
    date_from: Optional[date_type] = None
    date_to: Optional[date_type] = None


class ExchangeRateRead(CamelModel):
    id: int
    economic_group_id: int
    date: date_type
    source_currency: str
    target_currency: str
    rate: Decimal
    source: Optional[str]
    created_at: datetime
    updated_at: datetime
