from datetime import date, datetime
from typing import Optional

from pydantic import Field

from kontaflow.schemas.common import CamelModel, InputModel
from kontaflow.utils.validators import Country, CurrencyCode


class CompanyCreate(InputModel):
    """Schema para crear empresas"""
    economic_group_id: int = Field(..., gt=0, description="Grupo económico propietario")
    name: str = Field(..., min_length=3, max_length=200, description="Razón social")
    trade_name: Optional[str] = Field(None, max_length=200, description="Nombre comercial")
    rut: str = Field(..., min_length=8, max_length=20, description="Identificador fiscal")
    country: Country
    functional_currency: CurrencyCode
    start_date: Optional[date] = Field(None, description="Fecha de inicio de operaciones")


class CompanyUpdate(InputModel):
    """Schema para actualizar empresas"""
    name: Optional[str] = Field(None, min_length=3, max_length=200)
    trade_name: Optional[str] = Field(None, max_length=200)
    rut: Optional[str] = Field(None, min_length=8, max_length=20)
    country: Optional[Country] = None
    functional_currency: Optional[CurrencyCode] = None
    start_date: Optional[date] = None
    active: Optional[bool] = None


class CompanyFilter(CamelModel):
    search: Optional[str] = None
    active: Optional[bool] = None
    economic_group_id: Optional[int] = None
    country: Optional[Country] = None


class CompanyRead(CamelModel):
    """Schema para leer empresas"""
    id: int
    economic_group_id: int
    name: str
    trade_name: Optional[str]
    rut: str
    country: str
    functional_currency: str
    start_date: Optional[date]
    active: bool
    created_at: datetime
    updated_at: datetime
