"""
Esquemas de clientes y proveedores (misma forma)
"""
from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from kontaflow.schemas.common import CamelModel, InputModel


class ThirdPartyCreate(InputModel):
    """Schema base para crear terceros"""
    economic_group_id: int = Field(..., gt=0)
    name: str = Field(..., min_length=3, max_length=255)
    rut: Optional[str] = Field(None, min_length=3, max_length=50)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=500)


class ThirdPartyUpdate(InputModel):
    name: Optional[str] = Field(None, min_length=3, max_length=255)
    rut: Optional[str] = Field(None, min_length=3, max_length=50)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=500)
    active: Optional[bool] = None


class ThirdPartyFilter(CamelModel):
    search: Optional[str] = None
    active: Optional[bool] = None
    economic_group_id: Optional[int] = None


class ThirdPartyRead(CamelModel):
    id: int
    economic_group_id: int
    name: str
    rut: Optional[str]
    email: Optional[str]
    phone: Optional[str]
    address: Optional[str]
    active: bool
    created_at: datetime
    updated_at: datetime


class CustomerCreate(ThirdPartyCreate):
    """Schema para crear clientes"""


class CustomerUpdate(ThirdPartyUpdate):
    """Schema para actualizar clientes"""


class CustomerRead(ThirdPartyRead):
    pass


class SupplierCreate(ThirdPartyCreate):
    """Schema para crear proveedores"""


class SupplierUpdate(ThirdPartyUpdate):
    """Schema para actualizar proveedores"""


class SupplierRead(ThirdPartyRead):
    pass
