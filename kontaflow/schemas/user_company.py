from datetime import datetime
from typing import Optional

from pydantic import Field

from kontaflow.schemas.common import CamelModel, InputModel


class UserCompanyCreate(InputModel):
    """Otorga acceso de un usuario a una empresa"""
    user_id: int = Field(..., gt=0)
    company_id: int = Field(..., gt=0)
    can_write: bool = False


class UserCompanyUpdate(InputModel):
    can_write: bool


class UserCompanyFilter(CamelModel):
    user_id: Optional[int] = None
    company_id: Optional[int] = None
    can_write: Optional[bool] = None


class UserSummary(CamelModel):
    id: int
    email: str
    name: str


class CompanySummary(CamelModel):
    id: int
    name: str
    rut: str
    economic_group_id: int


class UserCompanyRead(CamelModel):
    id: int
    user_id: int
    company_id: int
    can_write: bool
    created_at: datetime
    updated_at: datetime
    user: Optional[UserSummary] = None
    company: Optional[CompanySummary] = None
