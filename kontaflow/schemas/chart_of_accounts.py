from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, Field

from kontaflow.schemas.common import CamelModel, InputModel


class ChartOfAccountsCreate(InputModel):
    economic_group_id: int = Field(..., gt=0)
    name: str = Field(..., min_length=3, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)


class ChartOfAccountsUpdate(InputModel):
    name: Optional[str] = Field(None, min_length=3, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    active: Optional[bool] = None


class ChartOfAccountsFilter(CamelModel):
    search: Optional[str] = None
    economic_group_id: Optional[int] = None
    active: Optional[bool] = None


class ChartCounts(CamelModel):
    accounts: int = 0


class ChartOfAccountsRead(CamelModel):
    """Schema para leer planes de cuentas"""
    id: int
    economic_group_id: int
    name: str
    description: Optional[str]
    active: bool
    created_at: datetime
    updated_at: datetime
    count: Optional[ChartCounts] = Field(
        None,
        validation_alias=AliasChoices("_count", "counts"),
        serialization_alias="_count"
    )
