from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, Field

from kontaflow.models.account import (
    AccountCurrency, AccountNature, AccountType, AuxiliaryType, IFRSCategory, ValuationMethod
)
from kontaflow.schemas.common import CamelModel, InputModel

CODE_REGEX = r"^[0-9.]+$"


# Esquemas base
class AccountCreate(InputModel):
    """Schema para crear cuentas contables"""
    chart_of_accounts_id: int = Field(..., gt=0, description="Plan de cuentas")
    code: str = Field(..., min_length=1, max_length=50, pattern=CODE_REGEX, description="Sólo dígitos y puntos")
    name: str = Field(..., min_length=3, max_length=255)
    parent_account_id: Optional[int] = Field(None, gt=0, description="Cuenta padre")
    type: AccountType
    level: int = Field(..., ge=1, le=10)
    postable: bool = Field(True, description="Si admite imputaciones (cuenta hoja)")
    requires_auxiliary: bool = False
    auxiliary_type: Optional[AuxiliaryType] = None
    currency: AccountCurrency = AccountCurrency.FUNCTIONAL
    nature: Optional[AccountNature] = None
    ifrs_category: Optional[IFRSCategory] = None
    valuation_method: Optional[ValuationMethod] = None


class AccountUpdate(InputModel):
    """Schema para actualizar cuentas contables"""
    code: Optional[str] = Field(None, min_length=1, max_length=50, pattern=CODE_REGEX)
    name: Optional[str] = Field(None, min_length=3, max_length=255)
    parent_account_id: Optional[int] = Field(None, gt=0)
    type: Optional[AccountType] = None
    level: Optional[int] = Field(None, ge=1, le=10)
    postable: Optional[bool] = None
    requires_auxiliary: Optional[bool] = None
    auxiliary_type: Optional[AuxiliaryType] = None
    currency: Optional[AccountCurrency] = None
    nature: Optional[AccountNature] = None
    ifrs_category: Optional[IFRSCategory] = None
    valuation_method: Optional[ValuationMethod] = None
    active: Optional[bool] = None


class AccountFilter(CamelModel):
    search: Optional[str] = None
    chart_of_accounts_id: Optional[int] = None
    type: Optional[AccountType] = None
    level: Optional[int] = None
    postable: Optional[bool] = None
    active: Optional[bool] = None
    parent_account_id: Optional[int] = None


class AccountCounts(CamelModel):
    subaccounts: int = 0


class AccountRead(CamelModel):
    """Schema para leer cuentas contables"""
    id: int
    chart_of_accounts_id: int
    code: str
    name: str
    parent_account_id: Optional[int]
    type: AccountType
    level: int
    postable: bool
    requires_auxiliary: bool
    auxiliary_type: Optional[AuxiliaryType]
    currency: AccountCurrency
    nature: Optional[AccountNature]
    ifrs_category: Optional[IFRSCategory]
    valuation_method: Optional[ValuationMethod]
    active: bool
    created_at: datetime
    updated_at: datetime
    count: Optional[AccountCounts] = Field(
        None,
        validation_alias=AliasChoices("_count", "counts"),
        serialization_alias="_count"
    )


class AccountSummary(CamelModel):
    id: int
    code: str
    name: str
    level: int


class AccountDetail(AccountRead):
    """Cuenta con el resumen de su cuenta padre"""
    parent_account: Optional[AccountSummary] = None


class AccountTree(CamelModel):
    """Schema para representar la jerarquía de cuentas"""
    id: int
    code: str
    name: str
    type: AccountType
    level: int
    postable: bool
    parent_account_id: Optional[int]
    subaccounts: List['AccountTree'] = Field(default_factory=list)


AccountTree.model_rebuild()
