from datetime import date, datetime
from typing import Optional

from pydantic import Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from kontaflow.models.accounting_period import PeriodType
from kontaflow.schemas.common import CamelModel, InputModel


class AccountingPeriodCreate(InputModel):
    """
    Schema para crear períodos contables.

    Las reglas cruzadas se validan por campo para que el error quede
    asociado a ``month`` o ``endDate``.
    """
    economic_group_id: int = Field(..., gt=0)
    type: PeriodType
    fiscal_year: int = Field(..., ge=2000, le=2100)
    start_date: date
    end_date: date
    month: Optional[int] = Field(None, ge=1, le=12, validate_default=True)

    @field_validator('end_date')
    @classmethod
    def validate_date_range(cls, v: date, info: ValidationInfo) -> date:
        start = info.data.get('start_date')
        if start is not None and start >= v:
            raise PydanticCustomError("INVALID_DATE_RANGE", "Start date must be before end date")
        return v

    @field_validator('month')
    @classmethod
    def validate_month_for_type(cls, v: Optional[int], info: ValidationInfo) -> Optional[int]:
        period_type = info.data.get('type')
        if period_type == PeriodType.MONTH and v is None:
            raise PydanticCustomError("MISSING_MONTH", "Month is required for MONTH type periods")
        if period_type == PeriodType.FISCAL_YEAR and v is not None:
            raise PydanticCustomError(
                "INVALID_FISCAL_YEAR_MONTH", "Month should not be set for FISCAL_YEAR type periods"
            )
        return v


class AccountingPeriodUpdate(InputModel):
    """Sólo se puede modificar el estado de cierre"""
    closed: Optional[bool] = None


class AccountingPeriodFilter(CamelModel):
    economic_group_id: Optional[int] = None
    type: Optional[PeriodType] = None
    fiscal_year: Optional[int] = None
    closed: Optional[bool] = None


class AccountingPeriodRead(CamelModel):
    id: int
    economic_group_id: int
    type: PeriodType
    fiscal_year: int
    month: Optional[int]
    start_date: date
    end_date: date
    closed: bool
    closed_at: Optional[datetime]
    closed_by: Optional[int]
    created_at: datetime
    updated_at: datetime
