from datetime import date as date_type
from decimal import Decimal
from typing import List, Optional

from pydantic import Field, model_validator

from kontaflow.models.account import AuxiliaryType
from kontaflow.models.journal_entry import EntryType
from kontaflow.schemas.common import InputModel


class EntryLineInput(InputModel):
    """Línea de asiento: exactamente uno de débito o crédito es positivo"""
    account_id: int = Field(..., gt=0)
    debit: Decimal = Field(Decimal("0"), ge=0, decimal_places=2)
    credit: Decimal = Field(Decimal("0"), ge=0, decimal_places=2)
    currency: str = Field(..., min_length=3, max_length=3)
    exchange_rate: Optional[Decimal] = Field(None, gt=0)
    auxiliary_type: Optional[AuxiliaryType] = None
    auxiliary_id: Optional[int] = None
    note: Optional[str] = Field(None, max_length=500)

    @model_validator(mode='after')
    def validate_one_side(self):
        if (self.debit > 0) == (self.credit > 0):
            raise ValueError("Each line must have either a debit or a credit amount")
        return self


class JournalEntryInput(InputModel):
    """Asiento a registrar en borrador"""
    company_id: int = Field(..., gt=0)
    date: date_type
    description: str = Field(..., min_length=3, max_length=1000)
    type: EntryType = EntryType.JOURNAL
    lines: List[EntryLineInput] = Field(..., min_length=2)
