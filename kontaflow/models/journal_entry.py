from datetime import date as date_type
from decimal import Decimal
from enum import Enum
from typing import List, Optional, TYPE_CHECKING

from sqlalchemy import Date, Enum as SQLEnum, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kontaflow.models.account import AccountType, AuxiliaryType
from kontaflow.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from kontaflow.models.account import Account
    from kontaflow.models.company import Company


class EntryStatus(str, Enum):
    """Estados del asiento contable"""
    DRAFT = "DRAFT"
    PENDING_APPROVAL = "PENDING_APPROVAL"
    CONFIRMED = "CONFIRMED"
    REVERSED = "REVERSED"
    CANCELLED = "CANCELLED"


class EntryType(str, Enum):
    """Tipos de asiento"""
    OPENING = "OPENING"
    JOURNAL = "JOURNAL"
    ADJUSTMENT = "ADJUSTMENT"
    CLOSING = "CLOSING"


# Estados que impiden cerrar un período
OPEN_ENTRY_STATUSES = (EntryStatus.DRAFT, EntryStatus.PENDING_APPROVAL)


class JournalEntry(TimestampMixin, Base):
    """
    Asiento contable de una empresa
    """
    __tablename__ = "journal_entries"

    economic_group_id: Mapped[int] = mapped_column(ForeignKey("economic_groups.id"), index=True, nullable=False)
    company_id: Mapped[int] = mapped_column(ForeignKey("companies.id"), index=True, nullable=False)
    number: Mapped[int] = mapped_column(Integer, nullable=False)
    date: Mapped[date_type] = mapped_column(Date, index=True, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[EntryType] = mapped_column(SQLEnum(EntryType, name="entry_type"), default=EntryType.JOURNAL, nullable=False)
    status: Mapped[EntryStatus] = mapped_column(
        SQLEnum(EntryStatus, name="entry_status"),
        default=EntryStatus.DRAFT,
        index=True,
        nullable=False
    )
    created_by: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id"), nullable=True)

    company: Mapped["Company"] = relationship("Company", back_populates="journal_entries")
    lines: Mapped[List["EntryLine"]] = relationship(
        "EntryLine",
        back_populates="entry",
        cascade="all, delete-orphan",
        order_by="EntryLine.id"
    )

    def __repr__(self) -> str:
        return f"<JournalEntry(number={self.number}, status={self.status})>"


class EntryLine(TimestampMixin, Base):
    """Línea de asiento: débito o crédito sobre una cuenta"""
    __tablename__ = "entry_lines"

    entry_id: Mapped[int] = mapped_column(ForeignKey("journal_entries.id", ondelete="CASCADE"), index=True, nullable=False)
    account_id: Mapped[int] = mapped_column(ForeignKey("accounts.id"), index=True, nullable=False)
    debit: Mapped[Decimal] = mapped_column(Numeric(18, 2), default=Decimal("0"), nullable=False)
    credit: Mapped[Decimal] = mapped_column(Numeric(18, 2), default=Decimal("0"), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    exchange_rate: Mapped[Optional[Decimal]] = mapped_column(Numeric(18, 6), nullable=True)

    # Referencia auxiliar (cliente / proveedor)
    auxiliary_type: Mapped[Optional[AuxiliaryType]] = mapped_column(
        SQLEnum(AuxiliaryType, name="auxiliary_type"), nullable=True
    )
    auxiliary_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    auxiliary_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Copia de la cuenta al momento de registrar
    account_code: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    account_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    account_type: Mapped[Optional[AccountType]] = mapped_column(SQLEnum(AccountType, name="account_type"), nullable=True)
    note: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    entry: Mapped["JournalEntry"] = relationship("JournalEntry", back_populates="lines")
    account: Mapped["Account"] = relationship("Account", back_populates="entry_lines")
