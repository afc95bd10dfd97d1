"""
Obligaciones (cuentas a cobrar / pagar) con cuotas y pagos
"""
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from sqlalchemy import Date, Enum as SQLEnum, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kontaflow.models.account import AuxiliaryType
from kontaflow.models.base import Base, TimestampMixin


class ObligationType(str, Enum):
    RECEIVABLE = "RECEIVABLE"
    PAYABLE = "PAYABLE"


class ObligationStatus(str, Enum):
    ACTIVE = "ACTIVE"
    PAID = "PAID"
    CANCELLED = "CANCELLED"


class InstallmentStatus(str, Enum):
    PENDING = "PENDING"
    PARTIAL = "PARTIAL"
    PAID = "PAID"
    OVERDUE = "OVERDUE"


class Obligation(TimestampMixin, Base):
    """Deuda o crédito con un tercero, pagadero en cuotas"""
    __tablename__ = "obligations"

    economic_group_id: Mapped[int] = mapped_column(ForeignKey("economic_groups.id"), index=True, nullable=False)
    type: Mapped[ObligationType] = mapped_column(SQLEnum(ObligationType, name="obligation_type"), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    issue_date: Mapped[date] = mapped_column(Date, nullable=False)
    auxiliary_type: Mapped[Optional[AuxiliaryType]] = mapped_column(
        SQLEnum(AuxiliaryType, name="auxiliary_type"), nullable=True
    )
    auxiliary_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    status: Mapped[ObligationStatus] = mapped_column(
        SQLEnum(ObligationStatus, name="obligation_status"),
        default=ObligationStatus.ACTIVE,
        nullable=False
    )

    installments: Mapped[List["Installment"]] = relationship(
        "Installment",
        back_populates="obligation",
        cascade="all, delete-orphan",
        order_by="Installment.installment_number"
    )
    payments: Mapped[List["Payment"]] = relationship(
        "Payment",
        back_populates="obligation",
        cascade="all, delete-orphan"
    )


class Installment(TimestampMixin, Base):
    """Cuota de una obligación"""
    __tablename__ = "obligation_installments"
    __table_args__ = (
        UniqueConstraint("obligation_id", "installment_number"),
    )

    obligation_id: Mapped[int] = mapped_column(ForeignKey("obligations.id", ondelete="CASCADE"), index=True, nullable=False)
    installment_number: Mapped[int] = mapped_column(Integer, nullable=False)
    due_date: Mapped[date] = mapped_column(Date, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    paid_amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), default=Decimal("0"), nullable=False)
    status: Mapped[InstallmentStatus] = mapped_column(
        SQLEnum(InstallmentStatus, name="installment_status"),
        default=InstallmentStatus.PENDING,
        nullable=False
    )

    obligation: Mapped["Obligation"] = relationship("Obligation", back_populates="installments")


class Payment(TimestampMixin, Base):
    """Pago o cobro aplicado a una obligación"""
    __tablename__ = "obligation_payments"

    obligation_id: Mapped[int] = mapped_column(ForeignKey("obligations.id", ondelete="CASCADE"), index=True, nullable=False)
    installment_id: Mapped[Optional[int]] = mapped_column(ForeignKey("obligation_installments.id"), nullable=True)
    payment_date: Mapped[date] = mapped_column(Date, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    exchange_rate: Mapped[Optional[Decimal]] = mapped_column(Numeric(18, 6), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    obligation: Mapped["Obligation"] = relationship("Obligation", back_populates="payments")
