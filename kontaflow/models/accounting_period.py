from datetime import date, datetime
from enum import Enum
from typing import Optional, TYPE_CHECKING

from sqlalchemy import Boolean, Date, DateTime, Enum as SQLEnum, ForeignKey, Index, Integer, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kontaflow.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from kontaflow.models.economic_group import EconomicGroup


class PeriodType(str, Enum):
    """Tipo de período contable"""
    FISCAL_YEAR = "FISCAL_YEAR"
    MONTH = "MONTH"


class AccountingPeriod(TimestampMixin, Base):
    """
    Período contable (ejercicio o mes) de un grupo económico.

    Estados: abierto -> cerrado -> abierto (reapertura).
    """
    __tablename__ = "accounting_periods"
    __table_args__ = (
        UniqueConstraint("economic_group_id", "type", "fiscal_year", "month"),
        # month es NULL en los ejercicios y los NULL no colisionan en la restricción anterior
        Index(
            "uq_accounting_periods_fiscal_year",
            "economic_group_id",
            "fiscal_year",
            unique=True,
            postgresql_where=text("type = 'FISCAL_YEAR'"),
            sqlite_where=text("type = 'FISCAL_YEAR'")
        ),
    )

    economic_group_id: Mapped[int] = mapped_column(ForeignKey("economic_groups.id"), index=True, nullable=False)
    type: Mapped[PeriodType] = mapped_column(SQLEnum(PeriodType, name="period_type"), nullable=False)
    fiscal_year: Mapped[int] = mapped_column(Integer, nullable=False)
    month: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    closed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    closed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    closed_by: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id"), nullable=True)

    economic_group: Mapped["EconomicGroup"] = relationship("EconomicGroup")

    def __repr__(self) -> str:
        return f"<AccountingPeriod(type={self.type}, year={self.fiscal_year}, month={self.month})>"
