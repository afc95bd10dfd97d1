"""
Currency and Exchange Rate models for multi-currency support
"""
from datetime import date as date_type, datetime
from decimal import Decimal
from typing import Optional, TYPE_CHECKING

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kontaflow.models.base import Base, TimestampMixin, utcnow

if TYPE_CHECKING:
    from kontaflow.models.economic_group import EconomicGroup


class Currency(Base):
    """
    Catálogo de monedas (ISO 4217)
    """
    __tablename__ = "currencies"

    code: Mapped[str] = mapped_column(
        String(3),
        primary_key=True,
        comment="Código ISO 4217 de la moneda (USD, EUR, etc.)"
    )
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Nombre completo de la moneda"
    )
    symbol: Mapped[Optional[str]] = mapped_column(
        String(10),
        nullable=True,
        comment="Símbolo de la moneda ($, €, etc.)"
    )
    decimals: Mapped[int] = mapped_column(
        Integer,
        default=2,
        nullable=False,
        comment="Número de decimales para esta moneda"
    )
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_default_functional: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
        comment="Moneda funcional sugerida para nuevas empresas"
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<Currency(code='{self.code}', name='{self.name}')>"


class ExchangeRate(TimestampMixin, Base):
    """
    Tipo de cambio diario de un grupo económico hacia su moneda base
    """
    __tablename__ = "exchange_rates"
    __table_args__ = (
        UniqueConstraint("economic_group_id", "date", "source_currency", "target_currency"),
    )

    economic_group_id: Mapped[int] = mapped_column(ForeignKey("economic_groups.id"), index=True, nullable=False)
    date: Mapped[date_type] = mapped_column(Date, nullable=False, index=True)
    source_currency: Mapped[str] = mapped_column(String(3), nullable=False)
    target_currency: Mapped[str] = mapped_column(String(3), nullable=False)
    rate: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False)
    source: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, comment="Fuente de la cotización (BCU, manual...)")

    economic_group: Mapped["EconomicGroup"] = relationship("EconomicGroup")

    def __repr__(self) -> str:
        return f"<ExchangeRate({self.source_currency}->{self.target_currency} {self.date}: {self.rate})>"
