"""
Grupo económico y su configuración contable
"""
from decimal import Decimal
from typing import Dict, List, Optional, TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kontaflow.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from kontaflow.models.chart_of_accounts import ChartOfAccounts
    from kontaflow.models.company import Company
    from kontaflow.models.user import UserGroup


class EconomicGroup(TimestampMixin, Base):
    """
    Grupo económico: unidad de aislamiento multi-tenant.

    Posee empresas, un único plan de cuentas, períodos contables,
    clientes, proveedores y tipos de cambio.
    """
    __tablename__ = "economic_groups"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    main_country: Mapped[str] = mapped_column(String(2), nullable=False, comment="ISO 3166-1 alpha-2")
    base_currency: Mapped[str] = mapped_column(String(3), nullable=False, comment="ISO 4217")
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    members: Mapped[List["UserGroup"]] = relationship(
        "UserGroup",
        back_populates="economic_group",
        cascade="all, delete-orphan"
    )
    companies: Mapped[List["Company"]] = relationship("Company", back_populates="economic_group")
    chart_of_accounts: Mapped[Optional["ChartOfAccounts"]] = relationship(
        "ChartOfAccounts",
        back_populates="economic_group",
        uselist=False
    )
    configuration: Mapped[Optional["AccountingConfiguration"]] = relationship(
        "AccountingConfiguration",
        back_populates="economic_group",
        uselist=False,
        cascade="all, delete-orphan"
    )

    @property
    def counts(self) -> Dict[str, int]:
        """Totales de entidades dependientes (column_property)"""
        return {
            "companies": self.company_count or 0,
            "customers": self.customer_count or 0,
            "suppliers": self.supplier_count or 0,
        }

    def __repr__(self) -> str:
        return f"<EconomicGroup(id={self.id}, name='{self.name}')>"


class AccountingConfiguration(TimestampMixin, Base):
    """Parámetros contables de un grupo, creados junto con el grupo"""
    __tablename__ = "accounting_configurations"

    economic_group_id: Mapped[int] = mapped_column(
        ForeignKey("economic_groups.id", ondelete="CASCADE"),
        unique=True,
        nullable=False
    )
    allow_entries_in_closed_period: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    require_global_approval: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    minimum_approval_amount: Mapped[Decimal] = mapped_column(
        Numeric(18, 2),
        default=Decimal("50000.00"),
        nullable=False
    )
    allow_unbalanced_entries: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    amount_decimals: Mapped[int] = mapped_column(Integer, default=2, nullable=False)
    exchange_rate_decimals: Mapped[int] = mapped_column(Integer, default=4, nullable=False)

    economic_group: Mapped["EconomicGroup"] = relationship("EconomicGroup", back_populates="configuration")
