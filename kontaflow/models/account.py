from enum import Enum
from typing import Dict, List, Optional, TYPE_CHECKING

from sqlalchemy import Boolean, Enum as SQLEnum, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kontaflow.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from kontaflow.models.chart_of_accounts import ChartOfAccounts
    from kontaflow.models.journal_entry import EntryLine


class AccountType(str, Enum):
    """Naturaleza contable de la cuenta"""
    ASSET = "ASSET"
    LIABILITY = "LIABILITY"
    EQUITY = "EQUITY"
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class AuxiliaryType(str, Enum):
    """Tipo de auxiliar requerido por la cuenta"""
    CUSTOMER = "CUSTOMER"
    SUPPLIER = "SUPPLIER"
    EMPLOYEE = "EMPLOYEE"
    OTHER = "OTHER"


class AccountCurrency(str, Enum):
    """Moneda en la que opera la cuenta"""
    MN = "MN"
    USD = "USD"
    BOTH = "BOTH"
    FUNCTIONAL = "FUNCTIONAL"


class AccountNature(str, Enum):
    """Clasificación corriente / no corriente (NIIF)"""
    CURRENT = "CURRENT"
    NON_CURRENT = "NON_CURRENT"


class IFRSCategory(str, Enum):
    """Rubro NIIF para presentación de estados financieros"""
    # Activos
    CASH_AND_EQUIVALENTS = "CASH_AND_EQUIVALENTS"
    ACCOUNTS_RECEIVABLE = "ACCOUNTS_RECEIVABLE"
    INVENTORIES = "INVENTORIES"
    PROPERTY_PLANT_EQUIPMENT = "PROPERTY_PLANT_EQUIPMENT"
    INTANGIBLE_ASSETS = "INTANGIBLE_ASSETS"
    FINANCIAL_INVESTMENTS = "FINANCIAL_INVESTMENTS"

    # Pasivos
    ACCOUNTS_PAYABLE = "ACCOUNTS_PAYABLE"
    FINANCIAL_DEBT = "FINANCIAL_DEBT"
    TAX_LIABILITIES = "TAX_LIABILITIES"
    EMPLOYEE_BENEFITS = "EMPLOYEE_BENEFITS"
    PROVISIONS = "PROVISIONS"

    # Patrimonio
    SHARE_CAPITAL = "SHARE_CAPITAL"
    RESERVES = "RESERVES"
    RETAINED_EARNINGS = "RETAINED_EARNINGS"

    # Resultados
    OPERATING_INCOME = "OPERATING_INCOME"
    OTHER_INCOME = "OTHER_INCOME"
    FINANCIAL_INCOME = "FINANCIAL_INCOME"
    COST_OF_SALES = "COST_OF_SALES"
    ADMINISTRATIVE_EXPENSES = "ADMINISTRATIVE_EXPENSES"
    SELLING_EXPENSES = "SELLING_EXPENSES"
    FINANCIAL_EXPENSES = "FINANCIAL_EXPENSES"
    INCOME_TAX = "INCOME_TAX"


class ValuationMethod(str, Enum):
    """Criterio de medición posterior"""
    HISTORICAL_COST = "HISTORICAL_COST"
    FAIR_VALUE = "FAIR_VALUE"
    AMORTIZED_COST = "AMORTIZED_COST"
    NET_REALIZABLE_VALUE = "NET_REALIZABLE_VALUE"


class Account(TimestampMixin, Base):
    """
    Cuenta contable con estructura jerárquica dentro de un plan de cuentas
    """
    __tablename__ = "accounts"
    __table_args__ = (
        UniqueConstraint("chart_of_accounts_id", "code"),
    )

    chart_of_accounts_id: Mapped[int] = mapped_column(
        ForeignKey("charts_of_accounts.id"), index=True, nullable=False
    )
    code: Mapped[str] = mapped_column(String(50), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    parent_account_id: Mapped[Optional[int]] = mapped_column(ForeignKey("accounts.id"), index=True, nullable=True)
    type: Mapped[AccountType] = mapped_column(SQLEnum(AccountType, name="account_type"), nullable=False)
    level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    postable: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    requires_auxiliary: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    auxiliary_type: Mapped[Optional[AuxiliaryType]] = mapped_column(
        SQLEnum(AuxiliaryType, name="auxiliary_type"), nullable=True
    )
    currency: Mapped[AccountCurrency] = mapped_column(
        SQLEnum(AccountCurrency, name="account_currency"),
        default=AccountCurrency.FUNCTIONAL,
        nullable=False
    )
    nature: Mapped[Optional[AccountNature]] = mapped_column(SQLEnum(AccountNature, name="account_nature"), nullable=True)
    ifrs_category: Mapped[Optional[IFRSCategory]] = mapped_column(
        SQLEnum(IFRSCategory, name="ifrs_category"), nullable=True
    )
    valuation_method: Mapped[Optional[ValuationMethod]] = mapped_column(
        SQLEnum(ValuationMethod, name="valuation_method"), nullable=True
    )
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    chart_of_accounts: Mapped["ChartOfAccounts"] = relationship("ChartOfAccounts", back_populates="accounts")
    parent_account: Mapped[Optional["Account"]] = relationship(
        "Account",
        remote_side="Account.id",
        back_populates="subaccounts"
    )
    subaccounts: Mapped[List["Account"]] = relationship("Account", back_populates="parent_account")
    entry_lines: Mapped[List["EntryLine"]] = relationship("EntryLine", back_populates="account")

    @property
    def counts(self) -> Dict[str, int]:
        return {"subaccounts": self.subaccount_count or 0}

    def __repr__(self) -> str:
        return f"<Account(code='{self.code}', name='{self.name}')>"
