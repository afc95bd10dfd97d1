from typing import Dict, List, Optional, TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kontaflow.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from kontaflow.models.account import Account
    from kontaflow.models.economic_group import EconomicGroup


class ChartOfAccounts(TimestampMixin, Base):
    """
    Plan de cuentas de un grupo económico (relación 1:1)
    """
    __tablename__ = "charts_of_accounts"

    economic_group_id: Mapped[int] = mapped_column(
        ForeignKey("economic_groups.id"),
        unique=True,
        nullable=False
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    economic_group: Mapped["EconomicGroup"] = relationship("EconomicGroup", back_populates="chart_of_accounts")
    accounts: Mapped[List["Account"]] = relationship("Account", back_populates="chart_of_accounts")

    @property
    def counts(self) -> Dict[str, int]:
        return {"accounts": self.account_count or 0}

    def __repr__(self) -> str:
        return f"<ChartOfAccounts(id={self.id}, group={self.economic_group_id})>"
