from datetime import date
from typing import List, Optional, TYPE_CHECKING

from sqlalchemy import Boolean, Date, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kontaflow.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from kontaflow.models.economic_group import EconomicGroup
    from kontaflow.models.journal_entry import JournalEntry
    from kontaflow.models.user_company import UserCompany


class Company(TimestampMixin, Base):
    """
    Empresa perteneciente a un grupo económico
    """
    __tablename__ = "companies"
    __table_args__ = (
        UniqueConstraint("economic_group_id", "rut"),
    )

    economic_group_id: Mapped[int] = mapped_column(ForeignKey("economic_groups.id"), index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    trade_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    rut: Mapped[str] = mapped_column(String(20), nullable=False, comment="Identificador fiscal")
    country: Mapped[str] = mapped_column(String(2), nullable=False)
    functional_currency: Mapped[str] = mapped_column(String(3), nullable=False)
    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    economic_group: Mapped["EconomicGroup"] = relationship("EconomicGroup", back_populates="companies")
    journal_entries: Mapped[List["JournalEntry"]] = relationship("JournalEntry", back_populates="company")
    user_permissions: Mapped[List["UserCompany"]] = relationship(
        "UserCompany",
        back_populates="company",
        cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Company(id={self.id}, rut='{self.rut}')>"
