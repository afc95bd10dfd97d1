from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kontaflow.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from kontaflow.models.company import Company
    from kontaflow.models.user import User


class UserCompany(TimestampMixin, Base):
    """
    Permiso de un usuario sobre una empresa (lectura o escritura)
    """
    __tablename__ = "user_companies"
    __table_args__ = (
        UniqueConstraint("user_id", "company_id"),
    )

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    company_id: Mapped[int] = mapped_column(ForeignKey("companies.id", ondelete="CASCADE"), index=True, nullable=False)
    can_write: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    user: Mapped["User"] = relationship("User", back_populates="company_permissions")
    company: Mapped["Company"] = relationship("Company", back_populates="user_permissions")
