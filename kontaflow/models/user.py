from enum import Enum
from typing import List, TYPE_CHECKING

from sqlalchemy import Boolean, Enum as SQLEnum, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kontaflow.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from kontaflow.models.economic_group import EconomicGroup
    from kontaflow.models.user_company import UserCompany


class UserRole(str, Enum):
    """Roles de un usuario dentro de un grupo económico"""
    ADMIN = "ADMIN"
    ACCOUNTANT = "ACCOUNTANT"
    OPERATOR = "OPERATOR"


class User(TimestampMixin, Base):
    """
    Usuario del sistema.

    La identidad se resuelve por la cabecera x-user-id; no se almacenan
    credenciales en esta tabla.
    """
    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    groups: Mapped[List["UserGroup"]] = relationship(
        "UserGroup",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="UserGroup.id"
    )
    company_permissions: Mapped[List["UserCompany"]] = relationship(
        "UserCompany",
        back_populates="user",
        cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"


class UserGroup(TimestampMixin, Base):
    """Membresía de un usuario en un grupo económico con su rol"""
    __tablename__ = "user_groups"
    __table_args__ = (
        UniqueConstraint("user_id", "economic_group_id"),
    )

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    economic_group_id: Mapped[int] = mapped_column(
        ForeignKey("economic_groups.id", ondelete="CASCADE"), index=True, nullable=False
    )
    role: Mapped[UserRole] = mapped_column(SQLEnum(UserRole, name="user_role"), default=UserRole.OPERATOR, nullable=False)

    user: Mapped["User"] = relationship("User", back_populates="groups")
    economic_group: Mapped["EconomicGroup"] = relationship("EconomicGroup", back_populates="members")
