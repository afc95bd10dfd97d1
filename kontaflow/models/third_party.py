"""
Terceros de un grupo económico: clientes y proveedores
"""
from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Index, String, func
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from kontaflow.models.base import Base, TimestampMixin


class ThirdPartyMixin(TimestampMixin):
    """Columnas comunes a clientes y proveedores"""

    @declared_attr
    def economic_group_id(cls) -> Mapped[int]:
        return mapped_column(ForeignKey("economic_groups.id"), index=True, nullable=False)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    rut: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class Customer(ThirdPartyMixin, Base):
    __tablename__ = "customers"

    def __repr__(self) -> str:
        return f"<Customer(id={self.id}, name='{self.name}')>"


class Supplier(ThirdPartyMixin, Base):
    __tablename__ = "suppliers"

    def __repr__(self) -> str:
        return f"<Supplier(id={self.id}, name='{self.name}')>"


# Nombre único por grupo sin distinguir mayúsculas
for _model in (Customer, Supplier):
    _table = _model.__table__
    Index(
        f"uq_{_table.name}_economic_group_id_lower_name",
        _table.c.economic_group_id,
        func.lower(_table.c.name),
        unique=True
    )
