from typing import Any, Dict, Generic, List, Optional, Sequence, Tuple, Type, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from kontaflow.models.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """
    Acceso a datos de una entidad.

    Los repositorios sólo dan forma a las consultas; las transacciones
    (commit/rollback) pertenecen a los servicios.
    """
    model: Type[ModelT]

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, entity_id: Any) -> Optional[ModelT]:
        return await self.db.get(self.model, entity_id)

    async def add(self, entity: ModelT) -> ModelT:
        self.db.add(entity)
        await self.db.flush()
        return entity

    async def update(self, entity: ModelT, data: Dict[str, Any]) -> ModelT:
        for field, value in data.items():
            setattr(entity, field, value)
        await self.db.flush()
        return entity

    async def delete(self, entity: ModelT) -> None:
        await self.db.delete(entity)
        await self.db.flush()

    async def soft_delete(self, entity: ModelT) -> ModelT:
        return await self.update(entity, {"active": False})

    async def count(self, query: Select) -> int:
        count_query = select(func.count()).select_from(query.order_by(None).subquery())
        total = await self.db.scalar(count_query)
        return total if total is not None else 0

    async def exists(self, *conditions) -> bool:
        total = await self.db.scalar(
            select(func.count()).select_from(self.model).where(*conditions)
        )
        return bool(total)

    async def paginate(self, query: Select, offset: int, limit: int) -> Tuple[List[ModelT], int]:
        """Ejecuta la consulta paginada y devuelve (items, total)"""
        total = await self.count(query)
        result = await self.db.execute(query.offset(offset).limit(limit))
        return list(result.scalars().all()), total

    async def all(self, query: Select) -> Sequence[ModelT]:
        result = await self.db.execute(query)
        return result.scalars().all()
