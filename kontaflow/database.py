from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from kontaflow.core.settings import settings
from kontaflow.models.base import Base


def build_async_engine(url: str) -> AsyncEngine:
    """Crea el motor asíncrono; SQLite no admite opciones de pool"""
    if url.startswith("sqlite"):
        return create_async_engine(url, echo=settings.DB_ECHO)
    return create_async_engine(
        url,
        pool_pre_ping=True,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        echo=settings.DB_ECHO
    )


# Async engine para operaciones de la API
async_engine = build_async_engine(settings.ASYNC_SQLALCHEMY_DATABASE_URI)

AsyncSessionLocal = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False
)


# Dependency para FastAPI (asíncrono)
async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency para obtener sesión de base de datos asíncrona"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def create_async_db_and_tables():
    """Crea todas las tablas en la base de datos (versión asíncrona)"""
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
