"""
Configuración base para tests de integración
"""
import os

os.environ["ENVIRONMENT"] = "testing"

from datetime import date
from decimal import Decimal
from typing import Any, AsyncGenerator, Awaitable, Callable, Dict, Optional

import httpx
import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from kontaflow.database import get_async_db
from kontaflow.main import app
from kontaflow.models import Account, EntryLine, EntryStatus, JournalEntry, User
from kontaflow.models.base import Base

# Base de datos de test en memoria
SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Motor por test: el esquema se crea y destruye en cada uno"""
    engine = create_async_engine(
        SQLALCHEMY_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False
    )


@pytest.fixture
async def db_session(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    """Sesión para preparar datos directamente en la base"""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncClient, None]:
    """Cliente HTTP sobre la app ASGI con la base de test"""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_async_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# ====================
# Usuarios
# ====================

async def _create_user(session: AsyncSession, email: str, name: str, active: bool = True) -> User:
    user = User(email=email, name=name, active=active)
    session.add(user)
    await session.commit()
    return user


@pytest.fixture
async def owner(db_session: AsyncSession) -> User:
    """Usuario que crea los grupos de los tests"""
    return await _create_user(db_session, "owner@kontaflow.test", "Group Owner")


@pytest.fixture
async def outsider(db_session: AsyncSession) -> User:
    """Usuario con un grupo propio, sin acceso a los del owner"""
    return await _create_user(db_session, "outsider@kontaflow.test", "Outsider")


@pytest.fixture
async def inactive_user(db_session: AsyncSession) -> User:
    return await _create_user(db_session, "inactive@kontaflow.test", "Inactive", active=False)


def auth_headers(user: User) -> Dict[str, str]:
    return {"x-user-id": str(user.id)}


@pytest.fixture
def owner_headers(owner: User) -> Dict[str, str]:
    return auth_headers(owner)


@pytest.fixture
async def outsider_headers(client: AsyncClient, outsider: User) -> Dict[str, str]:
    headers = auth_headers(outsider)
    response = await client.post(
        "/api/economic-groups",
        json={"name": "Outsider Holding", "mainCountry": "AR", "baseCurrency": "ARS"},
        headers=headers
    )
    assert response.status_code == 201
    return headers


# ====================
# Fábricas vía API
# ====================

@pytest.fixture
async def economic_group(client: AsyncClient, owner_headers: Dict[str, str]) -> Dict[str, Any]:
    response = await client.post(
        "/api/economic-groups",
        json={"name": "Grupo Test", "mainCountry": "UY", "baseCurrency": "UYU"},
        headers=owner_headers
    )
    assert response.status_code == 201
    return response.json()["data"]


@pytest.fixture
async def company(
    client: AsyncClient, owner_headers: Dict[str, str], economic_group: Dict[str, Any]
) -> Dict[str, Any]:
    response = await client.post(
        "/api/companies",
        json={
            "economicGroupId": economic_group["id"],
            "name": "Empresa Test S.A.",
            "rut": "217654320018",
            "country": "UY",
            "functionalCurrency": "UYU"
        },
        headers=owner_headers
    )
    assert response.status_code == 201
    return response.json()["data"]


@pytest.fixture
async def chart(
    client: AsyncClient, owner_headers: Dict[str, str], economic_group: Dict[str, Any]
) -> Dict[str, Any]:
    response = await client.get(
        f"/api/charts-of-accounts/by-group/{economic_group['id']}", headers=owner_headers
    )
    assert response.status_code == 200
    return response.json()["data"]


@pytest.fixture
def create_account(
    client: AsyncClient, owner_headers: Dict[str, str], chart: Dict[str, Any]
) -> Callable[..., Awaitable[httpx.Response]]:
    """Crea una cuenta en el plan del grupo; los campos extra pisan los valores por defecto"""

    async def _create(code: str, name: str, **overrides: Any) -> httpx.Response:
        payload = {
            "chartOfAccountsId": chart["id"],
            "code": code,
            "name": name,
            "type": "EXPENSE",
            "level": 1,
        }
        payload.update(overrides)
        return await client.post("/api/accounts", json=payload, headers=owner_headers)

    return _create


@pytest.fixture
def create_journal_entry(
    db_session: AsyncSession,
) -> Callable[..., Awaitable[JournalEntry]]:
    """Inserta un asiento directamente en la base (sin superficie HTTP)"""

    async def _create(
        company: Dict[str, Any],
        entry_date: date,
        status: EntryStatus = EntryStatus.DRAFT,
        account_id: Optional[int] = None
    ) -> JournalEntry:
        entry = JournalEntry(
            economic_group_id=company["economicGroupId"],
            company_id=company["id"],
            number=1,
            date=entry_date,
            description="Test entry",
            status=status
        )
        if account_id is not None:
            account = await db_session.get(Account, account_id)
            entry.lines = [
                EntryLine(
                    account_id=account_id,
                    debit=Decimal("100.00"),
                    credit=Decimal("0"),
                    currency="UYU",
                    account_code=account.code,
                    account_name=account.name,
                    account_type=account.type
                )
            ]
        db_session.add(entry)
        await db_session.commit()
        return entry

    return _create
