"""Shared test configuration and fixtures.

Every test gets a fresh in-memory SQLite database (aiosqlite + StaticPool, so
all sessions share one connection). The pysqlite driver's own transaction
handling is switched off and SQLAlchemy emits BEGIN itself, which makes
``session.begin_nested()`` savepoints behave as they do on PostgreSQL.
"""

import uuid
from collections.abc import AsyncGenerator
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from frontdesk.auth.identity import Actor
from frontdesk.auth.jwt import create_token_pair
from frontdesk.auth.passwords import hash_password
from frontdesk.database import Base, get_db
from frontdesk.main import app
from frontdesk.models.enums import IdType, UserRole
from frontdesk.models.user import User
from frontdesk.services import booking_lifecycle, food_ledger, room_registry

# ---------------------------------------------------------------------------
# Engine / session
# ---------------------------------------------------------------------------


def _make_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine


@pytest_asyncio.fixture
async def test_engine():
    """Create an engine with all tables for a single test."""
    engine = _make_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async session; the database is thrown away with the engine."""
    session = AsyncSession(bind=test_engine, expire_on_commit=False)
    try:
        yield session
    finally:
        await session.close()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to use the test DB session."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Users and identities
# ---------------------------------------------------------------------------


async def _create_user(db_session: AsyncSession, role: UserRole, is_active: bool = True) -> User:
    unique = uuid.uuid4().hex[:8]
    user = User(
        email=f"{role.value.lower()}-{unique}@test.com",
        hashed_password=hash_password("testpass123"),
        name=f"Test {role.value.title()}",
        role=role,
        is_active=is_active,
    )
    db_session.add(user)
    await db_session.flush()
    return user


def _headers_for(user: User) -> dict[str, str]:
    tokens = create_token_pair(str(user.id), user.role.value)
    return {"Authorization": f"Bearer {tokens['access_token']}"}


@pytest_asyncio.fixture
async def manager_user(db_session: AsyncSession) -> User:
    return await _create_user(db_session, UserRole.MANAGER)


@pytest_asyncio.fixture
async def staff_user(db_session: AsyncSession) -> User:
    return await _create_user(db_session, UserRole.STAFF)


@pytest_asyncio.fixture
async def inactive_user(db_session: AsyncSession) -> User:
    return await _create_user(db_session, UserRole.STAFF, is_active=False)


@pytest.fixture
def manager_headers(manager_user: User) -> dict[str, str]:
    return _headers_for(manager_user)


@pytest.fixture
def staff_headers(staff_user: User) -> dict[str, str]:
    return _headers_for(staff_user)


@pytest.fixture
def manager(manager_user: User) -> Actor:
    """Service-level identity of the manager."""
    return Actor(user_id=manager_user.id, role=manager_user.role)


@pytest.fixture
def staff(staff_user: User) -> Actor:
    """Service-level identity of a desk clerk."""
    return Actor(user_id=staff_user.id, role=staff_user.role)


# ---------------------------------------------------------------------------
# Domain factories (service level, amounts in paise)
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def room_type(db_session: AsyncSession, manager: Actor):
    return await room_registry.create_room_type(db_session, manager, "Deluxe", 200000, "AC, queen bed")


@pytest_asyncio.fixture
async def make_room(db_session: AsyncSession, manager: Actor, room_type):
    """Factory: ``await make_room("101")``."""

    async def _make(number: str, floor: int | None = 1):
        return await room_registry.create_room(db_session, manager, number, room_type.id, floor)

    return _make


@pytest_asyncio.fixture
async def room(make_room):
    return await make_room("101")


@pytest_asyncio.fixture
async def make_food_item(db_session: AsyncSession, manager: Actor):
    """Factory: ``await make_food_item("Tea", 10000)``."""

    async def _make(name: str, price: int, category: str = "Main Course", gst_percent: str = "0"):
        return await food_ledger.create_food_item(
            db_session,
            manager,
            name=name,
            category=category,
            price=price,
            gst_percent=Decimal(gst_percent),
        )

    return _make


@pytest_asyncio.fixture
async def food_item(make_food_item):
    return await make_food_item("Veg Thali", 15000)


@pytest_asyncio.fixture
async def make_booking(db_session: AsyncSession, staff: Actor):
    """Factory: ``await make_booking(room, room_price=150000, tariff=None, ...)``."""

    async def _make(room, **overrides):
        fields = {
            "guest_name": "Asha Rao",
            "id_type": IdType.AADHAAR,
            "id_number": "1234-5678-9012",
            "guest_mobile": "+91 90000 00000",
            "room_price": 150000,
        }
        fields.update(overrides)
        return await booking_lifecycle.open_booking(db_session, staff, room_id=room.id, **fields)

    return _make


@pytest_asyncio.fixture
async def booking(make_booking, room):
    return await make_booking(room)
