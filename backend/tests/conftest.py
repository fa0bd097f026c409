"""
Pytest fixtures for test database, client, and authentication.

Each test gets its own in-memory SQLite database (aiosqlite + StaticPool so
every session shares the one connection), created from the model metadata
and thrown away afterwards.
"""

import os

# Cheap hashes and a non-production environment before settings are cached
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "test")

from datetime import date, timedelta
from decimal import Decimal
from typing import AsyncGenerator

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from eventz.main import app
from eventz.db.base import Base
from eventz.db.session import get_db
from eventz.core.security import ROLE_ADMIN, create_access_token, hash_password
from eventz.models import Booking, BookingStatus, Coupon, Event, User

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create tables, yield session, then drop everything for isolation."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that overrides the DB dependency with the test session."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    user = User(
        full_name="Test User",
        email="test@example.com",
        username="testuser",
        hashed_password=hash_password("testpassword123"),
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture
async def auth_headers(test_user: User) -> dict:
    token = create_access_token(data={"sub": str(test_user.id), "username": test_user.username, "role": "user"})
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def admin_headers() -> dict:
    token = create_access_token(data={"sub": "0", "username": "admin", "role": ROLE_ADMIN})
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def test_event(db_session: AsyncSession) -> Event:
    event = Event(
        name="Birthday",
        description="A birthday party",
        event_date=date.today() + timedelta(days=30),
        city="Vijayawada",
        venue="Lakeview Hall",
        created_by="admin",
    )
    db_session.add(event)
    await db_session.commit()
    await db_session.refresh(event)
    return event


@pytest_asyncio.fixture
async def test_booking(db_session: AsyncSession, test_user: User, test_event: Event) -> Booking:
    booking = Booking(
        user_id=test_user.id,
        event_id=test_event.id,
        plan="Gold",
        price=Decimal("5000.00"),
        list_price=Decimal("5000.00"),
        guests=20,
        status=BookingStatus.CONFIRMED.value,
    )
    db_session.add(booking)
    await db_session.commit()
    await db_session.refresh(booking)
    return booking


@pytest_asyncio.fixture
async def valid_coupon(db_session: AsyncSession) -> Coupon:
    coupon = Coupon(
        code="SAVE10",
        discount_percent=10,
        usage_limit=100,
        expires_at=date.today() + timedelta(days=30),
        created_by="admin",
    )
    db_session.add(coupon)
    await db_session.commit()
    await db_session.refresh(coupon)
    return coupon


@pytest_asyncio.fixture
async def expired_coupon(db_session: AsyncSession) -> Coupon:
    coupon = Coupon(
        code="OLD20",
        discount_percent=20,
        usage_limit=0,
        expires_at=date.today() - timedelta(days=2),
        created_by="admin",
    )
    db_session.add(coupon)
    await db_session.commit()
    await db_session.refresh(coupon)
    return coupon
