"""
Test configuration and fixtures for LightBnB.
Provides a fresh database per test, gateway and repository fixtures, and test data factories.
"""

import pytest
import os
from datetime import date
from typing import AsyncGenerator, Optional
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport

from lightbnb.database import Database
from lightbnb.gateway import QueryGateway
from lightbnb.main import create_app
from lightbnb.models import Reservation, PropertyReview
from lightbnb.repositories import BaseRepository, Record
from lightbnb.repositories.user import UserRepository
from lightbnb.repositories.property import PropertyRepository
from lightbnb.repositories.reservation import ReservationRepository


# Test database configuration
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

# bcrypt hash of "password"
HASHED_PASSWORD = "$2a$10$FB/BOAVhpuLvpOREQVmvmezD4ED/.JBIDRh70tGevYzYzQgFId2u."


def _create_test_engine() -> AsyncEngine:
    if "sqlite" not in TEST_DATABASE_URL:
        return create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)

    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )

    @event.listens_for(engine.sync_engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    """A Database handle over freshly created tables."""
    db = Database(_create_test_engine())
    await db.create_tables()
    try:
        yield db
    finally:
        await db.drop_tables()
        await db.dispose()


@pytest.fixture
def gateway(database: Database) -> QueryGateway:
    return QueryGateway(database)


# Repository fixtures
@pytest.fixture
def user_repository(database: Database) -> UserRepository:
    return UserRepository(database.engine)


@pytest.fixture
def property_repository(database: Database) -> PropertyRepository:
    return PropertyRepository(database.engine)


@pytest.fixture
def reservation_repository(database: Database) -> ReservationRepository:
    return ReservationRepository(database.engine)


@pytest.fixture
async def client(database: Database) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to an app that uses the test database."""
    app = create_app(database)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    _counter = 0

    @classmethod
    def create_user_data(
        cls,
        name: str = "Test User",
        email: Optional[str] = None,
        password: str = HASHED_PASSWORD
    ) -> dict:
        cls._counter += 1
        return {
            "name": name,
            "email": email or f"user{cls._counter}@example.com",
            "password": password,
        }

    @classmethod
    async def create_user(cls, gateway: QueryGateway, **kwargs) -> Record:
        return await gateway.add_user(cls.create_user_data(**kwargs))


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(
        owner_id: int,
        title: str = "Test Property",
        cost_per_night: int = 10000,
        city: str = "Vancouver",
        **overrides
    ) -> dict:
        data = {
            "owner_id": owner_id,
            "title": title,
            "description": "A lovely place to stay",
            "thumbnail_photo_url": "https://example.com/thumb.jpg",
            "cover_photo_url": "https://example.com/cover.jpg",
            "cost_per_night": cost_per_night,
            "street": "123 Main Street",
            "city": city,
            "province": "British Columbia",
            "post_code": "V5K 0A1",
            "country": "Canada",
            "parking_spaces": 1,
            "number_of_bathrooms": 2,
            "number_of_bedrooms": 3,
        }
        data.update(overrides)
        return data

    @staticmethod
    async def create_property(gateway: QueryGateway, owner_id: int, **kwargs) -> Record:
        return await gateway.add_property(PropertyFactory.create_property_data(owner_id, **kwargs))


async def add_reservation(
    database: Database,
    guest_id: int,
    property_id: int,
    start_date: date = date(2023, 5, 1),
    end_date: date = date(2023, 5, 8)
) -> Record:
    return await BaseRepository(Reservation, database.engine).create({
        "guest_id": guest_id,
        "property_id": property_id,
        "start_date": start_date,
        "end_date": end_date,
    })


async def add_review(database: Database, guest_id: int, property_id: int, rating: int) -> Record:
    return await BaseRepository(PropertyReview, database.engine).create({
        "guest_id": guest_id,
        "property_id": property_id,
        "rating": rating,
        "message": "review",
    })


# Common test fixtures
@pytest.fixture
async def test_owner(gateway: QueryGateway) -> Record:
    return await UserFactory.create_user(gateway, name="Owner One", email="owner@test.com")


@pytest.fixture
async def test_guest(gateway: QueryGateway) -> Record:
    return await UserFactory.create_user(gateway, name="Guest One", email="guest@test.com")


def assert_property_matches(record: Record, expected: dict):
    """Assert that a stored property carries every expected input field."""
    for field, value in expected.items():
        assert record[field] == value, field
