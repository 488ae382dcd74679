# backend/tests/conftest.py
"""
Pytest configuration.

Tests run against an in-memory SQLite database. Tables are created once per
session; every test runs inside a connection-level transaction that is rolled
back afterwards, so service commits only release SAVEPOINTs and nothing leaks
between tests.
"""

import os

# Set before any app import so Settings picks them up
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LEAVE_DAYS_PER_MONTH", "1")

from datetime import date, datetime
from itertools import count
from typing import Callable, Dict

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from app.api.dependencies.database import get_db
from app.api.dependencies.services import get_clock
from app.core.clock import Clock, fixed_clock
from app.core.enums import RoleName, SlotType
from app.database import Base, build_engine
from app.main import app as fastapi_app
from app.models.time_slot import TimeSlot
from app.models.user import User
from app.services.time_slot_generator import build_slot

# Wednesday
TEST_DAY = date(2024, 7, 10)
TEST_NOW = datetime(2024, 7, 10, 8, 0)

_user_seq = count(1)


@pytest.fixture(scope="session")
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def db(engine):
    """
    Session bound to an outer transaction that is always rolled back.

    ``commit()`` inside services releases a SAVEPOINT; ``rollback()`` returns
    to the last one, which is what the service layer expects.
    """
    connection = engine.connect()
    transaction = connection.begin()
    session = Session(
        bind=connection,
        join_transaction_mode="create_savepoint",
        autoflush=False,
        expire_on_commit=False,
    )
    try:
        yield session
    finally:
        session.close()
        transaction.rollback()
        connection.close()


@pytest.fixture
def clock() -> Clock:
    return fixed_clock(TEST_NOW)


@pytest.fixture
def make_user(db: Session) -> Callable[..., User]:
    def _make(
        role: RoleName = RoleName.CUSTOMER,
        first_name: str = "Test",
        last_name: str = "User",
        is_active: bool = True,
    ) -> User:
        n = next(_user_seq)
        user = User(
            email=f"user{n}@example.com",
            first_name=first_name,
            last_name=last_name,
            role=role.value,
            is_active=is_active,
        )
        db.add(user)
        # Commit (not flush) so a later service rollback keeps fixture rows
        db.commit()
        return user

    return _make


@pytest.fixture
def trainer(make_user) -> User:
    return make_user(RoleName.TRAINER, first_name="Tara", last_name="Trainer")


@pytest.fixture
def other_trainer(make_user) -> User:
    return make_user(RoleName.TRAINER, first_name="Otto", last_name="Trainer")


@pytest.fixture
def customer(make_user) -> User:
    return make_user(RoleName.CUSTOMER, first_name="Casey", last_name="Customer")


@pytest.fixture
def other_customer(make_user) -> User:
    return make_user(RoleName.CUSTOMER, first_name="Drew", last_name="Customer")


@pytest.fixture
def admin(make_user) -> User:
    return make_user(RoleName.ADMIN, first_name="Ada", last_name="Admin")


@pytest.fixture
def make_slot(db: Session) -> Callable[..., TimeSlot]:
    """Ledger slot created directly, outside any availability day."""

    def _make(
        owner: User,
        day: date = TEST_DAY,
        start: str = "09:00",
        end: str = "10:00",
        slot_type: SlotType = SlotType.PEAK,
        created_by: str | None = None,
    ) -> TimeSlot:
        generated = build_slot(owner.id, day, start, end, slot_type)
        slot = TimeSlot(**generated.as_row(created_by=created_by))
        db.add(slot)
        db.commit()
        return slot

    return _make


@pytest.fixture
def client(db: Session, clock: Clock):
    """Create a test client bound to the test session and the fixed clock."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    fastapi_app.dependency_overrides[get_db] = override_get_db
    fastapi_app.dependency_overrides[get_clock] = lambda: clock

    # Don't use context manager - the lifespan would open the real engine
    test_client = TestClient(fastapi_app)

    yield test_client

    fastapi_app.dependency_overrides.clear()
    test_client.close()


def auth_headers(user: User) -> Dict[str, str]:
    return {"X-User-Id": user.id}


@pytest.fixture
def headers_for() -> Callable[[User], Dict[str, str]]:
    return auth_headers
