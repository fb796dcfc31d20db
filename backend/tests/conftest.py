"""Root conftest: environment defaults, seeded SQLite database, Validation fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database with seeded rows
    - No test sees a current-password checker left behind by another test

Design Decisions:
    - SQLite in memory with StaticPool: every session shares one connection,
      so rows seeded at setup are visible to the rule lookups
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from sqlalchemy import Column, Integer, MetaData, String, Table
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from fieldguard.core.domain_types import Locale
from fieldguard.infrastructure.database import DatabaseSessionManager
from fieldguard.services import password_rule
from fieldguard.services.validation import Validation

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("email", String(255), nullable=False),
    Column("mobile", String(11), nullable=True),
)

SEEDED_USERS = [
    {"id": 1, "email": "taken@example.com", "mobile": "09121111111"},
    {"id": 2, "email": "other@example.com", "mobile": "09122222222"},
]


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", poolclass=StaticPool, echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
        await conn.execute(users.insert(), SEEDED_USERS)
    yield engine
    await engine.dispose()


@pytest.fixture
def db(test_engine):
    return DatabaseSessionManager.from_engine(test_engine)


@pytest.fixture
def validation(db):
    """English messages keep assertions readable; FA is covered explicitly."""
    return Validation(db, Locale.EN)


@pytest.fixture(autouse=True)
def no_password_checker(monkeypatch):
    monkeypatch.setattr(password_rule, "_current_password_checker", None)
