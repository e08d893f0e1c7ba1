"""
Test configuration for pytest
"""

import os

# Test environment variables, set before tss.config is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["CACHE_TTL_SECONDS"] = "1"

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from tss.cache import MemoryCache
from tss.database import Base
from tss.models import Setting, Tenant  # noqa: F401
from tss.services.directory import TenantDirectory
from tss.services.store import SettingsStore


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest_asyncio.fixture
async def db():
    """Clean in-memory SQLite session for each test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    """Cache that only expires when the test advances the clock."""
    return MemoryCache(ttl=1.0, clock=clock)


@pytest.fixture
def directory(db, cache):
    return TenantDirectory(db, cache)


@pytest.fixture
def store(db, cache, directory):
    return SettingsStore(db, cache, directory)


@pytest_asyncio.fixture
async def acme_id(directory):
    """Registered tenant 'acme'."""
    return await directory.register("acme", "acme", "acme")
