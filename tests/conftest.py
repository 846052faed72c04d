"""
Test infrastructure for the Coffee API.

Strategy
--------
- SQLite in-memory via aiosqlite, so no Postgres is needed in CI.
- StaticPool makes every task share the one in-memory connection
  (an in-memory SQLite database is connection-scoped).
- ``get_db`` is overridden to use the test session factory.
- ``get_cache`` is overridden with a fresh ``InMemoryCacheBackend`` per
  test, so cache state never leaks between tests and tests can inspect
  or pre-populate it.
- Tables are created before and dropped after each test.
"""
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401  (registers tables on Base.metadata)
from app.cache import InMemoryCacheBackend
from app.database import Base, get_db
from app.dependencies import get_cache
from app.main import app
from app.middleware import install_query_counter

# ---------------------------------------------------------------------------
# Test database engine: SQLite in-memory with aiosqlite
# ---------------------------------------------------------------------------

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine_test = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

install_query_counter(engine_test)

async_session_test = async_sessionmaker(
    engine_test,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def override_get_db():
    async with async_session_test() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


app.dependency_overrides[get_db] = override_get_db


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after to guarantee isolation."""
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def cache() -> InMemoryCacheBackend:
    """Fresh in-process cache, also installed as the app's cache for HTTP tests."""
    backend = InMemoryCacheBackend(key_prefix="test:", default_ttl=600, sliding_ttl=None)
    app.dependency_overrides[get_cache] = lambda: backend
    yield backend
    app.dependency_overrides.pop(get_cache, None)


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """Live session for service / repository tests that bypass HTTP."""
    async with async_session_test() as session:
        yield session


@pytest_asyncio.fixture
async def async_client(cache) -> AsyncClient:
    """httpx.AsyncClient wired to the FastAPI app via ASGITransport."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def session_factory() -> async_sessionmaker:
    """The test session factory, for tests that manage their own sessions."""
    return async_session_test
