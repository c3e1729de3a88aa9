"""
Test infrastructure for the Blog API.

Strategy
--------
- SQLite in-memory via aiosqlite replaces Postgres, keeping the suite
  self-contained.
- StaticPool forces every session onto one connection, which is required
  because an in-memory SQLite database only exists for the connection that
  created it.
- The engine is installed through ``app.database.init_engine``, the same
  entry point the application lifespan uses, so ``get_db`` and the
  repositories run unmodified.  httpx's ASGITransport does not run the
  lifespan, so the production engine is never created.
- All tables are created fresh before each test and dropped after.
"""
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import StaticPool

from app import database
from app.database import Base, init_engine
from app.main import app

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine_test = init_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
async_session_test = database.async_session


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after to guarantee isolation."""
    import app.models  # noqa: F401

    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """
    Yield a live AsyncSession for tests that drive the repository or
    service layer directly.
    """
    async with async_session_test() as session:
        yield session


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    """Yield an httpx.AsyncClient wired to the FastAPI app via ASGITransport."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
