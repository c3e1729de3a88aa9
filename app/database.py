import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.exceptions import ConfigurationError, StorageError
from app.middleware import install_query_counter

logger = logging.getLogger(__name__)

# Populated by init_engine() from the application lifespan (or the test
# suite); every accessor below refuses to run before that.
engine: AsyncEngine | None = None
async_session: async_sessionmaker[AsyncSession] | None = None


class Base(DeclarativeBase):
    pass


def init_engine(url: str, **engine_kwargs) -> AsyncEngine:
    """
    Create the process-wide engine and session factory for *url*.

    Extra keyword arguments are passed straight to ``create_async_engine``
    (tests use this to swap in ``StaticPool`` for in-memory SQLite).
    """
    global engine, async_session

    engine = create_async_engine(url, **engine_kwargs)
    # Register the per-request SQL query counter on the new engine.
    install_query_counter(engine)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    logger.info("Database engine initialised: %s", engine.url.render_as_string())
    return engine


def get_engine() -> AsyncEngine:
    if engine is None:
        raise ConfigurationError("Database engine has not been initialised")
    return engine


def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    if async_session is None:
        raise ConfigurationError("Database session factory has not been initialised")
    return async_session


async def create_schema() -> None:
    """Create every table declared on ``Base.metadata`` that does not exist yet."""
    # Imported for its side effect of registering the mapped tables.
    import app.models  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema synchronised")


async def dispose_engine() -> None:
    global engine, async_session

    if engine is not None:
        await engine.dispose()
        logger.info("Database engine disposed")
    engine = None
    async_session = None


async def get_db():
    async with get_sessionmaker()() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        try:
            await session.commit()
        except SQLAlchemyError as exc:
            await session.rollback()
            logger.warning("Commit failed: %s", exc)
            raise StorageError("Commit failed", exc) from exc
