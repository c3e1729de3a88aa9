"""
Generic data-access base shared by the resource repositories.

Design notes
------------
- A repository never opens, commits or closes a session. The default
  session is injected by the ``get_db`` dependency, which owns the
  transaction boundary for the request.
- Every public repository method takes an optional ``session`` argument.
  Passing one makes the operation part of the caller's unit of work
  instead of the default session's.
- SQLAlchemy failures are re-raised as ``StorageError`` with the original
  exception attached; they are not retried or interpreted here.
"""
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base
from app.exceptions import ConfigurationError, StorageError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

# Range of the 32-bit INTEGER primary keys. Ids outside it cannot match a
# row, and drivers refuse to bind them (OverflowError, asyncpg DataError).
ID_MIN = -(2**31)
ID_MAX = 2**31 - 1


@dataclass(frozen=True)
class AffectedRows:
    """Number of rows an UPDATE or DELETE touched, without their content."""

    affected: int

    def __bool__(self) -> bool:
        return self.affected > 0


class BaseRepository(Generic[ModelT]):
    model: type[ModelT]

    def __init__(self, session: AsyncSession | None = None) -> None:
        self._session = session

    def get_session(self, session: AsyncSession | None = None) -> AsyncSession:
        """
        Return the session an operation on ``self.model`` should run on.

        *session* wins when supplied; otherwise the repository's default
        session is used. Raises ``ConfigurationError`` when neither exists,
        i.e. the repository was built outside a database-backed request.
        """
        if session is not None:
            return session
        if self._session is None:
            raise ConfigurationError(
                f"{type(self).__name__} has no database session for "
                f"{self.model.__name__}"
            )
        return self._session

    @staticmethod
    def is_storable_id(entity_id: int) -> bool:
        """True when *entity_id* fits the primary-key column and could exist."""
        return ID_MIN <= entity_id <= ID_MAX

    @asynccontextmanager
    async def _storage_errors(self, operation: str) -> AsyncIterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            logger.warning("%s %s failed: %s", self.model.__name__, operation, exc)
            raise StorageError(f"{self.model.__name__} {operation} failed", exc) from exc
