"""Logging setup applied once from the application lifespan.

Log levels come from ``Settings`` so that SQLAlchemy's statement logging
can be turned up or down without touching the application loggers.
"""

import logging
import sys

from app.config import settings

# Loggers whose level follows LOG_LEVEL_SQL rather than LOG_LEVEL.
_SQL_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite", "asyncpg")


def setup_logging() -> None:
    root = logging.getLogger()
    root.setLevel(_parse_level(settings.LOG_LEVEL))

    # uvicorn usually installs a handler; scripts and tests may not.
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")
        )
        root.addHandler(handler)

    sql_level = _parse_level(settings.LOG_LEVEL_SQL)
    for name in _SQL_LOGGERS:
        logging.getLogger(name).setLevel(sql_level)

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s, sql=%s", settings.LOG_LEVEL, settings.LOG_LEVEL_SQL
    )


def _parse_level(raw: str) -> int:
    """Convert a level name string to a logging constant, defaulting to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
