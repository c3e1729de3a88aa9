from sqlalchemy.engine import URL
from pydantic_settings import BaseSettings

from app.exceptions import ConfigurationError


class Settings(BaseSettings):
    # Postgres connection parts (same variable names libpq uses)
    PGHOST: str | None = None
    PGPORT: int = 5432
    PGUSER: str | None = None
    PGPASSWORD: str | None = None
    PGDATABASE: str | None = None
    PGSSL: bool = True

    # Full SQLAlchemy URL; takes precedence over the PG* parts when set.
    DATABASE_URL: str | None = None

    # Create tables from the model metadata at startup.
    DB_SYNCHRONIZE: bool = True
    # SQL statement echo; follows DEBUG unless set explicitly.
    DB_ECHO: bool | None = None

    DEBUG: bool = False

    LOG_LEVEL: str = "INFO"
    LOG_LEVEL_SQL: str = "WARNING"

    model_config = {"env_file": ".env", "extra": "ignore"}

    @property
    def database_url(self) -> str:
        """
        Resolve the async SQLAlchemy URL for the configured store.

        Raises ``ConfigurationError`` when neither ``DATABASE_URL`` nor the
        host/user/database ``PG*`` variables are available.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL

        missing = [
            name
            for name in ("PGHOST", "PGUSER", "PGDATABASE")
            if not getattr(self, name)
        ]
        if missing:
            raise ConfigurationError(
                "Database is not configured; set DATABASE_URL or "
                + ", ".join(missing)
            )

        return URL.create(
            "postgresql+asyncpg",
            username=self.PGUSER,
            password=self.PGPASSWORD,
            host=self.PGHOST,
            port=self.PGPORT,
            database=self.PGDATABASE,
        ).render_as_string(hide_password=False)

    @property
    def engine_options(self) -> dict:
        """Extra ``create_async_engine`` keyword arguments for the resolved URL."""
        echo = self.DEBUG if self.DB_ECHO is None else self.DB_ECHO
        options: dict = {"echo": echo, "pool_pre_ping": True}
        if self.database_url.startswith("postgresql") and self.PGSSL:
            options["connect_args"] = {"ssl": "require"}
        return options


settings = Settings()
