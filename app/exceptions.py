class ConfigurationError(RuntimeError):
    """The database connection is missing or mis-configured.

    Raised at startup (and by any repository used before the engine is
    initialised); it is never caught by the application.
    """


class StorageError(Exception):
    """A store-level failure raised while a repository talked to the database."""

    def __init__(self, message: str, cause: BaseException | None = None):
        self.cause = cause
        super().__init__(message if cause is None else f"{message}: {cause}")
