class MigratorError(Exception):
    """Base exception for all migrator errors."""


class ConfigurationError(MigratorError):
    """Raised when required configuration is missing or invalid."""


class EnumerationError(MigratorError):
    """Raised when pending submissions cannot be listed."""


class OriginFetchError(MigratorError):
    """Raised when a file cannot be fetched from the origin host."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.retryable = retryable


class ObjectStoreError(MigratorError):
    """Raised when an object cannot be written to storage."""


class ObjectExistsError(ObjectStoreError):
    """Raised when a put without overwrite targets an existing key."""


class AuditWriteError(MigratorError):
    """Raised when an audit row cannot be inserted."""


class ProfileUpdateError(MigratorError):
    """Raised when the profile aggregate cannot be updated."""
