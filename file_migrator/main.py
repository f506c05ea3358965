from pydantic import ValidationError

from file_migrator.config.settings import Settings
from file_migrator.database.connection import close_pool, init_pool
from file_migrator.database.repositories.audit_repository import AuditRepository
from file_migrator.database.repositories.profile_repository import ProfileRepository
from file_migrator.database.repositories.submission_repository import SubmissionRepository
from file_migrator.errors import ConfigurationError, EnumerationError
from file_migrator.logging.logger import Log
from file_migrator.origin.factory import OriginLocatorFactory
from file_migrator.origin.http_client import OriginHttpClient
from file_migrator.reconciler.reconciler import Reconciler
from file_migrator.storage.factory import ObjectStoreFactory
from file_migrator.worker.batch_runner import BatchRunner
from file_migrator.worker.enumerator import SubmissionEnumerator


def load_settings() -> Settings:
    """Load and validate settings.

    Raises:
        ConfigurationError: if values are malformed or required values are missing.
    """
    try:
        settings = Settings()
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc
    settings.validate_required()
    return settings


def build_runner(settings: Settings, http_client: OriginHttpClient) -> BatchRunner:
    """Build a BatchRunner with all collaborators selected by settings.

    Raises:
        ValueError: on an unknown origin strategy or storage backend.
    """
    locator = OriginLocatorFactory.create(settings, http_client)
    object_store = ObjectStoreFactory.create(settings)
    profile_repo = ProfileRepository() if settings.profile_aggregate_enabled else None
    reconciler = Reconciler(
        locator=locator,
        object_store=object_store,
        audit_repo=AuditRepository(),
        profile_repo=profile_repo,
        skip_duplicate_audit=settings.skip_duplicate_audit,
    )
    enumerator = SubmissionEnumerator(SubmissionRepository(), locator)
    return BatchRunner(enumerator, reconciler)


def main() -> int:
    """Entry point: validate config -> init pool -> run one batch -> exit status."""
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        Log.configure("INFO")
        Log.error(f"Fatal: {exc}")
        return 1
    Log.configure(settings.log_level)

    with OriginLocatorFactory.build_http_client(settings) as http_client:
        try:
            runner = build_runner(settings, http_client)
        except ValueError as exc:
            Log.error(f"Fatal configuration error: {exc}")
            return 1

        init_pool(settings)
        try:
            runner.run()
        except EnumerationError as exc:
            Log.error(f"Fatal: {exc}")
            return 1
        finally:
            close_pool()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
