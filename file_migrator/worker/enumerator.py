from file_migrator.database.models import SubmissionRow
from file_migrator.database.repositories.submission_repository import SubmissionRepository
from file_migrator.logging.logger import Log
from file_migrator.origin.base import BaseOriginLocator


class SubmissionEnumerator:
    """Lists submissions that have at least one file reference for the active strategy."""

    def __init__(self, submission_repo: SubmissionRepository, locator: BaseOriginLocator) -> None:
        self._submission_repo = submission_repo
        self._locator = locator

    def pending(self) -> list[SubmissionRow]:
        """Return pending submissions in retrieval order.

        Raises:
            EnumerationError: if the backing query fails.
        """
        rows = self._submission_repo.list_pending(self._locator.source_column)
        pending = [row for row in rows if self._locator.references(row)]
        Log.info(
            f"Found {len(pending)} submissions with file references "
            f"({len(rows) - len(pending)} without)"
        )
        return pending
