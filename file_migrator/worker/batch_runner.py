from file_migrator.logging.logger import Log
from file_migrator.reconciler.models import RunReport
from file_migrator.reconciler.reconciler import Reconciler
from file_migrator.worker.enumerator import SubmissionEnumerator


class BatchRunner:
    """Enumerate once, then reconcile each submission in order."""

    def __init__(self, enumerator: SubmissionEnumerator, reconciler: Reconciler) -> None:
        self._enumerator = enumerator
        self._reconciler = reconciler

    def run(self) -> RunReport:
        """Process the pending batch. Only enumeration failures propagate."""
        Log.info("Worker started")
        submissions = self._enumerator.pending()
        report = RunReport()
        for submission in submissions:
            report.submissions += 1
            for outcome in self._reconciler.reconcile(submission):
                report.add(outcome)
        Log.info(f"Worker finished: {report.summary()}")
        for outcome in report.failed:
            Log.warning(
                f"Unresolved file ({outcome.status})",
                submission_id=outcome.submission_id,
                field_id=outcome.field_id,
                origin_locator=outcome.origin_locator,
                storage_key=outcome.storage_key or "-",
                error=outcome.error,
            )
        return report
