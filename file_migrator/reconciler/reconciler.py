from file_migrator.database.models import SubmissionRow
from file_migrator.database.repositories.audit_repository import AuditRepository
from file_migrator.database.repositories.profile_repository import ProfileRepository
from file_migrator.errors import (
    AuditWriteError,
    ObjectStoreError,
    OriginFetchError,
    ProfileUpdateError,
)
from file_migrator.logging.logger import Log
from file_migrator.origin.base import BaseOriginLocator
from file_migrator.origin.models import FetchJob
from file_migrator.reconciler.models import (
    STATUS_AUDIT_FAILED,
    STATUS_FAILED,
    STATUS_FETCH_FAILED,
    STATUS_STORE_FAILED,
    STATUS_STORED,
    FileOutcome,
)
from file_migrator.reconciler.pipeline import FileContext
from file_migrator.reconciler.steps import (
    FetchStep,
    StoreObjectStep,
    UpdateProfileStep,
    WriteAuditStep,
)
from file_migrator.storage.base import BaseObjectStore


class Reconciler:
    """Turns a submission's file references into stored objects with audit rows.

    Per file: fetch -> store -> audit -> (profile). Every failure is confined to
    its file; nothing raised here stops the batch.
    """

    def __init__(
        self,
        locator: BaseOriginLocator,
        object_store: BaseObjectStore,
        audit_repo: AuditRepository,
        profile_repo: ProfileRepository | None = None,
        skip_duplicate_audit: bool = True,
    ) -> None:
        self._locator = locator
        self._fetch = FetchStep(locator)
        self._store = StoreObjectStep(object_store)
        self._audit = WriteAuditStep(audit_repo, skip_duplicate_audit)
        self._profile = UpdateProfileStep(profile_repo) if profile_repo is not None else None

    def reconcile(self, submission: SubmissionRow) -> list[FileOutcome]:
        """Reconcile every file of one submission, in listed order."""
        try:
            jobs = self._locator.resolve(submission)
        except Exception as exc:
            Log.error(
                "Could not resolve file references",
                submission_id=submission.submission_id,
                error=exc,
            )
            return []

        Log.info(
            f"Submission {submission.submission_id}: {len(jobs)} files",
            submission_id=submission.submission_id,
        )
        outcomes = []
        for job in jobs:
            try:
                outcome = self.reconcile_job(job)
            except Exception as exc:
                Log.error(
                    "Unexpected failure reconciling file",
                    **_job_context(job),
                    error=repr(exc),
                )
                outcome = _outcome(FileContext(job=job), STATUS_FAILED, exc)
            outcomes.append(outcome)
        return outcomes

    def reconcile_job(self, job: FetchJob) -> FileOutcome:
        context = FileContext(job=job)

        try:
            context = self._fetch.run(context)
        except OriginFetchError as exc:
            Log.error("Download failed", **_job_context(job), error=exc)
            return _outcome(context, STATUS_FETCH_FAILED, exc)

        try:
            context = self._store.run(context)
        except ObjectStoreError as exc:
            Log.error("Upload failed", **_job_context(job), error=exc)
            return _outcome(context, STATUS_STORE_FAILED, exc)

        try:
            context = self._audit.run(context)
        except AuditWriteError as exc:
            Log.error(
                "Object stored without audit record, manual reconciliation required",
                **_job_context(job),
                storage_key=context.storage_key,
                error=exc,
            )
            return _outcome(context, STATUS_AUDIT_FAILED, exc)

        profile_failed = False
        if self._profile is not None:
            try:
                context = self._profile.run(context)
            except ProfileUpdateError as exc:
                profile_failed = True
                Log.error(
                    "Profile aggregate update failed",
                    **_job_context(job),
                    storage_key=context.storage_key,
                    error=exc,
                )

        Log.info(f"Stored: {context.storage_key}")
        return FileOutcome(
            submission_id=job.submission_id,
            field_id=job.field_id,
            origin_locator=job.origin_locator,
            status=STATUS_STORED,
            storage_key=context.storage_key,
            audit_skipped=context.audit_skipped,
            profile_failed=profile_failed,
        )


def _job_context(job: FetchJob) -> dict[str, object]:
    return {
        "submission_id": job.submission_id,
        "field_id": job.field_id,
        "origin_locator": job.origin_locator,
    }


def _outcome(context: FileContext, status: str, exc: Exception) -> FileOutcome:
    job = context.job
    return FileOutcome(
        submission_id=job.submission_id,
        field_id=job.field_id,
        origin_locator=job.origin_locator,
        status=status,
        storage_key=context.storage_key,
        error=str(exc),
    )
