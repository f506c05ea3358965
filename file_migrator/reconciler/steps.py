from file_migrator.database.models import AuditRecord, ProfileImageEntry
from file_migrator.database.repositories.audit_repository import AuditRepository
from file_migrator.database.repositories.profile_repository import ProfileRepository
from file_migrator.logging.logger import Log
from file_migrator.origin.base import BaseOriginLocator
from file_migrator.reconciler.pipeline import FileContext, PipelineStep
from file_migrator.storage.base import BaseObjectStore, storage_key


class FetchStep(PipelineStep):
    def __init__(self, locator: BaseOriginLocator) -> None:
        self._locator = locator

    def run(self, context: FileContext) -> FileContext:
        job = context.job
        Log.info(
            f"Downloading {job.filename}",
            submission_id=job.submission_id,
            field_id=job.field_id,
            origin_locator=job.origin_locator,
        )
        context.fetched = self._locator.fetch(job)
        Log.debug(
            f"Downloaded {len(context.fetched.content)} bytes "
            f"({context.fetched.content_type})"
        )
        return context


class StoreObjectStep(PipelineStep):
    def __init__(self, object_store: BaseObjectStore) -> None:
        self._object_store = object_store

    def run(self, context: FileContext) -> FileContext:
        if context.fetched is None:
            raise ValueError("FileContext.fetched must be set before storing")
        job = context.job
        context.storage_key = storage_key(job.submission_id, job.field_id, job.filename)
        context.public_url = self._object_store.put(
            context.storage_key,
            context.fetched.content,
            context.fetched.content_type,
            overwrite=True,
        )
        Log.info(f"Uploaded {context.storage_key}")
        return context


class WriteAuditStep(PipelineStep):
    def __init__(self, audit_repo: AuditRepository, skip_duplicates: bool) -> None:
        self._audit_repo = audit_repo
        self._skip_duplicates = skip_duplicates

    def run(self, context: FileContext) -> FileContext:
        if not context.storage_key:
            raise ValueError("FileContext.storage_key must be set before auditing")
        if self._skip_duplicates and self._audit_repo.exists(context.storage_key):
            context.audit_skipped = True
            Log.info(f"Audit row already present for {context.storage_key}, not duplicating")
            return context
        job = context.job
        self._audit_repo.insert(
            AuditRecord(
                submission_id=job.submission_id,
                field_id=job.field_id,
                original_url=job.origin_locator,
                stored_path=context.storage_key,
            )
        )
        return context


class UpdateProfileStep(PipelineStep):
    def __init__(self, profile_repo: ProfileRepository) -> None:
        self._profile_repo = profile_repo

    def run(self, context: FileContext) -> FileContext:
        job = context.job
        images = self._profile_repo.append_image(
            job.submission_id,
            ProfileImageEntry(
                stored_path=context.storage_key,
                public_url=context.public_url,
                field_id=job.field_id,
                original_url=job.origin_locator,
            ),
        )
        Log.debug(f"Profile {job.submission_id} now holds {len(images)} images")
        return context
