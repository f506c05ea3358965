import json
from abc import ABC, abstractmethod
from typing import Any, ClassVar

from file_migrator.database.models import SubmissionRow
from file_migrator.logging.logger import Log
from file_migrator.origin.http_client import OriginHttpClient
from file_migrator.origin.models import FetchedFile, FetchJob


class BaseOriginLocator(ABC):
    """Contract for turning a submission's file references into fetchable bytes."""

    source_column: ClassVar[str]

    def __init__(self, http_client: OriginHttpClient) -> None:
        self._http = http_client

    @abstractmethod
    def references(self, submission: SubmissionRow) -> list[Any]:
        """Extract raw file references from the submission's source payload.

        Absent, null or malformed payloads yield an empty list.
        """

    @abstractmethod
    def resolve_reference(
        self,
        submission: SubmissionRow,
        reference: Any,
        position: int,
    ) -> list[FetchJob]:
        """Turn one raw reference (at its listed position) into zero or more jobs."""

    @abstractmethod
    def fetch(self, job: FetchJob) -> FetchedFile:
        """Fetch a job's bytes.

        Raises:
            OriginFetchError: on network failure or non-2xx status.
        """

    def resolve(self, submission: SubmissionRow) -> list[FetchJob]:
        """Resolve every reference in listed order. Malformed references yield no jobs."""
        jobs: list[FetchJob] = []
        for position, reference in enumerate(self.references(submission)):
            try:
                resolved = self.resolve_reference(submission, reference, position)
            except (KeyError, TypeError, ValueError, AttributeError) as exc:
                Log.warning(
                    "Skipping malformed file reference",
                    submission_id=submission.submission_id,
                    position=position,
                    error=exc,
                )
                continue
            for job in resolved:
                if not job.filename:
                    Log.warning(
                        "Skipping file reference without a filename",
                        submission_id=submission.submission_id,
                        field_id=job.field_id,
                        origin_locator=job.origin_locator,
                    )
                    continue
                jobs.append(job)
        return jobs


def decode_payload(payload: Any) -> Any:
    """Decode a JSON payload stored as text; jsonb columns arrive already decoded."""
    if isinstance(payload, (str, bytes)):
        try:
            return json.loads(payload)
        except ValueError:
            return None
    return payload


def as_list(payload: Any) -> list[Any]:
    payload = decode_payload(payload)
    return payload if isinstance(payload, list) else []


def field_id_of(reference: dict[str, Any]) -> str:
    field_id = reference.get("field_id")
    if field_id is None or str(field_id).strip() == "":
        raise ValueError("reference has no field_id")
    return str(field_id)
