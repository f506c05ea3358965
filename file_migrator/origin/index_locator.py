from typing import Any, ClassVar

from file_migrator.database.models import SubmissionRow
from file_migrator.origin.base import BaseOriginLocator, as_list, field_id_of
from file_migrator.origin.http_client import OriginHttpClient
from file_migrator.origin.models import FetchedFile, FetchJob


class IndexLocator(BaseOriginLocator):
    """Files are addressed by their position in the submission's upload order.

    The position is the reference's index in the listed order, so every listed
    reference consumes one index whether or not it resolves or fetches.
    """

    source_column: ClassVar[str] = "file_refs"

    def __init__(self, http_client: OriginHttpClient, *, base_url: str, api_key: str) -> None:
        super().__init__(http_client)
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key

    def references(self, submission: SubmissionRow) -> list[Any]:
        return as_list(submission.payload)

    def resolve_reference(
        self,
        submission: SubmissionRow,
        reference: Any,
        position: int,
    ) -> list[FetchJob]:
        filename = reference.get("name") or reference.get("filename")
        if not filename:
            raise ValueError("reference has no declared filename")
        return [
            FetchJob(
                submission_id=submission.submission_id,
                field_id=field_id_of(reference),
                origin_locator=self.file_url(submission.submission_id, position),
                filename=str(filename).rsplit("/", 1)[-1],
                index=position,
            )
        ]

    def file_url(self, submission_id: str, index: int) -> str:
        return f"{self._base_url}/file/{submission_id}/{index}"

    def fetch(self, job: FetchJob) -> FetchedFile:
        return self._http.get(job.origin_locator, params={"apiKey": self._api_key})
