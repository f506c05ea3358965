from typing import Any, ClassVar
from urllib.parse import urlsplit

from file_migrator.database.models import SubmissionRow
from file_migrator.origin.base import BaseOriginLocator, as_list, field_id_of
from file_migrator.origin.http_client import OriginHttpClient
from file_migrator.origin.models import FetchedFile, FetchJob, filename_from_url


class DirectUrlLocator(BaseOriginLocator):
    """References carry a fully qualified origin URL, fetched with hotlink headers."""

    source_column: ClassVar[str] = "file_refs"

    def __init__(self, http_client: OriginHttpClient, *, referer: str) -> None:
        super().__init__(http_client)
        self._headers = hotlink_headers(referer)

    def references(self, submission: SubmissionRow) -> list[Any]:
        return as_list(submission.payload)

    def resolve_reference(
        self,
        submission: SubmissionRow,
        reference: Any,
        position: int,
    ) -> list[FetchJob]:
        url = str(reference["url"]).strip()
        if not url.lower().startswith(("http://", "https://")):
            raise ValueError(f"not an absolute URL: {url!r}")
        return [
            FetchJob(
                submission_id=submission.submission_id,
                field_id=field_id_of(reference),
                origin_locator=url,
                filename=filename_from_url(url),
            )
        ]

    def fetch(self, job: FetchJob) -> FetchedFile:
        return self._http.get(job.origin_locator, headers=self._headers)


def hotlink_headers(referer: str) -> dict[str, str]:
    """Referer/Origin pair matching the upload host."""
    parts = urlsplit(referer)
    origin = f"{parts.scheme}://{parts.netloc}" if parts.netloc else referer.rstrip("/")
    return {
        "Referer": referer if referer.endswith("/") else f"{referer}/",
        "Origin": origin,
        "Accept": "image/avif,image/webp,image/*,*/*;q=0.8",
    }
