from collections.abc import Iterable
from typing import Any, ClassVar
from urllib.parse import urlsplit

from file_migrator.database.models import SubmissionRow
from file_migrator.origin.base import BaseOriginLocator, decode_payload
from file_migrator.origin.http_client import OriginHttpClient
from file_migrator.origin.models import FetchedFile, FetchJob, filename_from_url

FILE_UPLOAD_TYPE = "control_fileupload"


class AnswerPayloadLocator(BaseOriginLocator):
    """File URLs are embedded in raw_payload["answers"], keyed by field id.

    The API key is only sent to the origin host and the configured upload hosts;
    answer URLs on any other host are fetched without it.
    """

    source_column: ClassVar[str] = "raw_payload"

    def __init__(
        self,
        http_client: OriginHttpClient,
        *,
        base_url: str = "",
        api_key: str = "",
        upload_hosts: Iterable[str] = (),
    ) -> None:
        super().__init__(http_client)
        self._api_key = api_key
        self._trusted_hosts = {
            host.strip().lower() for host in (_hostname(base_url), *upload_hosts) if host.strip()
        }

    def references(self, submission: SubmissionRow) -> list[Any]:
        payload = decode_payload(submission.payload)
        answers = payload.get("answers") if isinstance(payload, dict) else None
        if not isinstance(answers, dict):
            return []
        return [
            {**entry, "field_id": str(field_id)}
            for field_id, entry in answers.items()
            if isinstance(entry, dict)
            and entry.get("type") == FILE_UPLOAD_TYPE
            and answer_urls(entry.get("answer"))
        ]

    def resolve_reference(
        self,
        submission: SubmissionRow,
        reference: Any,
        position: int,
    ) -> list[FetchJob]:
        if reference.get("type") != FILE_UPLOAD_TYPE:
            return []
        return [
            FetchJob(
                submission_id=submission.submission_id,
                field_id=reference["field_id"],
                origin_locator=url,
                filename=filename_from_url(url),
            )
            for url in answer_urls(reference.get("answer"))
        ]

    def fetch(self, job: FetchJob) -> FetchedFile:
        params = {"apiKey": self._api_key} if self._sends_api_key(job.origin_locator) else None
        return self._http.get(job.origin_locator, params=params)

    def _sends_api_key(self, url: str) -> bool:
        return bool(self._api_key) and _hostname(url) in self._trusted_hosts


def answer_urls(answer: Any) -> list[str]:
    """Normalize a single-URL or multi-URL answer to a list of non-empty URLs."""
    values = answer if isinstance(answer, list) else [answer]
    return [value.strip() for value in values if isinstance(value, str) and value.strip()]


def _hostname(url: str) -> str:
    return (urlsplit(url.strip()).hostname or "").lower()
