import time
from collections.abc import Mapping
from types import TracebackType

import httpx

from file_migrator.errors import OriginFetchError
from file_migrator.logging.logger import Log
from file_migrator.origin.models import FetchedFile


class OriginHttpClient:
    """Fetches bytes from the origin host over a shared httpx.Client.

    Non-2xx responses and transport errors are raised as OriginFetchError.
    Retryable failures (transport errors, 5xx) are attempted up to max_attempts times.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float,
        default_content_type: str,
        max_attempts: int = 1,
        backoff_seconds: float = 1.0,
        headers: Mapping[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            timeout=timeout_seconds,
            follow_redirects=True,
            headers=dict(headers or {}),
            transport=transport,
        )
        self._default_content_type = default_content_type
        self._max_attempts = max(1, max_attempts)
        self._backoff_seconds = backoff_seconds

    def get(
        self,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> FetchedFile:
        """GET a URL and return its body and content-type."""
        attempt = 1
        while True:
            try:
                return self._get_once(url, params=params, headers=headers)
            except OriginFetchError as exc:
                if not exc.retryable or attempt >= self._max_attempts:
                    raise
                Log.warning(
                    f"Fetch attempt {attempt} failed, retrying",
                    url=url,
                    error=exc,
                )
                time.sleep(self._backoff_seconds)
                attempt += 1

    def _get_once(
        self,
        url: str,
        *,
        params: Mapping[str, str] | None,
        headers: Mapping[str, str] | None,
    ) -> FetchedFile:
        try:
            response = self._client.get(url, params=params, headers=headers)
        except httpx.TimeoutException as exc:
            raise OriginFetchError(f"Timed out fetching {url}", retryable=True) from exc
        except httpx.HTTPError as exc:
            raise OriginFetchError(f"Network error fetching {url}: {exc}", retryable=True) from exc

        if not response.is_success:
            raise OriginFetchError(
                f"Origin returned HTTP {response.status_code} for {url}",
                status_code=response.status_code,
                retryable=response.status_code >= 500,
            )
        return FetchedFile(
            content=response.content,
            content_type=self._content_type(response),
        )

    def _content_type(self, response: httpx.Response) -> str:
        header = response.headers.get("content-type", "")
        media_type = header.split(";", 1)[0].strip()
        return media_type or self._default_content_type

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "OriginHttpClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
