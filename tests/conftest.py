import logging
from collections.abc import Callable, Generator

import httpx
import pytest

from file_migrator.errors import ObjectStoreError
from file_migrator.logging.logger import Log
from file_migrator.origin.http_client import OriginHttpClient
from file_migrator.storage.base import BaseObjectStore


class InMemoryObjectStore(BaseObjectStore):
    """Object store double that keeps objects in a dict and can fail chosen keys."""

    def __init__(self) -> None:
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.failing_keys: set[str] = set()
        self.put_calls: list[str] = []

    def put(
        self,
        key: str,
        data: bytes,
        content_type: str,
        overwrite: bool = True,
    ) -> str:
        self.put_calls.append(key)
        if key in self.failing_keys:
            raise ObjectStoreError(f"Upload of {key} failed: simulated")
        self.objects[key] = (data, content_type)
        return self.public_url(key)

    def public_url(self, key: str) -> str:
        return f"https://storage.test/offer-images/{key}"


@pytest.fixture()
def memory_store() -> InMemoryObjectStore:
    return InMemoryObjectStore()


@pytest.fixture()
def mock_http_client() -> Generator[Callable[..., OriginHttpClient], None, None]:
    """Build an OriginHttpClient backed by httpx.MockTransport."""
    clients: list[OriginHttpClient] = []

    def _build(
        handler: Callable[[httpx.Request], httpx.Response],
        **kwargs: object,
    ) -> OriginHttpClient:
        options: dict[str, object] = {
            "timeout_seconds": 5,
            "default_content_type": "image/jpeg",
        }
        options.update(kwargs)
        client = OriginHttpClient(transport=httpx.MockTransport(handler), **options)  # type: ignore[arg-type]
        clients.append(client)
        return client

    yield _build
    for client in clients:
        client.close()


@pytest.fixture(autouse=True)
def reset_log() -> Generator[None, None, None]:
    """Drop handlers Log.configure attached to pytest's captured stdout."""
    yield
    for handler in list(Log._logger.handlers):
        Log._logger.removeHandler(handler)
    Log._logger.setLevel(logging.NOTSET)
