from dataclasses import dataclass
from urllib.parse import urlsplit


@dataclass(frozen=True)
class FetchJob:
    """One file to fetch from the origin, attributed to a submission field."""

    submission_id: str
    field_id: str
    origin_locator: str
    filename: str
    index: int | None = None


@dataclass(frozen=True)
class FetchedFile:
    content: bytes
    content_type: str


def filename_from_url(url: str) -> str:
    """Final path segment of a URL, without query or fragment.

    The segment is kept percent-encoded so an encoded slash cannot add a key level.
    """
    path = urlsplit(url.strip()).path
    return path.rstrip("/").rsplit("/", 1)[-1]
