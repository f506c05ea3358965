from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SubmissionRow:
    """A row from provider_submissions_api: the id plus the strategy's source column."""

    submission_id: str
    payload: Any = None


@dataclass(frozen=True)
class AuditRecord:
    """Represents a row in the provider_images table."""

    submission_id: str
    field_id: str
    original_url: str
    stored_path: str


@dataclass(frozen=True)
class ProfileImageEntry:
    """One element of the provider_profiles.images array."""

    stored_path: str
    public_url: str
    field_id: str
    original_url: str

    def to_json(self) -> dict[str, str]:
        return {
            "stored_path": self.stored_path,
            "public_url": self.public_url,
            "field_id": self.field_id,
            "original_url": self.original_url,
        }
