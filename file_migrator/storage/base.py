from abc import ABC, abstractmethod


class BaseObjectStore(ABC):
    """Contract for all object storage adapters."""

    @abstractmethod
    def put(
        self,
        key: str,
        data: bytes,
        content_type: str,
        overwrite: bool = True,
    ) -> str:
        """Write an object under a hierarchical key.

        Args:
            key: Storage key, e.g. "<submission>/<field>/<filename>".
            data: Object payload.
            content_type: MIME type recorded with the object.
            overwrite: Replace an existing object. When False an existing key is an error.

        Returns:
            Public URL of the stored object.

        Raises:
            ObjectExistsError: if overwrite is False and the key exists.
            ObjectStoreError: on any other failure.
        """

    @abstractmethod
    def public_url(self, key: str) -> str:
        """Publicly accessible URL for a key."""


def storage_key(submission_id: str, field_id: str, filename: str) -> str:
    """Deterministic storage key: <submission_id>/<field_id>/<filename>."""
    return f"{submission_id}/{field_id}/{filename}"
