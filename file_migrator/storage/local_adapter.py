from pathlib import Path

from file_migrator.errors import ObjectExistsError, ObjectStoreError
from file_migrator.storage.base import BaseObjectStore


class LocalObjectStore(BaseObjectStore):
    """Writes objects to {root}/{bucket}/{key} on the local filesystem."""

    def __init__(self, root: Path, bucket: str) -> None:
        self._bucket_root = Path(root) / bucket

    def put(
        self,
        key: str,
        data: bytes,
        content_type: str,
        overwrite: bool = True,
    ) -> str:
        path = self._resolve_path(key)
        if not overwrite and path.exists():
            raise ObjectExistsError(f"Object already exists: {path}")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            raise ObjectStoreError(f"Write of {path} failed: {exc}") from exc
        return self.public_url(key)

    def public_url(self, key: str) -> str:
        return self._resolve_path(key).resolve().as_uri()

    def _resolve_path(self, key: str) -> Path:
        path = self._bucket_root.joinpath(*key.split("/"))
        if ".." in Path(key).parts:
            raise ObjectStoreError(f"Key escapes bucket root: {key}")
        return path
