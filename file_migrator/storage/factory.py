from pathlib import Path

from file_migrator.config.settings import Settings
from file_migrator.storage.base import BaseObjectStore
from file_migrator.storage.local_adapter import LocalObjectStore
from file_migrator.storage.s3_adapter import S3ObjectStore


class ObjectStoreFactory:
    """Creates the object store backend selected by settings."""

    BACKENDS = ("s3", "local")

    @classmethod
    def create(cls, settings: Settings) -> BaseObjectStore:
        backend = settings.storage_backend.lower()
        if backend == "s3":
            return S3ObjectStore(
                endpoint=settings.storage_endpoint,
                region=settings.storage_region,
                bucket=settings.storage_bucket,
                access_key=settings.storage_access_key,
                secret_key=settings.storage_secret_key,
                public_url_base=settings.storage_public_url_base,
            )
        if backend == "local":
            return LocalObjectStore(Path(settings.storage_local_root), settings.storage_bucket)
        raise ValueError(
            f"Unknown storage backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
