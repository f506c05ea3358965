from typing import Any
from urllib.parse import quote

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from file_migrator.errors import ObjectExistsError, ObjectStoreError
from file_migrator.storage.base import BaseObjectStore


class S3ObjectStore(BaseObjectStore):
    """Writes objects to an S3-compatible bucket using boto3."""

    def __init__(
        self,
        *,
        endpoint: str,
        region: str,
        bucket: str,
        access_key: str,
        secret_key: str,
        public_url_base: str = "",
        client: Any = None,
    ) -> None:
        self._endpoint = endpoint.rstrip("/")
        self._bucket = bucket
        self._public_url_base = public_url_base.rstrip("/")
        self._client = client or boto3.client(
            "s3",
            endpoint_url=endpoint,
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            config=Config(
                signature_version="s3v4",
                s3={"addressing_style": "path"},
                connect_timeout=30,
                read_timeout=60,
            ),
        )

    def put(
        self,
        key: str,
        data: bytes,
        content_type: str,
        overwrite: bool = True,
    ) -> str:
        if not overwrite and self._exists(key):
            raise ObjectExistsError(f"Object already exists: {self._bucket}/{key}")
        try:
            self._client.put_object(
                Bucket=self._bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as exc:
            raise ObjectStoreError(f"Upload of {self._bucket}/{key} failed: {exc}") from exc
        return self.public_url(key)

    def public_url(self, key: str) -> str:
        base = self._public_url_base or f"{self._endpoint}/{self._bucket}"
        return f"{base}/{quote(key)}"

    def _exists(self, key: str) -> bool:
        try:
            self._client.head_object(Bucket=self._bucket, Key=key)
        except ClientError as exc:
            code = str(exc.response.get("Error", {}).get("Code", ""))
            if code in ("404", "NoSuchKey", "NotFound"):
                return False
            raise ObjectStoreError(f"Lookup of {self._bucket}/{key} failed: {exc}") from exc
        except BotoCoreError as exc:
            raise ObjectStoreError(f"Lookup of {self._bucket}/{key} failed: {exc}") from exc
        return True
