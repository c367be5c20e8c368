"""S3 implementation of ObjectStorage (works against AWS S3 and MinIO)."""

from __future__ import annotations

import logging
import os

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from hls_queue_shared import ObjectNotFoundError, StorageUnavailableError

logger = logging.getLogger(__name__)

# Minimum S3 multipart part size (except last) is 5 MB
MULTIPART_CHUNK_SIZE = 8 * 1024 * 1024  # 8 MB
MULTIPART_THRESHOLD = 100 * 1024 * 1024  # 100 MB: use multipart above this
DOWNLOAD_CHUNK_SIZE = 1024 * 1024

_NOT_FOUND_CODES = ("404", "NoSuchKey", "NoSuchBucket", "NotFound")


def _is_not_found(e: ClientError) -> bool:
    return e.response.get("Error", {}).get("Code") in _NOT_FOUND_CODES


class S3ObjectStorage:
    """ObjectStorage implementation using S3."""

    def __init__(
        self,
        *,
        region_name: str | None = None,
        endpoint_url: str | None = None,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        force_path_style: bool = False,
    ) -> None:
        config = None
        if force_path_style:
            config = Config(s3={"addressing_style": "path"})
        self._client = boto3.client(
            "s3",
            region_name=region_name,
            endpoint_url=endpoint_url,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            config=config,
        )

    def download_file(self, bucket: str, key: str, path: str) -> None:
        """Stream object body to path in chunks (never loads the whole object in memory)."""
        try:
            resp = self._client.get_object(Bucket=bucket, Key=key)
            with open(path, "wb") as f:
                for chunk in resp["Body"].iter_chunks(DOWNLOAD_CHUNK_SIZE):
                    f.write(chunk)
        except ClientError as e:
            if _is_not_found(e):
                raise ObjectNotFoundError(bucket, key) from e
            raise StorageUnavailableError(
                f"download s3://{bucket}/{key} failed: {e}"
            ) from e
        except BotoCoreError as e:
            raise StorageUnavailableError(
                f"download s3://{bucket}/{key} failed: {e}"
            ) from e
        logger.debug("s3: downloaded s3://%s/%s -> %s", bucket, key, path)

    def upload_file(
        self,
        bucket: str,
        key: str,
        path: str,
        *,
        content_type: str = "application/octet-stream",
    ) -> None:
        """Upload a file from local path; uses multipart for files over 100 MB."""
        try:
            file_size = os.path.getsize(path)
            if file_size >= MULTIPART_THRESHOLD:
                self._upload_multipart(bucket, key, path, content_type)
            else:
                with open(path, "rb") as f:
                    self._client.put_object(
                        Bucket=bucket, Key=key, Body=f.read(), ContentType=content_type
                    )
        except ClientError as e:
            if _is_not_found(e):
                raise ObjectNotFoundError(bucket, key) from e
            raise StorageUnavailableError(f"upload s3://{bucket}/{key} failed: {e}") from e
        except BotoCoreError as e:
            raise StorageUnavailableError(f"upload s3://{bucket}/{key} failed: {e}") from e

    def _upload_multipart(self, bucket: str, key: str, path: str, content_type: str) -> None:
        """Upload using S3 multipart API for large files."""
        resp = self._client.create_multipart_upload(
            Bucket=bucket, Key=key, ContentType=content_type
        )
        upload_id = resp["UploadId"]
        parts: list[dict] = []
        try:
            with open(path, "rb") as f:
                part_number = 1
                while True:
                    chunk = f.read(MULTIPART_CHUNK_SIZE)
                    if not chunk:
                        break
                    part_resp = self._client.upload_part(
                        Bucket=bucket,
                        Key=key,
                        UploadId=upload_id,
                        PartNumber=part_number,
                        Body=chunk,
                    )
                    parts.append({"ETag": part_resp["ETag"], "PartNumber": part_number})
                    part_number += 1
            self._client.complete_multipart_upload(
                Bucket=bucket,
                Key=key,
                UploadId=upload_id,
                MultipartUpload={"Parts": parts},
            )
        except Exception:
            self._client.abort_multipart_upload(
                Bucket=bucket, Key=key, UploadId=upload_id
            )
            raise

