"""
Build the S3 storage adapter from environment variables.

Recognized env vars:
- AWS_ENDPOINT_URL or MINIO_ENDPOINT: custom S3 endpoint (e.g. http://minio:9000).
  When set, path-style addressing is used unless S3_FORCE_PATH_STYLE=false.
- AWS_REGION (default: us-east-1)
- MINIO_ACCESS_KEY / MINIO_SECRET_KEY: explicit credentials. When unset, boto3's
  default credential chain applies (AWS_ACCESS_KEY_ID, instance role, ...).
- S3_FORCE_PATH_STYLE: true | false
"""

import os

from .s3_storage import S3ObjectStorage

DEFAULT_REGION = "us-east-1"


def _get_region() -> str:
    return os.environ.get("AWS_REGION") or DEFAULT_REGION


def _get_endpoint_url() -> str | None:
    endpoint = os.environ.get("AWS_ENDPOINT_URL") or os.environ.get("MINIO_ENDPOINT")
    if not endpoint:
        return None
    if "://" not in endpoint:
        endpoint = f"https://{endpoint}"
    return endpoint


def _force_path_style(endpoint_url: str | None) -> bool:
    raw = os.environ.get("S3_FORCE_PATH_STYLE")
    if raw is None:
        return endpoint_url is not None
    return raw.strip().lower() in ("1", "true", "yes")


def object_storage_from_env() -> S3ObjectStorage:
    """Build S3ObjectStorage from AWS_* / MINIO_* env vars."""
    endpoint_url = _get_endpoint_url()
    return S3ObjectStorage(
        region_name=_get_region(),
        endpoint_url=endpoint_url,
        access_key_id=os.environ.get("MINIO_ACCESS_KEY") or None,
        secret_access_key=os.environ.get("MINIO_SECRET_KEY") or None,
        force_path_style=_force_path_style(endpoint_url),
    )
