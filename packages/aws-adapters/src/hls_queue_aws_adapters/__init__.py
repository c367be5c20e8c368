"""AWS (S3 / MinIO) implementation of the hls-queue storage interface."""

from .env_config import object_storage_from_env
from .s3_storage import S3ObjectStorage

__all__ = [
    "S3ObjectStorage",
    "object_storage_from_env",
]
