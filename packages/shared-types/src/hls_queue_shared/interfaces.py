"""
Cloud-agnostic interface for object storage.

The S3 implementation lives in the aws-adapters package. Pipeline logic
depends on this protocol and receives the implementation by config.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ObjectStorage(Protocol):
    """Object storage: stream objects to and from local files."""

    def download_file(self, bucket: str, key: str, path: str) -> None:
        """Stream object bucket/key to a local path.

        Raises ObjectNotFoundError if the key (or bucket) does not exist and
        StorageUnavailableError on transport errors."""
        ...

    def upload_file(
        self,
        bucket: str,
        key: str,
        path: str,
        *,
        content_type: str = "application/octet-stream",
    ) -> None:
        """Upload a local file to bucket/key with the given Content-Type."""
        ...
