"""Upload the HLS output directory to {output_prefix}/{filename} with per-suffix content types."""

from __future__ import annotations

import logging
from pathlib import Path

from hls_queue_shared import (
    ObjectStorage,
    build_output_key,
    content_type_for_filename,
    publish_order,
)

logger = logging.getLogger(__name__)


def list_output_files(output_dir: str | Path) -> list[Path]:
    """Regular files in output_dir in upload order (segments, variant playlists, master)."""
    files = [p for p in Path(output_dir).iterdir() if p.is_file()]
    return sorted(files, key=lambda p: publish_order(p.name))


def publish_outputs(
    storage: ObjectStorage,
    output_dir: str | Path,
    bucket: str,
    output_prefix: str,
) -> list[str]:
    """
    Upload every file in output_dir and return the uploaded keys in upload order.

    Storage errors propagate; a partially published prefix is left as-is.
    """
    files = list_output_files(output_dir)
    logger.info("publish: uploading %s file(s) to s3://%s/%s", len(files), bucket, output_prefix)
    keys: list[str] = []
    for path in files:
        key = build_output_key(output_prefix, path.name)
        storage.upload_file(
            bucket,
            key,
            str(path),
            content_type=content_type_for_filename(path.name),
        )
        logger.debug("publish: uploaded %s -> s3://%s/%s", path.name, bucket, key)
        keys.append(key)
    return keys
