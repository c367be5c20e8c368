"""Wire storage, settings and pipeline into a Scheduler."""

from __future__ import annotations

import logging

from hls_queue_shared import ObjectStorage

from .config import TranscodeWorkerSettings, get_settings
from .lifecycle import JobPipeline
from .scheduler import Scheduler

logger = logging.getLogger(__name__)


def build_scheduler(
    storage: ObjectStorage | None = None,
    settings: TranscodeWorkerSettings | None = None,
) -> Scheduler:
    """Build a Scheduler backed by JobPipeline; storage and settings default to env."""
    settings = settings or get_settings()
    if storage is None:
        from hls_queue_aws_adapters import object_storage_from_env

        storage = object_storage_from_env()
    settings.workspace_root.mkdir(parents=True, exist_ok=True)
    logger.info(
        "transcode-worker: workspace_root=%s retained_jobs=%s output_bucket=%s",
        settings.workspace_root,
        settings.retained_jobs,
        settings.output_bucket or "(source bucket)",
    )
    pipeline = JobPipeline(storage, settings)
    return Scheduler(pipeline, retained_jobs=settings.retained_jobs)
