"""Shared types and conventions for the hls-queue transcoding service."""

from .errors import (
    InvalidMediaError,
    InvalidRequestError,
    JobNotFoundError,
    ObjectNotFoundError,
    PipelineError,
    StorageUnavailableError,
    TranscodeFailedError,
)
from .interfaces import ObjectStorage
from .keys import (
    MASTER_PLAYLIST_NAME,
    build_output_key,
    content_type_for_filename,
    input_suffix_for_key,
    publish_order,
)
from .logging_config import configure_logging
from .models import (
    ErrorKind,
    ErrorResponse,
    HealthResponse,
    Job,
    JobError,
    JobState,
    JobStatusResponse,
    MediaInfo,
    ProcessVideoRequest,
    ProcessVideoResponse,
    QueueStatusResponse,
    SourceLocation,
    Variant,
    VariantPlan,
)

__version__ = "0.1.0"
__all__ = [
    "MASTER_PLAYLIST_NAME",
    "ErrorKind",
    "ErrorResponse",
    "HealthResponse",
    "InvalidMediaError",
    "InvalidRequestError",
    "Job",
    "JobError",
    "JobNotFoundError",
    "JobState",
    "JobStatusResponse",
    "MediaInfo",
    "ObjectNotFoundError",
    "ObjectStorage",
    "PipelineError",
    "ProcessVideoRequest",
    "ProcessVideoResponse",
    "QueueStatusResponse",
    "SourceLocation",
    "StorageUnavailableError",
    "TranscodeFailedError",
    "Variant",
    "VariantPlan",
    "build_output_key",
    "configure_logging",
    "content_type_for_filename",
    "input_suffix_for_key",
    "publish_order",
]
