"""Pydantic models for jobs, media reports, variant plans, and API DTOs."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class JobState(str, Enum):
    """Lifecycle state of a transcoding job."""

    QUEUED = "queued"
    FETCHING = "fetching"
    INSPECTING = "inspecting"
    TRANSCODING = "transcoding"
    PUBLISHING = "publishing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (JobState.COMPLETED, JobState.FAILED)


class ErrorKind(str, Enum):
    """Failure category recorded on a failed job (and returned by the API)."""

    INVALID_REQUEST = "invalid_request"
    OBJECT_NOT_FOUND = "object_not_found"
    STORAGE_UNAVAILABLE = "storage_unavailable"
    INVALID_MEDIA = "invalid_media"
    TRANSCODE_FAILED = "transcode_failed"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"


class SourceLocation(BaseModel):
    """Bucket + key of the source object."""

    model_config = ConfigDict(frozen=True)

    bucket: str
    key: str


class JobError(BaseModel):
    """Error captured on a job when it reaches the failed state."""

    kind: ErrorKind
    message: str


class Job(BaseModel):
    """
    In-memory job record owned by the scheduler.

    Values are frozen; the scheduler replaces the stored record with
    model_copy(update=...) on every state change.
    """

    model_config = ConfigDict(frozen=True)

    job_id: str = Field(..., description="Unique, creation-ordered job identifier")
    source: SourceLocation
    output_prefix: str = Field(..., description="Destination key prefix for HLS output")
    state: JobState = JobState.QUEUED
    created_at: float = Field(..., description="Unix timestamp when the job was submitted")
    started_at: float | None = Field(None, description="Unix timestamp when execution began")
    finished_at: float | None = Field(
        None, description="Unix timestamp when the job reached a terminal state"
    )
    error: JobError | None = Field(None, description="Set only when state is failed")


class MediaInfo(BaseModel):
    """Probe report for a local media file."""

    width: int
    height: int
    duration_sec: float
    has_audio: bool = False


class Variant(BaseModel):
    """One output quality tier."""

    model_config = ConfigDict(frozen=True)

    bitrate_kbps: int = Field(..., gt=0)
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)


class VariantPlan(BaseModel):
    """Ordered tiers (ascending bitrate) plus HLS segment duration and audio mapping flag."""

    variants: list[Variant]
    segment_duration_sec: int = Field(..., gt=0)
    has_audio: bool = True


# --- API DTOs ---


class ProcessVideoRequest(BaseModel):
    """
    Body of POST /process-video.

    Fields are optional at the schema level so that a missing field is reported
    as 400 {error} by the scheduler's own validation rather than a 422.
    """

    model_config = ConfigDict(populate_by_name=True)

    bucket: str | None = None
    key: str | None = None
    output_prefix: str | None = Field(None, alias="outputPrefix")


class ProcessVideoResponse(BaseModel):
    """Accepted submission: job id and 1-based queue position."""

    model_config = ConfigDict(populate_by_name=True)

    job_id: str = Field(..., alias="jobId")
    position: int = Field(..., ge=1)
    state: JobState = JobState.QUEUED
    message: str = "Video queued for processing"


class JobStatusResponse(BaseModel):
    """Body of GET /job/{job_id}; position only while queued, error only when failed."""

    model_config = ConfigDict(populate_by_name=True)

    job_id: str = Field(..., alias="jobId")
    state: JobState
    position: int | None = None
    error: JobError | None = None


class HealthResponse(BaseModel):
    """Body of GET /health."""

    model_config = ConfigDict(populate_by_name=True)

    status: str = "ok"
    queue_length: int = Field(..., alias="queueLength")
    busy: bool


class QueueStatusResponse(BaseModel):
    """Body of GET /status."""

    model_config = ConfigDict(populate_by_name=True)

    queue_length: int = Field(..., alias="queueLength")
    is_processing: bool = Field(..., alias="isProcessing")
    current_job_id: str | None = Field(None, alias="currentJobId")


class ErrorResponse(BaseModel):
    """Error body for 400/404 responses."""

    error: str
    kind: ErrorKind | None = None
