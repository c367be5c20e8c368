"""
Error taxonomy for the transcoding pipeline.

Every stage failure raises a PipelineError subclass; the scheduler records
kind + message on the job and moves on to the next queued job.
"""

from .models import ErrorKind


class PipelineError(Exception):
    """Base exception for all pipeline and admission failures."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidRequestError(PipelineError):
    """Submission rejected: a required field is missing or empty."""

    kind = ErrorKind.INVALID_REQUEST


class ObjectNotFoundError(PipelineError):
    """Source object (or bucket) does not exist."""

    kind = ErrorKind.OBJECT_NOT_FOUND

    def __init__(self, bucket: str, key: str) -> None:
        self.bucket = bucket
        self.key = key
        super().__init__(f"Object not found: s3://{bucket}/{key}")


class StorageUnavailableError(PipelineError):
    """Transport or service error talking to object storage."""

    kind = ErrorKind.STORAGE_UNAVAILABLE


class InvalidMediaError(PipelineError):
    """Probe failed or reported values no variant plan can be derived from."""

    kind = ErrorKind.INVALID_MEDIA


class TranscodeFailedError(PipelineError):
    """ffmpeg exited non-zero, timed out, or produced no master playlist."""

    kind = ErrorKind.TRANSCODE_FAILED


class JobNotFoundError(PipelineError):
    """Status query for a job id that was never submitted or has been evicted."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, job_id: str) -> None:
        self.job_id = job_id
        super().__init__(f"Job not found: {job_id}")
