"""Tests for the error taxonomy."""

from hls_queue_shared import (
    ErrorKind,
    InvalidMediaError,
    InvalidRequestError,
    JobNotFoundError,
    ObjectNotFoundError,
    PipelineError,
    StorageUnavailableError,
    TranscodeFailedError,
)


def test_each_error_carries_its_kind() -> None:
    assert InvalidRequestError("x").kind == ErrorKind.INVALID_REQUEST
    assert ObjectNotFoundError("b", "k").kind == ErrorKind.OBJECT_NOT_FOUND
    assert StorageUnavailableError("x").kind == ErrorKind.STORAGE_UNAVAILABLE
    assert InvalidMediaError("x").kind == ErrorKind.INVALID_MEDIA
    assert TranscodeFailedError("x").kind == ErrorKind.TRANSCODE_FAILED
    assert JobNotFoundError("j").kind == ErrorKind.NOT_FOUND


def test_all_are_pipeline_errors() -> None:
    for exc in (
        InvalidRequestError("x"),
        ObjectNotFoundError("b", "k"),
        StorageUnavailableError("x"),
        InvalidMediaError("x"),
        TranscodeFailedError("x"),
        JobNotFoundError("j"),
    ):
        assert isinstance(exc, PipelineError)


def test_object_not_found_message_names_location() -> None:
    e = ObjectNotFoundError("videos", "in/a.mp4")
    assert e.message == "Object not found: s3://videos/in/a.mp4"
    assert str(e) == e.message
    assert (e.bucket, e.key) == ("videos", "in/a.mp4")


def test_job_not_found_keeps_id() -> None:
    e = JobNotFoundError("job_1")
    assert e.job_id == "job_1"
    assert "job_1" in e.message
