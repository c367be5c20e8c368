"""Tests for Pydantic model validation and serialization."""

import pytest
from pydantic import ValidationError

from hls_queue_shared import (
    ErrorKind,
    HealthResponse,
    Job,
    JobError,
    JobState,
    JobStatusResponse,
    ProcessVideoRequest,
    ProcessVideoResponse,
    SourceLocation,
    Variant,
    VariantPlan,
)


class TestJob:
    """Job model validation."""

    def test_valid_minimal(self) -> None:
        j = Job(
            job_id="job-1",
            source=SourceLocation(bucket="videos", key="in/a.mp4"),
            output_prefix="processed/a",
            created_at=1000.0,
        )
        assert j.state == JobState.QUEUED
        assert j.error is None
        assert j.started_at is None
        assert j.finished_at is None

    def test_frozen(self) -> None:
        j = Job(
            job_id="job-1",
            source=SourceLocation(bucket="b", key="k"),
            output_prefix="p",
            created_at=1.0,
        )
        with pytest.raises(ValidationError):
            j.state = JobState.FETCHING  # type: ignore[misc]

    def test_model_copy_updates_state_and_error(self) -> None:
        j = Job(
            job_id="job-1",
            source=SourceLocation(bucket="b", key="k"),
            output_prefix="p",
            created_at=1.0,
        )
        failed = j.model_copy(
            update={
                "state": JobState.FAILED,
                "error": JobError(kind=ErrorKind.TRANSCODE_FAILED, message="exit 1"),
            }
        )
        assert j.state == JobState.QUEUED
        assert failed.state == JobState.FAILED
        assert failed.error is not None
        assert failed.error.kind == ErrorKind.TRANSCODE_FAILED


class TestJobState:
    def test_terminal_states(self) -> None:
        assert JobState.COMPLETED.is_terminal
        assert JobState.FAILED.is_terminal
        for state in (
            JobState.QUEUED,
            JobState.FETCHING,
            JobState.INSPECTING,
            JobState.TRANSCODING,
            JobState.PUBLISHING,
        ):
            assert not state.is_terminal

    def test_values(self) -> None:
        assert JobState.QUEUED.value == "queued"
        assert JobState.PUBLISHING.value == "publishing"


class TestVariantPlan:
    def test_rejects_non_positive_bitrate(self) -> None:
        with pytest.raises(ValidationError):
            Variant(bitrate_kbps=0, width=640, height=360)

    def test_rejects_zero_segment_duration(self) -> None:
        with pytest.raises(ValidationError):
            VariantPlan(variants=[], segment_duration_sec=0)


class TestApiDtos:
    def test_process_video_request_accepts_camel_case(self) -> None:
        req = ProcessVideoRequest.model_validate(
            {"bucket": "b", "key": "k", "outputPrefix": "out/x"}
        )
        assert req.output_prefix == "out/x"

    def test_process_video_request_fields_optional(self) -> None:
        req = ProcessVideoRequest.model_validate({})
        assert req.bucket is None
        assert req.key is None
        assert req.output_prefix is None

    def test_process_video_response_dumps_aliases(self) -> None:
        resp = ProcessVideoResponse(job_id="job_1", position=2)
        data = resp.model_dump(by_alias=True, mode="json")
        assert data["jobId"] == "job_1"
        assert data["position"] == 2
        assert data["state"] == "queued"

    def test_process_video_response_position_is_one_based(self) -> None:
        with pytest.raises(ValidationError):
            ProcessVideoResponse(job_id="job_1", position=0)

    def test_job_status_response_excludes_none(self) -> None:
        resp = JobStatusResponse(job_id="j", state=JobState.TRANSCODING)
        data = resp.model_dump(by_alias=True, exclude_none=True, mode="json")
        assert data == {"jobId": "j", "state": "transcoding"}

    def test_health_response(self) -> None:
        data = HealthResponse(queue_length=3, busy=True).model_dump(by_alias=True)
        assert data == {"status": "ok", "queueLength": 3, "busy": True}
