"""Pytest fixtures: app with a real Scheduler driving an in-memory fake pipeline."""

import threading

import pytest
from fastapi.testclient import TestClient
from hls_queue_shared import Job, JobState, ObjectNotFoundError
from transcode_worker import Scheduler

from hls_queue_api.main import app


class FakePipeline:
    """Pipeline for tests: keys listed in hold block until released, missing keys fail."""

    def __init__(self) -> None:
        self.hold: set[str] = set()
        self.missing: set[str] = set()
        self.started: dict[str, threading.Event] = {}
        self.release = threading.Event()

    def block(self, key: str) -> threading.Event:
        self.hold.add(key)
        self.started[key] = threading.Event()
        return self.started[key]

    def run(self, job: Job, set_state) -> None:
        key = job.source.key
        set_state(JobState.FETCHING)
        if key in self.missing:
            raise ObjectNotFoundError(job.source.bucket, key)
        if key in self.hold:
            self.started[key].set()
            self.release.wait(5)
        for state in (JobState.INSPECTING, JobState.TRANSCODING, JobState.PUBLISHING):
            set_state(state)


@pytest.fixture
def fake_pipeline() -> FakePipeline:
    return FakePipeline()


@pytest.fixture
def scheduler(fake_pipeline: FakePipeline):
    """Set app.state.scheduler for the test; release blocked jobs afterwards."""
    sched = Scheduler(fake_pipeline, retained_jobs=10)
    app.state.scheduler = sched
    yield sched
    fake_pipeline.release.set()
    sched.wait_idle(5)
    del app.state.scheduler


@pytest.fixture
def client(scheduler: Scheduler) -> TestClient:
    """TestClient for the app (requires scheduler to set app.state)."""
    return TestClient(app)
