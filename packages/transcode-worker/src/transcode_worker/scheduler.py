"""
Job queue and single-lane scheduler.

Submissions are accepted concurrently and appended to a FIFO queue. At most one
job runs at a time: the busy flag is checked and set under the same lock as the
dequeue, and a runner thread drains the queue until it is empty, then goes idle.
Only bookkeeping happens under the lock; the pipeline itself runs outside it.
"""

from __future__ import annotations

import itertools
import logging
import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Protocol

from hls_queue_shared import (
    ErrorKind,
    InvalidRequestError,
    Job,
    JobError,
    JobNotFoundError,
    JobState,
    PipelineError,
    SourceLocation,
)

logger = logging.getLogger(__name__)

DEFAULT_RETAINED_JOBS = 100


class Pipeline(Protocol):
    """Anything that can run one job, reporting stage changes through set_state."""

    def run(self, job: Job, set_state) -> None: ...


@dataclass(frozen=True)
class SubmitResult:
    job_id: str
    position: int


@dataclass(frozen=True)
class JobStatusView:
    """Current job value plus its 1-based queue position while queued."""

    job: Job
    position: int | None = None


@dataclass(frozen=True)
class SchedulerSnapshot:
    queue_length: int
    busy: bool
    current_job_id: str | None


def _require(value: str | None, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidRequestError(f"Missing required parameter: {field}")
    return value.strip()


class Scheduler:
    """
    FIFO admission plus exactly-one-at-a-time execution.

    Terminal jobs are kept for status queries in a ring of retained_jobs
    entries; the oldest terminal job is evicted first.
    """

    def __init__(
        self,
        pipeline: Pipeline,
        *,
        retained_jobs: int = DEFAULT_RETAINED_JOBS,
    ) -> None:
        self._pipeline = pipeline
        self._retained_jobs = max(1, retained_jobs)
        self._lock = threading.Lock()
        self._idle = threading.Condition(self._lock)
        self._queue: deque[str] = deque()
        self._jobs: dict[str, Job] = {}
        self._finished: deque[str] = deque()
        self._busy = False
        self._current: str | None = None
        self._seq = itertools.count(1)

    # --- public API ---

    def submit(self, source: SourceLocation | None, output_prefix: str | None) -> SubmitResult:
        """
        Validate and enqueue a job; start the runner if idle.

        Raises:
            InvalidRequestError: bucket, key or output_prefix missing or blank.
        """
        if source is None:
            raise InvalidRequestError("Missing required parameters: bucket, key")
        bucket = _require(source.bucket, "bucket")
        key = _require(source.key, "key")
        prefix = _require(output_prefix, "outputPrefix")

        start_runner = False
        with self._lock:
            job_id = self._new_job_id()
            self._jobs[job_id] = Job(
                job_id=job_id,
                source=SourceLocation(bucket=bucket, key=key),
                output_prefix=prefix,
                state=JobState.QUEUED,
                created_at=time.time(),
            )
            self._queue.append(job_id)
            position = len(self._queue)
            if not self._busy:
                self._busy = True
                start_runner = True
        logger.info(
            "scheduler: job_id=%s queued s3://%s/%s -> %s position=%s",
            job_id,
            bucket,
            key,
            prefix,
            position,
        )
        if start_runner:
            self._start_runner()
        return SubmitResult(job_id=job_id, position=position)

    def query_status(self, job_id: str) -> JobStatusView:
        """
        Return the job's current state and, while queued, its 1-based position.

        Raises:
            JobNotFoundError: unknown or evicted job id.
        """
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None:
                raise JobNotFoundError(job_id)
            position = None
            if job.state == JobState.QUEUED and job_id in self._queue:
                position = self._queue.index(job_id) + 1
            return JobStatusView(job=job, position=position)

    def snapshot(self) -> SchedulerSnapshot:
        with self._lock:
            return SchedulerSnapshot(
                queue_length=len(self._queue),
                busy=self._busy,
                current_job_id=self._current,
            )

    def wait_idle(self, timeout: float | None = None) -> bool:
        """Block until no job is running and the queue is empty. False on timeout."""
        with self._idle:
            return self._idle.wait_for(lambda: not self._busy, timeout=timeout)

    # --- runner ---

    def _new_job_id(self) -> str:
        return f"job_{int(time.time() * 1000)}_{next(self._seq):06d}"

    def _start_runner(self) -> None:
        """Start the runner thread; on failure the scheduler goes idle with the job still queued."""
        try:
            threading.Thread(target=self._drain, name="transcode-runner", daemon=True).start()
        except RuntimeError:
            with self._lock:
                self._busy = False
                self._idle.notify_all()
            logger.exception("scheduler: could not start runner thread")
            raise

    def _drain(self) -> None:
        """Runner thread body: run jobs until _run_next finds the queue empty."""
        job = self._run_next()
        while job is not None:
            state, error = self._execute(job)
            job = self._run_next(finished=(job.job_id, state, error))

    def _run_next(
        self,
        finished: tuple[str, JobState, JobError | None] | None = None,
    ) -> Job | None:
        """
        Serialization point: record the previous job's outcome, then dequeue the head.

        The dequeued job moves to fetching in the same step, so a queued job is
        always in the queue. Clears the busy flag and wakes wait_idle() callers
        when the queue is empty.
        """
        with self._lock:
            if finished is not None:
                self._record_outcome(*finished)
            if not self._queue:
                self._busy = False
                self._current = None
                self._idle.notify_all()
                return None
            job_id = self._queue.popleft()
            self._current = job_id
            job = self._jobs[job_id].model_copy(
                update={"state": JobState.FETCHING, "started_at": time.time()}
            )
            self._jobs[job_id] = job
            return job

    def _execute(self, job: Job) -> tuple[JobState, JobError | None]:
        """Run the pipeline for one job; never raises."""
        job_id = job.job_id
        logger.info("scheduler: job_id=%s start", job_id)

        def set_state(state: JobState) -> None:
            self._set_state(job_id, state)

        try:
            self._pipeline.run(job, set_state)
        except PipelineError as e:
            logger.warning("scheduler: job_id=%s failed (%s): %s", job_id, e.kind.value, e.message)
            return JobState.FAILED, JobError(kind=e.kind, message=e.message)
        except Exception as e:
            logger.exception("scheduler: job_id=%s failed unexpectedly: %s", job_id, e)
            return JobState.FAILED, JobError(kind=ErrorKind.INTERNAL, message=str(e) or repr(e))
        logger.info("scheduler: job_id=%s completed", job_id)
        return JobState.COMPLETED, None

    def _set_state(self, job_id: str, state: JobState) -> None:
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None or job.state.is_terminal:
                return
            self._jobs[job_id] = job.model_copy(update={"state": state})
        logger.debug("scheduler: job_id=%s state=%s", job_id, state.value)

    def _record_outcome(self, job_id: str, state: JobState, error: JobError | None) -> None:
        """Caller holds the lock."""
        job = self._jobs.get(job_id)
        if job is None:
            return
        self._jobs[job_id] = job.model_copy(
            update={"state": state, "error": error, "finished_at": time.time()}
        )
        self._finished.append(job_id)
        while len(self._finished) > self._retained_jobs:
            evicted = self._finished.popleft()
            self._jobs.pop(evicted, None)
            logger.debug("scheduler: job_id=%s evicted from status table", evicted)
