"""Transcode worker: probe, plan, ffmpeg HLS packaging, publishing, and the job scheduler."""

from .factory import build_scheduler
from .lifecycle import JobPipeline
from .planner import plan_variants
from .scheduler import JobStatusView, Scheduler, SchedulerSnapshot, SubmitResult

__all__ = [
    "JobPipeline",
    "JobStatusView",
    "Scheduler",
    "SchedulerSnapshot",
    "SubmitResult",
    "build_scheduler",
    "plan_variants",
]
