"""Health and queue status routes."""

from fastapi import APIRouter, Depends
from hls_queue_shared import HealthResponse, QueueStatusResponse
from transcode_worker import Scheduler

from ..deps import get_scheduler

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(scheduler: Scheduler = Depends(get_scheduler)) -> HealthResponse:
    snap = scheduler.snapshot()
    return HealthResponse(queue_length=snap.queue_length, busy=snap.busy)


@router.get("/status", response_model=QueueStatusResponse)
async def queue_status(scheduler: Scheduler = Depends(get_scheduler)) -> QueueStatusResponse:
    """Queue length and whether a job is running (kept for existing pollers)."""
    snap = scheduler.snapshot()
    return QueueStatusResponse(
        queue_length=snap.queue_length,
        is_processing=snap.busy,
        current_job_id=snap.current_job_id,
    )
