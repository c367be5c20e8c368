"""Dependencies and app state for FastAPI routes."""

import threading

from fastapi import Request
from transcode_worker import Scheduler

_build_lock = threading.Lock()


def get_scheduler(request: Request) -> Scheduler:
    """Return the Scheduler from app state, building it from env once if unset."""
    scheduler = getattr(request.app.state, "scheduler", None)
    if scheduler is not None:
        return scheduler
    with _build_lock:
        scheduler = getattr(request.app.state, "scheduler", None)
        if scheduler is None:
            from transcode_worker import build_scheduler

            scheduler = build_scheduler()
            request.app.state.scheduler = scheduler
    return scheduler
