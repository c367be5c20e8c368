"""Job routes: submit a transcoding job, poll its status."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from hls_queue_shared import (
    ErrorResponse,
    InvalidRequestError,
    JobNotFoundError,
    JobStatusResponse,
    ProcessVideoRequest,
    ProcessVideoResponse,
    SourceLocation,
)
from transcode_worker import Scheduler

from ..deps import get_scheduler

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/process-video",
    status_code=202,
    response_model=ProcessVideoResponse,
    responses={400: {"model": ErrorResponse}},
)
async def process_video(
    body: ProcessVideoRequest,
    scheduler: Scheduler = Depends(get_scheduler),
):
    """Queue a job for s3://bucket/key; HLS output goes under outputPrefix."""
    source = SourceLocation(bucket=body.bucket or "", key=body.key or "")
    try:
        result = scheduler.submit(source, body.output_prefix)
    except InvalidRequestError as e:
        logger.info("process-video rejected: %s", e.message)
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error=e.message, kind=e.kind).model_dump(mode="json"),
        )
    return ProcessVideoResponse(job_id=result.job_id, position=result.position)


@router.get(
    "/job/{job_id}",
    response_model=JobStatusResponse,
    response_model_exclude_none=True,
    responses={404: {"model": ErrorResponse}},
)
async def job_status(
    job_id: str,
    scheduler: Scheduler = Depends(get_scheduler),
):
    """Current state; position while queued, error once failed."""
    try:
        view = scheduler.query_status(job_id)
    except JobNotFoundError as e:
        return JSONResponse(
            status_code=404,
            content=ErrorResponse(error=e.message, kind=e.kind).model_dump(mode="json"),
        )
    return JobStatusResponse(
        job_id=view.job.job_id,
        state=view.job.state,
        position=view.position,
        error=view.job.error,
    )
