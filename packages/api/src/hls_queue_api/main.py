"""FastAPI app: submit HLS transcoding jobs, poll status, health."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from hls_queue_shared import ErrorKind, ErrorResponse, configure_logging

from .config import bootstrap_env, get_settings
from .routers import health_router, jobs_router

# Load .env from HLS_QUEUE_ENV_FILE if set, before any settings are read.
bootstrap_env()

configure_logging(get_settings().log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="HLS Queue", version="0.1.0")


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies get the same 400 {error} shape as missing fields."""
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(
            error="Missing required parameters", kind=ErrorKind.INVALID_REQUEST
        ).model_dump(mode="json"),
    )


app.include_router(jobs_router)
app.include_router(health_router)


def main() -> None:
    """Run the API with uvicorn (HOST/PORT from env)."""
    import uvicorn

    settings = get_settings()
    logger.info("hls-queue api listening on %s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
