"""
App config from environment with defaults.
Uses pydantic-settings so all env vars are validated and documented in one model.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_workspace_root() -> Path:
    return Path(tempfile.gettempdir()) / "hls-queue"


class TranscodeWorkerSettings(BaseSettings):
    """
    All environment variables used by the transcode worker.
    Env vars are read from os.environ (UPPER_SNAKE_CASE by default).
    """

    model_config = SettingsConfigDict(extra="ignore")

    # Per-job workspaces are created as {workspace_root}/{job_id}/
    workspace_root: Path = _default_workspace_root()

    # Terminal jobs kept for status queries (oldest evicted first)
    retained_jobs: int = 100

    ffmpeg_path: str = "ffmpeg"
    ffprobe_path: str = "ffprobe"
    ffmpeg_preset: str = "veryfast"
    audio_bitrate: str = "128k"

    # Wall-clock limit for one ffmpeg run; unset means no limit
    transcode_timeout_sec: float | None = None

    # Upload bucket for HLS output; empty means the source object's bucket
    output_bucket: str = ""

    @field_validator("retained_jobs", mode="before")
    @classmethod
    def clamp_retained_jobs(cls, v: object) -> int:
        try:
            n = int(v)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 100
        return max(1, n)

    @field_validator("transcode_timeout_sec", mode="before")
    @classmethod
    def empty_timeout_is_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v


def get_settings() -> TranscodeWorkerSettings:
    """Return validated settings from current environment."""
    return TranscodeWorkerSettings()
