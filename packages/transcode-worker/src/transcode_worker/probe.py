"""ffprobe wrapper: duration, native resolution and audio presence of a local file."""

from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path

from hls_queue_shared import InvalidMediaError, MediaInfo

logger = logging.getLogger(__name__)


def _parse_probe_output(raw: str) -> MediaInfo:
    """Build MediaInfo from ffprobe JSON (format.duration + streams[])."""
    try:
        data = json.loads(raw or "{}")
    except json.JSONDecodeError as e:
        raise InvalidMediaError(f"ffprobe returned invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise InvalidMediaError("ffprobe returned unexpected output")
    streams = data.get("streams") or []
    fmt = data.get("format") or {}

    video = next((s for s in streams if s.get("codec_type") == "video"), None)
    if video is None:
        raise InvalidMediaError("no video stream found")
    has_audio = any(s.get("codec_type") == "audio" for s in streams)

    try:
        width = int(video.get("width") or 0)
        height = int(video.get("height") or 0)
        duration = float(fmt.get("duration") or 0)
    except (TypeError, ValueError) as e:
        raise InvalidMediaError(f"unreadable probe values: {e}") from e
    return MediaInfo(width=width, height=height, duration_sec=duration, has_audio=has_audio)


def probe_media(path: str | Path, *, ffprobe: str = "ffprobe") -> MediaInfo:
    """
    Run ffprobe on path and return its report.

    Raises:
        InvalidMediaError: ffprobe is missing, fails, or the file has no video stream.
    """
    cmd = [
        ffprobe,
        "-v",
        "error",
        "-show_entries",
        "format=duration:stream=codec_type,width,height",
        "-of",
        "json",
        str(path),
    ]
    try:
        res = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError as e:
        raise InvalidMediaError(f"ffprobe not available: {e}") from e
    if res.returncode != 0:
        stderr = (res.stderr or "").strip()
        raise InvalidMediaError(f"ffprobe exited {res.returncode}: {stderr}")
    info = _parse_probe_output(res.stdout)
    logger.debug(
        "probe: %s width=%s height=%s duration=%.2f audio=%s",
        Path(path).name,
        info.width,
        info.height,
        info.duration_sec,
        info.has_audio,
    )
    return info
