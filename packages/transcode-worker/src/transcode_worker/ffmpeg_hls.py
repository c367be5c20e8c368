"""
FFmpeg-based HLS packaging: one ffmpeg run encodes every variant of a plan.

Output layout in output_dir:
    master.m3u8            master playlist referencing each variant
    {i}.m3u8               variant playlist for tier i
    {i}_segment{n}.ts      MPEG-TS segments for tier i
"""

from __future__ import annotations

import logging
import queue
import subprocess
import threading
import time
from collections import deque
from pathlib import Path

from hls_queue_shared import MASTER_PLAYLIST_NAME, TranscodeFailedError, VariantPlan

logger = logging.getLogger(__name__)

DIAGNOSTIC_TAIL_LINES = 40
PROGRESS_LOG_STEP_PERCENT = 10
_POLL_SEC = 1.0


def build_hls_command(
    input_path: str | Path,
    output_dir: str | Path,
    plan: VariantPlan,
    *,
    ffmpeg: str = "ffmpeg",
    preset: str = "veryfast",
    audio_bitrate: str = "128k",
) -> list[str]:
    """
    Build the ffmpeg argv for the plan.

    Every variant maps the first video stream; when the plan has audio, the first
    source audio stream is mapped into every variant as well (a:i pairs with v:i).
    """
    output_dir = Path(output_dir)
    seg = plan.segment_duration_sec
    cmd = [
        ffmpeg,
        "-y",
        "-hide_banner",
        "-nostats",
        "-loglevel",
        "error",
        "-progress",
        "pipe:1",
        "-i",
        str(input_path),
        "-preset",
        preset,
        "-sc_threshold",
        "0",
        "-force_key_frames",
        f"expr:gte(t,n_forced*{seg})",
    ]
    for _ in plan.variants:
        cmd += ["-map", "0:v:0"]
        if plan.has_audio:
            cmd += ["-map", "0:a:0"]
    for i, variant in enumerate(plan.variants):
        cmd += [
            f"-c:v:{i}",
            "libx264",
            f"-b:v:{i}",
            f"{variant.bitrate_kbps}k",
            f"-filter:v:{i}",
            f"scale={variant.width}:{variant.height}",
        ]
    if plan.has_audio:
        cmd += ["-c:a", "aac", "-b:a", audio_bitrate, "-ac", "2"]
        stream_map = " ".join(f"v:{i},a:{i}" for i in range(len(plan.variants)))
    else:
        stream_map = " ".join(f"v:{i}" for i in range(len(plan.variants)))
    cmd += [
        "-var_stream_map",
        stream_map,
        "-master_pl_name",
        MASTER_PLAYLIST_NAME,
        "-f",
        "hls",
        "-hls_time",
        str(seg),
        "-hls_list_size",
        "0",
        "-hls_playlist_type",
        "vod",
        "-hls_segment_filename",
        str(output_dir / "%v_segment%d.ts"),
        str(output_dir / "%v.m3u8"),
    ]
    return cmd


def _parse_progress_seconds(line: str) -> float | None:
    """Seconds encoded so far from an ffmpeg -progress line (out_time_us / out_time_ms are µs)."""
    key, sep, value = line.partition("=")
    if not sep or key not in ("out_time_us", "out_time_ms"):
        return None
    try:
        return int(value) / 1_000_000
    except ValueError:
        return None


def _is_progress_line(line: str) -> bool:
    key, sep, _ = line.partition("=")
    return bool(sep) and " " not in key


def _pump_lines(stream, lines: queue.Queue) -> None:
    """Reader thread: forward process output lines; None marks EOF."""
    try:
        for line in stream:
            lines.put(line.rstrip("\n"))
    finally:
        lines.put(None)


def transcode_to_hls(
    input_path: str | Path,
    output_dir: str | Path,
    plan: VariantPlan,
    *,
    duration_sec: float | None = None,
    ffmpeg: str = "ffmpeg",
    preset: str = "veryfast",
    audio_bitrate: str = "128k",
    timeout_sec: float | None = None,
) -> Path:
    """
    Run ffmpeg for the plan and return the path of the master playlist.

    Progress is read from ffmpeg's -progress stream; when duration_sec is known,
    percent complete is logged every 10%. The process is killed when timeout_sec
    elapses.

    Raises:
        TranscodeFailedError: ffmpeg missing, non-zero exit, timeout, or no master playlist.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    cmd = build_hls_command(
        input_path,
        output_dir,
        plan,
        ffmpeg=ffmpeg,
        preset=preset,
        audio_bitrate=audio_bitrate,
    )
    logger.info(
        "ffmpeg: encoding %s variant(s) segment=%ss audio=%s",
        len(plan.variants),
        plan.segment_duration_sec,
        plan.has_audio,
    )
    try:
        proc = subprocess.Popen(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
        )
    except FileNotFoundError as e:
        raise TranscodeFailedError(f"ffmpeg not available: {e}") from e

    deadline = time.monotonic() + timeout_sec if timeout_sec else None
    diagnostics: deque[str] = deque(maxlen=DIAGNOSTIC_TAIL_LINES)
    lines: queue.Queue = queue.Queue()
    reader = threading.Thread(
        target=_pump_lines, args=(proc.stdout, lines), name="ffmpeg-output", daemon=True
    )
    reader.start()
    last_logged = -PROGRESS_LOG_STEP_PERCENT
    try:
        while True:
            if deadline is not None and time.monotonic() >= deadline:
                proc.kill()
                proc.wait()
                raise TranscodeFailedError(
                    f"ffmpeg timed out after {timeout_sec}s; "
                    + "; ".join(diagnostics)
                )
            try:
                line = lines.get(timeout=_POLL_SEC)
            except queue.Empty:
                continue
            if line is None:
                break
            seconds = _parse_progress_seconds(line)
            if seconds is not None:
                if duration_sec:
                    percent = max(0, min(100, int(100 * seconds / duration_sec)))
                    if percent >= last_logged + PROGRESS_LOG_STEP_PERCENT:
                        last_logged = percent
                        logger.info("ffmpeg: progress %s%%", percent)
            elif line and not _is_progress_line(line):
                diagnostics.append(line)
        returncode = proc.wait()
    finally:
        if proc.poll() is None:
            proc.kill()
            proc.wait()
        reader.join(timeout=_POLL_SEC)

    if returncode != 0:
        detail = "\n".join(diagnostics) or "(no output)"
        logger.warning("ffmpeg: exited %s: %s", returncode, detail)
        raise TranscodeFailedError(f"ffmpeg exited {returncode}: {detail}")
    master = output_dir / MASTER_PLAYLIST_NAME
    if not master.exists():
        raise TranscodeFailedError(f"ffmpeg finished but {MASTER_PLAYLIST_NAME} is missing")
    logger.info("ffmpeg: complete")
    return master
