"""
Variant planning: pick HLS quality tiers and segment duration from the probe report.

Tier policy by source height:
- <= 360: 400 kbps, longer side capped at 480
- <= 720: adds 1000 kbps, height capped at 720
- above: adds 2000 kbps at native resolution
Tiers never upscale and keep the source aspect ratio.
"""

from __future__ import annotations

import math

from hls_queue_shared import InvalidMediaError, MediaInfo, Variant, VariantPlan

LOW_TIER_BITRATE_KBPS = 400
LOW_TIER_MAX_SIDE = 480
MID_TIER_BITRATE_KBPS = 1000
MID_TIER_MAX_HEIGHT = 720
HIGH_TIER_BITRATE_KBPS = 2000

SINGLE_TIER_MAX_HEIGHT = 360
TWO_TIER_MAX_HEIGHT = 720

MIN_DIMENSION = 2

SHORT_SEGMENT_SEC = 2
LONG_SEGMENT_SEC = 4
LONG_VIDEO_THRESHOLD_SEC = 300


def _even(n: int) -> int:
    """Round down to an even number (libx264 needs even dimensions), minimum 2."""
    return max(2, n // 2 * 2)


def _scaled(width: int, height: int, target: int, reference: int) -> tuple[int, int]:
    """Scale both sides by target/reference in integer math, never above native."""
    if target >= reference:
        return _even(width), _even(height)
    return _even(width * target // reference), _even(height * target // reference)


def _require_positive(name: str, value: float) -> None:
    if value is None or not math.isfinite(value) or value <= 0:
        raise InvalidMediaError(f"cannot plan variants: {name}={value!r}")


def _require_dimension(name: str, value: int) -> None:
    _require_positive(name, value)
    if value < MIN_DIMENSION:
        raise InvalidMediaError(f"cannot plan variants: {name}={value!r} is below {MIN_DIMENSION}")


def segment_duration_for(duration_sec: float) -> int:
    """2 s segments for short videos (finer seeking), 4 s for >= 5 min (fewer files)."""
    return SHORT_SEGMENT_SEC if duration_sec < LONG_VIDEO_THRESHOLD_SEC else LONG_SEGMENT_SEC


def plan_variants(
    width: int,
    height: int,
    duration_sec: float,
    *,
    has_audio: bool = True,
) -> VariantPlan:
    """
    Derive the variant ladder for a source of the given native size and duration.

    Raises:
        InvalidMediaError: width or height below 2, or duration missing, non-finite or <= 0.
    """
    _require_dimension("width", width)
    _require_dimension("height", height)
    _require_positive("duration_sec", duration_sec)

    low_w, low_h = _scaled(width, height, LOW_TIER_MAX_SIDE, max(width, height))
    variants = [Variant(bitrate_kbps=LOW_TIER_BITRATE_KBPS, width=low_w, height=low_h)]
    if height > SINGLE_TIER_MAX_HEIGHT:
        mid_w, mid_h = _scaled(width, height, MID_TIER_MAX_HEIGHT, height)
        variants.append(Variant(bitrate_kbps=MID_TIER_BITRATE_KBPS, width=mid_w, height=mid_h))
    if height > TWO_TIER_MAX_HEIGHT:
        high_w, high_h = _even(width), _even(height)
        variants.append(
            Variant(bitrate_kbps=HIGH_TIER_BITRATE_KBPS, width=high_w, height=high_h)
        )

    return VariantPlan(
        variants=variants,
        segment_duration_sec=segment_duration_for(duration_sec),
        has_audio=has_audio,
    )


def plan_for_media(info: MediaInfo) -> VariantPlan:
    """plan_variants() from a probe report."""
    return plan_variants(
        info.width,
        info.height,
        info.duration_sec,
        has_audio=info.has_audio,
    )
