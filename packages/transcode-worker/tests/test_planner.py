"""Tests for the variant ladder and segment duration policy."""

import math

import pytest
from hls_queue_shared import InvalidMediaError, MediaInfo

from transcode_worker.planner import plan_for_media, plan_variants, segment_duration_for


@pytest.mark.parametrize(
    "width,height,expected_tiers",
    [
        (320, 240, 1),
        (640, 360, 1),
        (960, 540, 2),
        (1280, 720, 2),
        (1920, 1080, 3),
        (3840, 2160, 3),
    ],
)
def test_tier_count_by_height(width: int, height: int, expected_tiers: int) -> None:
    plan = plan_variants(width, height, 100)
    assert len(plan.variants) == expected_tiers


def test_1080p_ladder() -> None:
    plan = plan_variants(1920, 1080, 120)
    assert [(v.bitrate_kbps, v.width, v.height) for v in plan.variants] == [
        (400, 480, 270),
        (1000, 1280, 720),
        (2000, 1920, 1080),
    ]


def test_540p_mid_tier_is_not_upscaled() -> None:
    plan = plan_variants(960, 540, 120)
    assert [(v.width, v.height) for v in plan.variants] == [(480, 270), (960, 540)]


def test_small_source_is_not_upscaled() -> None:
    plan = plan_variants(320, 240, 60)
    assert (plan.variants[0].width, plan.variants[0].height) == (320, 240)


@pytest.mark.parametrize(
    "width,height",
    [
        (320, 240),
        (640, 360),
        (960, 540),
        (1280, 720),
        (1920, 1080),
        (1080, 1920),
        (721, 405),
        (2, 2000),
        (2000, 2),
    ],
)
def test_tiers_never_exceed_native_and_bitrates_increase(width: int, height: int) -> None:
    plan = plan_variants(width, height, 600)
    bitrates = [v.bitrate_kbps for v in plan.variants]
    assert bitrates == sorted(set(bitrates))
    for v in plan.variants:
        assert v.width <= width
        assert v.height <= height
        assert v.width % 2 == 0
        assert v.height % 2 == 0


def test_portrait_source_keeps_aspect_ratio() -> None:
    plan = plan_variants(1080, 1920, 60)
    mid = plan.variants[1]
    assert mid.height == 720
    assert mid.width == 404


def test_portrait_ladder_resolution_rises_with_bitrate() -> None:
    plan = plan_variants(1080, 1920, 60)
    assert [(v.bitrate_kbps, v.width, v.height) for v in plan.variants] == [
        (400, 270, 480),
        (1000, 404, 720),
        (2000, 1080, 1920),
    ]
    pixels = [v.width * v.height for v in plan.variants]
    assert pixels == sorted(pixels)


def test_tier_count_never_grows_as_resolution_drops() -> None:
    counts = [len(plan_variants(h * 16 // 9, h, 60).variants) for h in (2160, 1080, 720, 540, 360, 240)]
    assert counts == sorted(counts, reverse=True)


@pytest.mark.parametrize(
    "duration,expected",
    [(1, 2), (100, 2), (299.9, 2), (300, 4), (600, 4), (7200, 4)],
)
def test_segment_duration(duration: float, expected: int) -> None:
    assert segment_duration_for(duration) == expected
    assert plan_variants(1280, 720, duration).segment_duration_sec == expected


def test_audio_flag_passes_through() -> None:
    assert plan_variants(1280, 720, 60, has_audio=False).has_audio is False
    assert plan_variants(1280, 720, 60).has_audio is True


@pytest.mark.parametrize(
    "width,height,duration",
    [
        (0, 720, 60),
        (1280, 0, 60),
        (1280, 720, 0),
        (-1, 720, 60),
        (1280, 720, math.nan),
        (1, 200, 10),
        (200, 1, 10),
    ],
)
def test_malformed_values_raise_invalid_media(width, height, duration) -> None:
    with pytest.raises(InvalidMediaError):
        plan_variants(width, height, duration)


def test_plan_for_media_uses_probe_report() -> None:
    info = MediaInfo(width=640, height=360, duration_sec=400, has_audio=False)
    plan = plan_for_media(info)
    assert len(plan.variants) == 1
    assert plan.segment_duration_sec == 4
    assert plan.has_audio is False
