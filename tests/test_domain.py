"""Tests for domain helpers."""

import pytest

from coffee_focus.domain.music import TRACK_CATALOG, find_track
from coffee_focus.domain.sessions import (
    PRESET_DURATIONS,
    BrewStage,
    InvalidConfigError,
    SessionConfig,
    derive_stage,
    format_clock,
    progress_fraction,
)
from coffee_focus.domain.stickers import (
    CATALOG_SIZE,
    STICKER_CATALOG,
    CollectionProgress,
)


def test_derive_stage_boundaries() -> None:
    assert derive_stage(100, 100) is BrewStage.GRINDING
    assert derive_stage(100, 76) is BrewStage.GRINDING
    assert derive_stage(100, 75) is BrewStage.TAMPERING
    assert derive_stage(100, 51) is BrewStage.TAMPERING
    assert derive_stage(100, 50) is BrewStage.BREWING
    assert derive_stage(100, 26) is BrewStage.BREWING
    assert derive_stage(100, 25) is BrewStage.FILTERING
    assert derive_stage(100, 1) is BrewStage.FILTERING


def test_derive_stage_uses_integer_span() -> None:
    # span is 7 for a 30 second session
    assert derive_stage(30, 24) is BrewStage.GRINDING
    assert derive_stage(30, 23) is BrewStage.TAMPERING
    assert derive_stage(30, 9) is BrewStage.FILTERING


@pytest.mark.parametrize("duration", [1, 2, 3])
def test_derive_stage_degenerate_durations(duration: int) -> None:
    assert derive_stage(duration, duration) is BrewStage.FILTERING
    assert derive_stage(duration, duration - 1) is BrewStage.FILTERING


def test_stage_animation_names() -> None:
    assert [stage.animation_name for stage in BrewStage] == [
        "coffee-grinder",
        "coffee-tampering",
        "coffee-brewing",
        "coffee-filtering",
    ]


def test_session_config_from_picker() -> None:
    assert SessionConfig.from_minutes_seconds(25, 0).duration_seconds == 1500
    assert SessionConfig.from_minutes_seconds(0, 45).duration_seconds == 45


@pytest.mark.parametrize(("minutes", "seconds"), [(0, 0), (60, 0), (5, 60), (-1, 30)])
def test_session_config_rejects_invalid_picker_values(
    minutes: int, seconds: int
) -> None:
    with pytest.raises(InvalidConfigError):
        SessionConfig.from_minutes_seconds(minutes, seconds)


def test_presets_are_25_45_60_minutes() -> None:
    assert [seconds for _, seconds in PRESET_DURATIONS] == [1500, 2700, 3600]


def test_progress_fraction() -> None:
    assert progress_fraction(1500, 1500) == 1.0
    assert progress_fraction(0, 1500) == 0.0
    with pytest.raises(InvalidConfigError):
        progress_fraction(0, 0)


def test_format_clock() -> None:
    assert format_clock(1500) == "25:00"
    assert format_clock(3600) == "60:00"
    assert format_clock(59) == "00:59"
    assert format_clock(-3) == "00:00"


def test_catalog_partition() -> None:
    ids = [item.id for item in STICKER_CATALOG]

    assert len(set(ids)) == CATALOG_SIZE
    assert sum(not item.is_premium for item in STICKER_CATALOG) == 10
    assert sum(item.is_premium for item in STICKER_CATALOG) == 10


def test_collection_progress_label() -> None:
    progress = CollectionProgress(collected=3, total=CATALOG_SIZE)

    assert progress.label == f"3/{CATALOG_SIZE} Collected"
    assert progress.fraction == pytest.approx(3 / CATALOG_SIZE)
    assert CollectionProgress(collected=0, total=0).fraction == 0.0


def test_find_track() -> None:
    track = find_track(3)

    assert track is not None
    assert track.title == "Coffee Break"
    assert track.asset_name == "jazz4.mp3"
    assert find_track(len(TRACK_CATALOG)) is None
