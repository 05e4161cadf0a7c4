"""Tests for the terminal host."""

import asyncio
from pathlib import Path

import pytest

from coffee_focus.config import Settings
from coffee_focus.containers import build_container
from coffee_focus.domain.sessions import InvalidConfigError
from coffee_focus.host import build_parser, main, resolve_duration, run_session


def _settings(tmp_path: Path) -> Settings:
    return Settings(data_dir=tmp_path, tick_interval_seconds=0.001)


def test_resolve_duration_from_preset(tmp_path: Path) -> None:
    args = build_parser().parse_args(["--preset", "45"])

    assert resolve_duration(args, _settings(tmp_path)) == 2700


def test_resolve_duration_rejects_unknown_preset(tmp_path: Path) -> None:
    args = build_parser().parse_args(["--preset", "30"])

    with pytest.raises(InvalidConfigError):
        resolve_duration(args, _settings(tmp_path))


def test_resolve_duration_from_picker(tmp_path: Path) -> None:
    args = build_parser().parse_args(["--minutes", "1", "--seconds", "30"])

    assert resolve_duration(args, _settings(tmp_path)) == 90


def test_resolve_duration_default(tmp_path: Path) -> None:
    args = build_parser().parse_args([])

    assert resolve_duration(args, _settings(tmp_path)) == 1500


def test_run_session_unlocks_sticker(tmp_path: Path) -> None:
    lines: list[str] = []

    async def scenario():
        container = build_container(_settings(tmp_path))
        return await run_session(container, 3, out=lines.append)

    event = asyncio.run(scenario())

    assert event.drawn_item is not None
    assert not event.drawn_item.is_premium
    assert lines[0] == "00:03  Grinding"
    assert lines[1] == "00:02  Filtering"
    assert lines[-2] == f"Session complete. You've unlocked: {event.drawn_item.name}"
    assert lines[-1] == "1/20 Collected"


def test_run_session_reports_missing_track(tmp_path: Path) -> None:
    lines: list[str] = []

    async def scenario():
        container = build_container(_settings(tmp_path))
        return await run_session(container, 2, track_id=0, out=lines.append)

    asyncio.run(scenario())

    assert "Playback error: Cannot find the music in directory: jazz1.mp3" in lines


def test_main_shows_collection(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setenv("COFFEE_FOCUS_DATA_DIR", str(tmp_path))

    assert main(["--collection"]) == 0

    output = capsys.readouterr().out.splitlines()
    assert output[0] == "0/20 Collected"
    assert output[1] == "[ ] Caffè Americano"
    assert len(output) == 21


def test_main_rejects_invalid_preset(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setenv("COFFEE_FOCUS_DATA_DIR", str(tmp_path))

    assert main(["--preset", "30"]) == 2
    assert "Invalid duration" in capsys.readouterr().err
