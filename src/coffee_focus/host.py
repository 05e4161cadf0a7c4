"""Terminal host that runs one focus session on an asyncio loop."""

import argparse
import asyncio
import logging
import sys
from collections.abc import Callable

from coffee_focus.app_logging import configure_logging
from coffee_focus.config import Settings, parse_preset_minutes
from coffee_focus.containers import AppContainer, build_container
from coffee_focus.domain.music import TRACK_CATALOG, find_track
from coffee_focus.domain.sessions import (
    InvalidConfigError,
    PlaybackError,
    SessionCompleted,
    SessionConfig,
    StageChanged,
    format_clock,
)

_logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="coffee-focus", description="Coffee-themed focus timer"
    )
    duration = parser.add_mutually_exclusive_group()
    duration.add_argument("--preset", type=int, help="preset duration in minutes")
    duration.add_argument("--minutes", type=int, help="custom minutes (0-59)")
    parser.add_argument("--seconds", type=int, default=0, help="custom seconds (0-59)")
    parser.add_argument(
        "--track",
        type=int,
        choices=[track.id for track in TRACK_CATALOG],
        help="background track id",
    )
    parser.add_argument(
        "--premium", action="store_true", help="record the premium sticker unlock"
    )
    parser.add_argument(
        "--reset-collection", action="store_true", help="mark all stickers uncollected"
    )
    parser.add_argument(
        "--collection", action="store_true", help="show the collection and exit"
    )
    return parser


def resolve_duration(args: argparse.Namespace, settings: Settings) -> int:
    """Pick the session duration from the preset or custom arguments."""
    if args.preset is not None:
        presets = parse_preset_minutes(settings.preset_minutes)
        if args.preset not in presets:
            allowed = ", ".join(str(value) for value in presets)
            raise InvalidConfigError(f"Preset must be one of: {allowed}")
        return args.preset * 60
    if args.minutes is not None:
        config = SessionConfig.from_minutes_seconds(args.minutes, args.seconds)
        return config.duration_seconds
    return settings.default_duration_seconds


def format_collection(container: AppContainer) -> str:
    progress = container.collection.progress()
    lines = [progress.label]
    for item, collected in container.collection.items():
        marker = "x" if collected else " "
        suffix = " (premium)" if item.is_premium else ""
        lines.append(f"[{marker}] {item.name}{suffix}")
    return "\n".join(lines)


async def run_session(
    container: AppContainer,
    duration_seconds: int,
    track_id: int | None = None,
    out: Callable[[str], None] = print,
) -> SessionCompleted:
    """Run a session to completion and return its completion event."""
    service = container.focus_service
    finished: asyncio.Future[SessionCompleted] = (
        asyncio.get_running_loop().create_future()
    )

    def on_stage_changed(event: StageChanged) -> None:
        out(f"{service.timer.clock}  {event.current.name.title()}")

    def on_completed(event: SessionCompleted) -> None:
        if not finished.done():
            finished.set_result(event)

    def on_playback_error(error: PlaybackError) -> None:
        out(f"Playback error: {error.message}")

    service.on_stage_changed = on_stage_changed
    service.on_completed = on_completed
    service.on_playback_error = on_playback_error

    service.configure(duration_seconds)
    if track_id is not None:
        track = find_track(track_id)
        if track is not None:
            container.music_player.select(track)
    out(f"{format_clock(duration_seconds)}  {service.state.stage.name.title()}")
    service.start()
    try:
        event = await finished
    finally:
        service.stop()
        container.close_resources()

    if event.drawn_item is None:
        out("Session complete.")
    else:
        out(f"Session complete. You've unlocked: {event.drawn_item.name}")
    out(service.collection_progress().label)
    return event


async def _main_async(args: argparse.Namespace, settings: Settings) -> int:
    container = build_container(settings)
    if args.reset_collection:
        container.collection.reset()
    if args.premium:
        container.entitlement.unlock()
    if args.collection:
        print(format_collection(container))
        return 0
    try:
        duration = resolve_duration(args, settings)
    except InvalidConfigError as exc:
        print(f"Invalid duration: {exc}", file=sys.stderr)
        return 2
    await run_session(container, duration, args.track)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Parse arguments and run the host."""
    args = build_parser().parse_args(argv)
    configure_logging(logging.WARNING)
    settings = Settings()
    try:
        return asyncio.run(_main_async(args, settings))
    except KeyboardInterrupt:
        _logger.info("Session interrupted")
        print("\nSession stopped.")
        return 130
