"""Countdown state machine for a single focus session."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from coffee_focus.domain.sessions import (
    DEFAULT_DURATION_SECONDS,
    BrewStage,
    InvalidConfigError,
    SessionConfig,
    SessionState,
    SessionStatus,
    StageChanged,
    derive_stage,
    format_clock,
    progress_fraction,
)

_logger = logging.getLogger(__name__)


class TickSource(Protocol):
    """Cancellable periodic scheduler delivering one callback per tick."""

    def start(self, callback: Callable[[], None]) -> None:
        """Begin delivering ticks to the callback."""

    def cancel(self) -> None:
        """Drop any pending tick before returning."""

    @property
    def is_active(self) -> bool:
        """Return True while ticks are scheduled."""


@dataclass
class SessionTimer:
    """Countdown with four brew stages derived from elapsed time.

    The tick source is the only clock. ``tick`` is the single mutation path
    while running; ``pause`` and ``stop`` cancel the source before changing
    status so that no tick lands after them.
    """

    tick_source: TickSource
    config: SessionConfig = field(
        default_factory=lambda: SessionConfig(DEFAULT_DURATION_SECONDS)
    )
    on_stage_changed: Callable[[StageChanged], None] | None = None
    on_completed: Callable[[], None] | None = None
    _remaining: int = field(init=False)
    _status: SessionStatus = field(init=False, default=SessionStatus.IDLE)
    _stage: BrewStage = field(init=False, default=BrewStage.GRINDING)
    _ticking: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        self._remaining = self.config.duration_seconds

    @property
    def duration_seconds(self) -> int:
        return self.config.duration_seconds

    @property
    def remaining_seconds(self) -> int:
        return self._remaining

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def stage(self) -> BrewStage:
        return self._stage

    @property
    def progress(self) -> float:
        """Return remaining/duration for progress rings."""
        return progress_fraction(self._remaining, self.duration_seconds)

    @property
    def clock(self) -> str:
        return format_clock(self._remaining)

    @property
    def state(self) -> SessionState:
        """Return a snapshot of the current session."""
        return SessionState(
            remaining_seconds=self._remaining,
            duration_seconds=self.duration_seconds,
            status=self._status,
            stage=self._stage,
        )

    def configure(self, duration_seconds: int) -> None:
        """Apply a new duration; only allowed while not running."""
        if self._status is SessionStatus.RUNNING:
            raise InvalidConfigError("Cannot change the duration of a running session")
        config = SessionConfig(duration_seconds)
        self.tick_source.cancel()
        self.config = config
        self._reset()
        _logger.info("Session configured: duration=%s", duration_seconds)

    def start(self) -> bool:
        """Start a fresh session from idle or resume a paused one.

        Returns True only when a new session began.
        """
        if self._status is SessionStatus.RUNNING:
            return False
        if self._status is SessionStatus.COMPLETED:
            self._reset()
        resuming = self._status is SessionStatus.PAUSED
        if not resuming:
            self._stage = BrewStage.GRINDING
        self._status = SessionStatus.RUNNING
        self.tick_source.start(self.tick)
        _logger.info(
            "Session %s: remaining=%s/%s",
            "resumed" if resuming else "started",
            self._remaining,
            self.duration_seconds,
        )
        return not resuming

    def pause(self) -> None:
        """Pause a running session."""
        if self._status is not SessionStatus.RUNNING:
            return
        self.tick_source.cancel()
        self._status = SessionStatus.PAUSED
        _logger.info("Session paused: remaining=%s", self._remaining)

    def stop(self) -> None:
        """Abandon the session and restore the configured duration."""
        self.tick_source.cancel()
        self._reset()
        _logger.info("Session stopped")

    def tick(self) -> None:
        """Advance the countdown by one second."""
        if self._status is not SessionStatus.RUNNING:
            return
        if self._ticking:
            _logger.warning("Dropping overlapping tick")
            return
        self._ticking = True
        try:
            self._advance()
        finally:
            self._ticking = False

    def _advance(self) -> None:
        self._remaining -= 1
        if self._remaining <= 0:
            self._remaining = 0
            self.tick_source.cancel()
            self._status = SessionStatus.COMPLETED
            _logger.info("Session completed: duration=%s", self.duration_seconds)
            if self.on_completed:
                self.on_completed()
            return

        new_stage = derive_stage(self.duration_seconds, self._remaining)
        if new_stage is self._stage:
            return
        event = StageChanged(
            previous=self._stage,
            current=new_stage,
            elapsed_seconds=self.duration_seconds - self._remaining,
        )
        self._stage = new_stage
        _logger.info(
            "Changing stage from %s to %s at time %s/%s",
            event.previous.name,
            event.current.name,
            event.elapsed_seconds,
            self.duration_seconds,
        )
        if self.on_stage_changed:
            try:
                self.on_stage_changed(event)
            except Exception:
                _logger.exception("Stage listener failed at %s", event.current.name)

    def _reset(self) -> None:
        self._remaining = self.duration_seconds
        self._status = SessionStatus.IDLE
        self._stage = BrewStage.GRINDING
