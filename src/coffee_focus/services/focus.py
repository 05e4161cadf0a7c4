"""Focus session orchestration: timer, reward draw and music."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from coffee_focus.domain.sessions import (
    PlaybackError,
    SessionCompleted,
    SessionState,
    SessionStatus,
    StageChanged,
)
from coffee_focus.domain.stickers import CollectionProgress
from coffee_focus.services.entitlement import EntitlementProvider
from coffee_focus.services.playback import PlaybackCoordinator
from coffee_focus.services.stickers import StickerCollection
from coffee_focus.services.timer import SessionTimer

_logger = logging.getLogger(__name__)


@dataclass
class FocusSessionService:
    """Single entry point a host uses to run focus sessions."""

    timer: SessionTimer
    collection: StickerCollection
    playback: PlaybackCoordinator
    entitlement: EntitlementProvider
    on_stage_changed: Callable[[StageChanged], None] | None = None
    on_completed: Callable[[SessionCompleted], None] | None = None
    on_playback_error: Callable[[PlaybackError], None] | None = None

    def __post_init__(self) -> None:
        self.timer.on_stage_changed = self._handle_stage_changed
        self.timer.on_completed = self._handle_completed
        self.playback.music.on_error = self._handle_playback_error

    @property
    def state(self) -> SessionState:
        return self.timer.state

    def configure(self, duration_seconds: int) -> None:
        """Set the duration of the next session, abandoning a paused one."""
        abandoning = self.timer.status is SessionStatus.PAUSED
        self.timer.configure(duration_seconds)
        if abandoning:
            self.playback.on_session_stopped()

    def start(self) -> None:
        """Start or resume the session and its music."""
        if self.timer.status is SessionStatus.RUNNING:
            return
        if self.timer.start():
            _logger.info("Focus session started")
        self.playback.on_session_started()

    def pause(self) -> None:
        if self.timer.status is not SessionStatus.RUNNING:
            return
        self.timer.pause()
        self.playback.on_session_paused()

    def stop(self) -> None:
        """Abandon the session and return music to preview mode."""
        self.timer.stop()
        self.playback.on_session_stopped()

    def toggle(self) -> None:
        """Pause a running session, otherwise start it."""
        if self.timer.status is SessionStatus.RUNNING:
            self.pause()
        else:
            self.start()

    def collection_progress(self) -> CollectionProgress:
        return self.collection.progress()

    def _handle_stage_changed(self, event: StageChanged) -> None:
        if self.on_stage_changed:
            self.on_stage_changed(event)

    def _handle_completed(self) -> None:
        self.playback.on_session_stopped()
        premium_enabled = self.entitlement.is_premium_unlocked
        drawn = self.collection.draw_unclaimed(premium_enabled)
        if drawn is None:
            _logger.info("Session completed without a new sticker")
        if self.on_completed:
            self.on_completed(SessionCompleted(drawn_item=drawn))

    def _handle_playback_error(self, error: PlaybackError) -> None:
        if self.on_playback_error:
            self.on_playback_error(error)
