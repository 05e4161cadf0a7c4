"""Background music selection and session playback policy."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from coffee_focus.domain.music import MusicTrack, PlaybackMode
from coffee_focus.domain.sessions import PlaybackError

_logger = logging.getLogger(__name__)


class PlaybackFailure(RuntimeError):
    """Raised by audio players when a track cannot be played."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AudioPlayer(Protocol):
    """Interface for the audio engine.

    With looping disabled the player stops a started track on its own after
    the preview window.
    """

    @property
    def is_playing(self) -> bool:
        """Return True while a track is audible."""

    def play(self, track: MusicTrack) -> None:
        """Start or resume a track, raising PlaybackFailure on error."""

    def pause(self) -> None:
        """Pause playback, keeping the position."""

    def stop(self) -> None:
        """Stop playback and release the track."""

    def set_loop(self, enabled: bool) -> None:
        """Switch between repeating forever and preview playback."""


@dataclass
class MusicPlayer:
    """Tracks the selected song and relays playback failures."""

    player: AudioPlayer
    on_error: Callable[[PlaybackError], None] | None = None
    current_track: MusicTrack | None = None
    mode: PlaybackMode = PlaybackMode.PREVIEW

    @property
    def is_playing(self) -> bool:
        return self.player.is_playing

    def select(self, track: MusicTrack) -> None:
        """Choose the track for the next session without playing it."""
        if self.current_track is not None and self.current_track.id == track.id:
            return
        if self.current_track is not None:
            self.stop()
        self.current_track = track

    def toggle(self, track: MusicTrack) -> None:
        """Play/pause the current track or switch to another one."""
        if self.current_track is not None and self.current_track.id == track.id:
            if self.is_playing:
                self.pause()
            else:
                self.play()
            return
        self.stop()
        self.current_track = track
        self.play()

    def set_mode(self, mode: PlaybackMode) -> None:
        self.mode = mode
        self.player.set_loop(mode is PlaybackMode.LOOP)

    def play(self) -> bool:
        """Play the selected track; returns False when nothing started."""
        track = self.current_track
        if track is None:
            _logger.debug("No track selected")
            return False
        try:
            self.player.play(track)
        except PlaybackFailure as exc:
            _logger.exception("Failed to play track %s", track.filename)
            if self.on_error:
                self.on_error(PlaybackError(message=exc.message))
            return False
        _logger.info("Playing %s in %s mode", track.title, self.mode.value)
        return True

    def pause(self) -> None:
        self.player.pause()

    def stop(self) -> None:
        self.player.stop()


@dataclass
class PlaybackCoordinator:
    """Maps timer transitions to preview/loop directives."""

    music: MusicPlayer

    def on_session_started(self) -> None:
        """Loop the selected track for the session; silence if none."""
        self.music.set_mode(PlaybackMode.LOOP)
        if self.music.current_track is None:
            return
        self.music.play()

    def on_session_paused(self) -> None:
        self.music.pause()

    def on_session_stopped(self) -> None:
        """Return to preview mode and silence the session track."""
        self.music.set_mode(PlaybackMode.PREVIEW)
        self.music.stop()
