"""Audio player backed by pygame's streaming music channel."""

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pygame

from coffee_focus.domain.music import PREVIEW_WINDOW_SECONDS, MusicTrack
from coffee_focus.services.playback import AudioPlayer, PlaybackFailure

_logger = logging.getLogger(__name__)


@dataclass
class PygameAudioPlayer(AudioPlayer):
    """Plays bundled mp3 tracks through ``pygame.mixer.music``.

    In preview mode a started track is stopped after the preview window
    unless it was paused or stopped first.
    """

    music_dir: Path
    mixer: Any
    preview_window_seconds: float = PREVIEW_WINDOW_SECONDS
    loop: asyncio.AbstractEventLoop | None = None
    _looping: bool = field(init=False, default=False)
    _playing: bool = field(init=False, default=False)
    _loaded_path: Path | None = field(init=False, default=None)
    _paused_path: Path | None = field(init=False, default=None)
    _preview_handle: asyncio.TimerHandle | None = field(init=False, default=None)

    @classmethod
    def create(
        cls,
        music_dir: Path,
        preview_window_seconds: float = PREVIEW_WINDOW_SECONDS,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> "PygameAudioPlayer":
        """Create a player using the global pygame mixer."""
        return cls(
            music_dir=music_dir,
            mixer=pygame.mixer,
            preview_window_seconds=preview_window_seconds,
            loop=loop,
        )

    @property
    def is_playing(self) -> bool:
        return self._playing

    def play(self, track: MusicTrack) -> None:
        """Start the track, or resume it when it is the paused one."""
        path = self.music_dir / track.asset_name
        if not path.is_file():
            raise PlaybackFailure(
                f"Cannot find the music in directory: {track.asset_name}"
            )
        self._ensure_mixer()
        self._cancel_preview()
        try:
            if self._paused_path == path:
                self.mixer.music.unpause()
            else:
                self.mixer.music.load(str(path))
                self.mixer.music.play(loops=-1 if self._looping else 0)
        except pygame.error as exc:
            self._playing = False
            raise PlaybackFailure(f"Failed to play audio: {exc}") from exc
        self._loaded_path = path
        self._paused_path = None
        self._playing = True
        if not self._looping:
            self._arm_preview()

    def pause(self) -> None:
        self._cancel_preview()
        if not self._playing:
            return
        self.mixer.music.pause()
        self._playing = False
        self._paused_path = self._loaded_path

    def stop(self) -> None:
        self._cancel_preview()
        self._paused_path = None
        self._loaded_path = None
        if self.mixer.get_init():
            self.mixer.music.stop()
        self._playing = False

    def set_loop(self, enabled: bool) -> None:
        if enabled != self._looping:
            self._paused_path = None
        self._looping = enabled
        if enabled:
            self._cancel_preview()

    def _ensure_mixer(self) -> None:
        if self.mixer.get_init():
            return
        try:
            self.mixer.init()
        except pygame.error as exc:
            raise PlaybackFailure(f"Audio engine unavailable: {exc}") from exc
        _logger.info("pygame mixer initialized")

    def _arm_preview(self) -> None:
        loop = self.loop
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError as exc:
                self.stop()
                raise PlaybackFailure(
                    "Preview playback needs a running event loop"
                ) from exc
        self._preview_handle = loop.call_later(
            self.preview_window_seconds, self._end_preview
        )

    def _end_preview(self) -> None:
        self._preview_handle = None
        if not self._playing:
            return
        _logger.info("Preview window elapsed, stopping playback")
        self.stop()

    def _cancel_preview(self) -> None:
        if self._preview_handle is not None:
            self._preview_handle.cancel()
            self._preview_handle = None
