"""Dependency container wiring for the application."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass

from coffee_focus.adapters.asyncio_ticks import AsyncioTickSource
from coffee_focus.adapters.file_store import FileKeyValueStore
from coffee_focus.adapters.pygame_audio import PygameAudioPlayer
from coffee_focus.config import Settings
from coffee_focus.domain.sessions import SessionConfig
from coffee_focus.services.entitlement import StoredEntitlement
from coffee_focus.services.focus import FocusSessionService
from coffee_focus.services.playback import MusicPlayer, PlaybackCoordinator
from coffee_focus.services.stickers import KeyValueStore, StickerCollection
from coffee_focus.services.timer import SessionTimer


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: KeyValueStore
    entitlement: StoredEntitlement
    collection: StickerCollection
    music_player: MusicPlayer
    focus_service: FocusSessionService
    close_resources: Callable[[], None]


def build_container(
    settings: Settings | None = None,
    *,
    loop: asyncio.AbstractEventLoop | None = None,
) -> AppContainer:
    """Create the default dependency container.

    Ticks and preview auto-stop run on ``loop``, defaulting to the running
    event loop.
    """
    resolved_settings = settings or Settings()
    resolved_loop = loop or asyncio.get_running_loop()
    store = FileKeyValueStore(resolved_settings.data_dir)
    entitlement = StoredEntitlement(store, storage_key=resolved_settings.entitlement_key)
    collection = StickerCollection(store, storage_key=resolved_settings.collection_key)
    collection.load()
    audio_player = PygameAudioPlayer.create(
        resolved_settings.resolved_music_dir,
        preview_window_seconds=resolved_settings.preview_window_seconds,
        loop=resolved_loop,
    )
    music_player = MusicPlayer(audio_player)
    timer = SessionTimer(
        tick_source=AsyncioTickSource(
            loop=resolved_loop,
            interval_seconds=resolved_settings.tick_interval_seconds,
        ),
        config=SessionConfig(resolved_settings.default_duration_seconds),
    )
    focus_service = FocusSessionService(
        timer=timer,
        collection=collection,
        playback=PlaybackCoordinator(music_player),
        entitlement=entitlement,
    )

    def close_resources() -> None:
        if timer.tick_source.is_active:
            timer.tick_source.cancel()
        music_player.stop()

    return AppContainer(
        settings=resolved_settings,
        store=store,
        entitlement=entitlement,
        collection=collection,
        music_player=music_player,
        focus_service=focus_service,
        close_resources=close_resources,
    )
