"""Shared test fixtures."""

import random
from collections.abc import Callable
from dataclasses import dataclass, field

import pytest

from coffee_focus.domain.music import MusicTrack
from coffee_focus.domain.sessions import SessionConfig
from coffee_focus.services.entitlement import EntitlementProvider
from coffee_focus.services.focus import FocusSessionService
from coffee_focus.services.playback import (
    AudioPlayer,
    MusicPlayer,
    PlaybackCoordinator,
    PlaybackFailure,
)
from coffee_focus.services.stickers import KeyValueStore, StickerCollection
from coffee_focus.services.timer import SessionTimer, TickSource


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """In-memory key-value store for tests."""

    data: dict[str, bytes] = field(default_factory=dict)
    writes: list[str] = field(default_factory=list)
    deletes: list[str] = field(default_factory=list)
    fail_writes: bool = False
    fail_reads: bool = False

    def read(self, key: str) -> bytes | None:
        if self.fail_reads:
            raise OSError("EIO")
        return self.data.get(key)

    def write(self, key: str, data: bytes) -> None:
        if self.fail_writes:
            raise OSError("disk full")
        self.writes.append(key)
        self.data[key] = data

    def delete(self, key: str) -> None:
        self.deletes.append(key)
        self.data.pop(key, None)


@dataclass
class ManualTickSource(TickSource):
    """Tick source driven explicitly by tests."""

    callback: Callable[[], None] | None = None
    starts: int = 0
    cancels: int = 0

    @property
    def is_active(self) -> bool:
        return self.callback is not None

    def start(self, callback: Callable[[], None]) -> None:
        if self.callback is not None:
            return
        self.starts += 1
        self.callback = callback

    def cancel(self) -> None:
        self.cancels += 1
        self.callback = None

    def fire(self, count: int = 1) -> int:
        """Deliver up to ``count`` ticks; returns how many were delivered."""
        delivered = 0
        for _ in range(count):
            if self.callback is None:
                break
            self.callback()
            delivered += 1
        return delivered


@dataclass
class FakeAudioPlayer(AudioPlayer):
    """Fake audio player that records directives."""

    calls: list[tuple[str, object]] = field(default_factory=list)
    missing: set[str] = field(default_factory=set)
    looping: bool = False
    playing: bool = False

    @property
    def is_playing(self) -> bool:
        return self.playing

    def play(self, track: MusicTrack) -> None:
        self.calls.append(("play", track.id))
        if track.filename in self.missing:
            raise PlaybackFailure(
                f"Cannot find the music in directory: {track.asset_name}"
            )
        self.playing = True

    def pause(self) -> None:
        self.calls.append(("pause", None))
        self.playing = False

    def stop(self) -> None:
        self.calls.append(("stop", None))
        self.playing = False

    def set_loop(self, enabled: bool) -> None:
        self.calls.append(("set_loop", enabled))
        self.looping = enabled


@dataclass
class FakeEntitlement(EntitlementProvider):
    """Entitlement flag toggled directly by tests."""

    premium: bool = False
    reads: int = 0

    @property
    def is_premium_unlocked(self) -> bool:
        self.reads += 1
        return self.premium


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def tick_source() -> ManualTickSource:
    return ManualTickSource()


@pytest.fixture
def audio_player() -> FakeAudioPlayer:
    return FakeAudioPlayer()


@pytest.fixture
def entitlement() -> FakeEntitlement:
    return FakeEntitlement()


@pytest.fixture
def collection(store: InMemoryKeyValueStore) -> StickerCollection:
    sticker_collection = StickerCollection(store, rng=random.Random(7))
    sticker_collection.load()
    return sticker_collection


@pytest.fixture
def timer(tick_source: ManualTickSource) -> SessionTimer:
    return SessionTimer(tick_source=tick_source, config=SessionConfig(100))


@pytest.fixture
def music_player(audio_player: FakeAudioPlayer) -> MusicPlayer:
    return MusicPlayer(audio_player)


@pytest.fixture
def focus_service(
    timer: SessionTimer,
    collection: StickerCollection,
    music_player: MusicPlayer,
    entitlement: FakeEntitlement,
) -> FocusSessionService:
    return FocusSessionService(
        timer=timer,
        collection=collection,
        playback=PlaybackCoordinator(music_player),
        entitlement=entitlement,
    )
