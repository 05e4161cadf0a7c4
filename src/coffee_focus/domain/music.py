"""Domain models for background music."""

from dataclasses import dataclass
from enum import Enum

PREVIEW_WINDOW_SECONDS = 15


class PlaybackMode(Enum):
    """How the audio player treats a started track."""

    PREVIEW = "preview"
    LOOP = "loop"


@dataclass(frozen=True)
class MusicTrack:
    """Bundled background track."""

    id: int
    title: str
    artist: str
    duration: str
    filename: str

    @property
    def asset_name(self) -> str:
        return f"{self.filename}.mp3"


TRACK_CATALOG: tuple[MusicTrack, ...] = (
    MusicTrack(0, "Autumn Leaves", "Jazz Café", "3:45", "jazz1"),
    MusicTrack(1, "Rainy Day Jazz", "Coffee House", "4:12", "jazz2"),
    MusicTrack(2, "Smooth Evening", "Jazz Ensemble", "3:58", "jazz3"),
    MusicTrack(3, "Coffee Break", "Jazz Trio", "3:30", "jazz4"),
    MusicTrack(4, "Midnight Piano", "Jazz Piano", "4:05", "jazz5"),
    MusicTrack(5, "Café Ambience", "Smooth Jazz", "3:50", "jazz6"),
    MusicTrack(6, "Gentle Sax", "Jazz Quartet", "4:20", "jazz7"),
    MusicTrack(7, "Study Time", "Jazz Lounge", "3:40", "jazz8"),
    MusicTrack(8, "Cozy Night", "Jazz Club", "4:15", "jazz9"),
    MusicTrack(9, "Morning Jazz", "Coffee Jazz", "3:55", "jazz10"),
)


def find_track(track_id: int) -> MusicTrack | None:
    """Return the catalog track with the given id, if any."""
    for track in TRACK_CATALOG:
        if track.id == track_id:
            return track
    return None
