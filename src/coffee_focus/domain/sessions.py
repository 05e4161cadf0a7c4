"""Domain models for focus sessions."""

from dataclasses import dataclass
from enum import Enum

from coffee_focus.domain.stickers import CollectibleItem

DEFAULT_DURATION_SECONDS = 25 * 60
MAX_PICKER_MINUTES = 59
MAX_PICKER_SECONDS = 59
STAGE_COUNT = 4


class InvalidConfigError(ValueError):
    """Raised when a session duration cannot be applied."""


class SessionStatus(Enum):
    """Lifecycle status of the active session."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


class BrewStage(Enum):
    """Visual stage for each elapsed-time quartile of a session."""

    GRINDING = "coffee-grinder"
    TAMPERING = "coffee-tampering"
    BREWING = "coffee-brewing"
    FILTERING = "coffee-filtering"

    @property
    def animation_name(self) -> str:
        """Return the animation asset associated with the stage."""
        return self.value


@dataclass(frozen=True)
class SessionConfig:
    """Duration settings applied to the next session."""

    duration_seconds: int

    def __post_init__(self) -> None:
        if self.duration_seconds <= 0:
            raise InvalidConfigError(
                f"Session duration must be positive, got {self.duration_seconds}"
            )

    @classmethod
    def from_minutes_seconds(cls, minutes: int, seconds: int) -> "SessionConfig":
        """Build a config from the custom duration picker values."""
        if not 0 <= minutes <= MAX_PICKER_MINUTES:
            raise InvalidConfigError(f"Minutes must be 0-59, got {minutes}")
        if not 0 <= seconds <= MAX_PICKER_SECONDS:
            raise InvalidConfigError(f"Seconds must be 0-59, got {seconds}")
        return cls(duration_seconds=minutes * 60 + seconds)


PRESET_DURATIONS: tuple[tuple[str, int], ...] = (
    ("25 min", 25 * 60),
    ("45 min", 45 * 60),
    ("60 min", 60 * 60),
)


@dataclass(frozen=True)
class SessionState:
    """Read-only snapshot of the timer."""

    remaining_seconds: int
    duration_seconds: int
    status: SessionStatus
    stage: BrewStage

    @property
    def elapsed_seconds(self) -> int:
        return self.duration_seconds - self.remaining_seconds


@dataclass(frozen=True)
class StageChanged:
    """Emitted when a tick moves the session into another stage."""

    previous: BrewStage
    current: BrewStage
    elapsed_seconds: int


@dataclass(frozen=True)
class SessionCompleted:
    """Emitted once the countdown reaches zero."""

    drawn_item: CollectibleItem | None


@dataclass(frozen=True)
class PlaybackError:
    """Playback failure relayed to the host for display."""

    message: str


def derive_stage(duration_seconds: int, remaining_seconds: int) -> BrewStage:
    """Map elapsed time to a brew stage.

    Durations shorter than four seconds collapse every boundary to zero, so
    any elapsed time lands in the final stage.
    """
    stage_span = duration_seconds // STAGE_COUNT
    elapsed = duration_seconds - remaining_seconds
    if elapsed < stage_span:
        return BrewStage.GRINDING
    if elapsed < stage_span * 2:
        return BrewStage.TAMPERING
    if elapsed < stage_span * 3:
        return BrewStage.BREWING
    return BrewStage.FILTERING


def progress_fraction(remaining_seconds: int, duration_seconds: int) -> float:
    """Return remaining/duration, 1.0 at start and 0.0 at completion."""
    if duration_seconds <= 0:
        raise InvalidConfigError("Progress is undefined for a non-positive duration")
    return remaining_seconds / duration_seconds


def format_clock(seconds: int) -> str:
    """Format seconds as MM:SS."""
    minutes, remainder = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{remainder:02d}"
