"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from coffee_focus.domain.music import PREVIEW_WINDOW_SECONDS
from coffee_focus.domain.sessions import DEFAULT_DURATION_SECONDS, PRESET_DURATIONS
from coffee_focus.services.entitlement import DEFAULT_ENTITLEMENT_KEY
from coffee_focus.services.stickers import DEFAULT_COLLECTION_KEY

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    data_dir: Path = Path.home() / ".coffee_focus"
    music_dir: Path | None = None
    default_duration_seconds: int = DEFAULT_DURATION_SECONDS
    tick_interval_seconds: float = 1.0
    preview_window_seconds: float = PREVIEW_WINDOW_SECONDS
    preset_minutes: str = "25,45,60"
    collection_key: str = DEFAULT_COLLECTION_KEY
    entitlement_key: str = DEFAULT_ENTITLEMENT_KEY
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="COFFEE_FOCUS_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def resolved_music_dir(self) -> Path:
        """Return the track directory, defaulting to ``<data_dir>/music``."""
        return self.music_dir or self.data_dir / "music"


def parse_preset_minutes(raw: str | None) -> list[int]:
    """Parse comma-separated preset durations in minutes."""
    defaults = [seconds // 60 for _, seconds in PRESET_DURATIONS]
    if raw is None:
        return defaults
    minutes: list[int] = []
    for chunk in raw.split(","):
        value = chunk.strip()
        if not value.isdigit():
            continue
        parsed = int(value)
        if parsed > 0 and parsed not in minutes:
            minutes.append(parsed)
    return minutes or defaults
