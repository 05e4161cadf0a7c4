"""Sticker collection with a persisted unlock state."""

import logging
import random
from dataclasses import dataclass, field
from typing import Protocol

from pydantic import ValidationError

from coffee_focus.domain.stickers import (
    CATALOG_SIZE,
    STICKER_CATALOG,
    CollectibleItem,
    CollectionProgress,
)
from coffee_focus.storage_models import STICKER_RECORDS, StickerRecord

DEFAULT_COLLECTION_KEY = "coffee_stickers"

_logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Persistence interface for small keyed blobs."""

    def read(self, key: str) -> bytes | None:
        """Return the stored bytes for a key, if present."""

    def write(self, key: str, data: bytes) -> None:
        """Store bytes under a key, replacing any previous value."""

    def delete(self, key: str) -> None:
        """Remove a key; missing keys are ignored."""


class PersistenceCorruptError(ValueError):
    """Persisted collection cannot be used with the current catalog."""


@dataclass
class StickerCollection:
    """Owns which catalog stickers are collected and draws new ones."""

    store: KeyValueStore
    storage_key: str = DEFAULT_COLLECTION_KEY
    rng: random.Random = field(default_factory=random.Random)
    _collected: dict[int, bool] = field(init=False, default_factory=dict)

    def __post_init__(self) -> None:
        self._collected = _fresh_state()

    def load(self) -> None:
        """Load persisted progress, resetting it when it no longer fits.

        A failed read keeps a fresh state in memory without touching the
        stored record, so progress survives a transient I/O error.
        """
        try:
            saved = self._read_state()
        except OSError:
            _logger.exception("Failed to read sticker collection")
            self._collected = _fresh_state()
            return
        except PersistenceCorruptError as exc:
            _logger.warning("Sticker collection reset: %s", exc)
            self._delete_stale()
            saved = None
        if saved is None:
            self._collected = _fresh_state()
            self.persist()
            return
        self._collected = saved
        _logger.info(
            "Loaded %s stickers (%s collected)",
            len(saved),
            sum(saved.values()),
        )

    def eligible_items(self, premium_enabled: bool) -> list[CollectibleItem]:
        """Return uncollected stickers that may be drawn."""
        return [
            item
            for item in STICKER_CATALOG
            if not self._collected[item.id] and (not item.is_premium or premium_enabled)
        ]

    def draw_unclaimed(self, premium_enabled: bool) -> CollectibleItem | None:
        """Collect one random eligible sticker and return it."""
        eligible = self.eligible_items(premium_enabled)
        if not eligible:
            _logger.info("No eligible stickers left (premium=%s)", premium_enabled)
            return None
        item = self.rng.choice(eligible)
        self._collected[item.id] = True
        self.persist()
        _logger.info("Unlocked sticker %s (%s)", item.id, item.name)
        return item

    def reset(self) -> None:
        """Mark every sticker uncollected."""
        self._collected = _fresh_state()
        self.persist()
        _logger.info("Sticker collection reset by user")

    def persist(self) -> None:
        """Write the whole collection; failures keep the in-memory state."""
        records = [
            StickerRecord(
                id=item.id,
                name=item.name,
                is_collected=self._collected[item.id],
                is_premium=item.is_premium,
            )
            for item in STICKER_CATALOG
        ]
        try:
            self.store.write(self.storage_key, STICKER_RECORDS.dump_json(records))
        except OSError:
            _logger.exception("Failed to persist sticker collection")

    def is_collected(self, item_id: int) -> bool:
        return self._collected.get(item_id, False)

    def items(self) -> list[tuple[CollectibleItem, bool]]:
        """Return catalog stickers with their collected flag."""
        return [(item, self._collected[item.id]) for item in STICKER_CATALOG]

    def collected_items(self) -> list[CollectibleItem]:
        return [item for item in STICKER_CATALOG if self._collected[item.id]]

    def progress(self) -> CollectionProgress:
        return CollectionProgress(
            collected=sum(self._collected.values()),
            total=CATALOG_SIZE,
        )

    def _read_state(self) -> dict[int, bool] | None:
        raw = self.store.read(self.storage_key)
        if raw is None:
            return None
        try:
            records = STICKER_RECORDS.validate_json(raw)
        except ValidationError as exc:
            raise PersistenceCorruptError(
                f"unparseable ({exc.error_count()} errors)"
            ) from exc
        ids = [record.id for record in records]
        if len(ids) != len(set(ids)):
            raise PersistenceCorruptError("duplicate sticker ids")
        if set(ids) != {item.id for item in STICKER_CATALOG}:
            raise PersistenceCorruptError(
                f"catalog mismatch ({len(ids)} saved, {CATALOG_SIZE} expected)"
            )
        return {record.id: record.is_collected for record in records}

    def _delete_stale(self) -> None:
        try:
            self.store.delete(self.storage_key)
        except OSError:
            _logger.exception("Failed to delete stale sticker collection")


def _fresh_state() -> dict[int, bool]:
    return {item.id: False for item in STICKER_CATALOG}
