"""Premium entitlement flag."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from pydantic import ValidationError

from coffee_focus.services.stickers import KeyValueStore
from coffee_focus.storage_models import PREMIUM_FLAG

DEFAULT_ENTITLEMENT_KEY = "is_premium_unlocked"

_logger = logging.getLogger(__name__)


class EntitlementProvider(Protocol):
    """Read access to the premium unlock set by the purchase flow."""

    @property
    def is_premium_unlocked(self) -> bool:
        """Return True when premium stickers may be drawn."""


@dataclass
class StoredEntitlement:
    """Entitlement flag kept in the key-value store."""

    store: KeyValueStore
    storage_key: str = DEFAULT_ENTITLEMENT_KEY
    _unsaved_unlock: bool = field(init=False, default=False)

    @property
    def is_premium_unlocked(self) -> bool:
        """Read the stored flag; an unlock that failed to save still counts."""
        return self._unsaved_unlock or self._read()

    def unlock(self) -> None:
        """Record a verified premium purchase."""
        try:
            self.store.write(self.storage_key, PREMIUM_FLAG.dump_json(True))
        except OSError:
            _logger.exception("Failed to persist premium entitlement")
            self._unsaved_unlock = True
        _logger.info("Premium stickers unlocked")

    def revoke(self) -> None:
        self._unsaved_unlock = False
        try:
            self.store.delete(self.storage_key)
        except OSError:
            _logger.exception("Failed to clear premium entitlement")

    def _read(self) -> bool:
        try:
            raw = self.store.read(self.storage_key)
        except OSError:
            _logger.exception("Failed to read premium entitlement")
            return False
        if raw is None:
            return False
        try:
            return PREMIUM_FLAG.validate_json(raw)
        except ValidationError:
            _logger.warning("Ignoring unreadable premium entitlement flag")
            return False
