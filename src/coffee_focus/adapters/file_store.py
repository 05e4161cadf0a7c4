"""File-backed key-value store."""

import logging
import os
import re
import tempfile
from dataclasses import dataclass
from pathlib import Path

from coffee_focus.services.stickers import KeyValueStore

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")

_logger = logging.getLogger(__name__)


@dataclass
class FileKeyValueStore(KeyValueStore):
    """Stores each key as one file under a data directory."""

    base_dir: Path

    def read(self, key: str) -> bytes | None:
        """Return the file contents for a key, if the file exists."""
        path = self._path_for(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None

    def write(self, key: str, data: bytes) -> None:
        """Replace the file for a key atomically."""
        path = self._path_for(key)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.base_dir, prefix=f".{key}.")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        _logger.debug("Wrote %s bytes to %s", len(data), path)

    def delete(self, key: str) -> None:
        """Remove the file for a key if present."""
        self._path_for(key).unlink(missing_ok=True)

    def _path_for(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.base_dir / f"{key}.json"
