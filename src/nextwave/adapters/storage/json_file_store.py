"""Key-value store persisted as a single JSON object on disk."""

import json
import logging
import os
import tempfile
from pathlib import Path

from nextwave.domain.ports.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)


class JsonFileKeyValueStore(KeyValueStore):
    """Stores string values in a JSON file.

    Writes go to a temporary file in the same directory which then replaces
    the target, so a crash never leaves a half-written file behind.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        """Location of the backing file."""
        return self._path

    def _read_all(self) -> dict[str, str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Ignoring corrupt key-value file {self._path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.error(f"Ignoring key-value file {self._path}: expected a JSON object")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None."""
        return self._read_all().get(key)

    def put(self, key: str, value: str) -> None:
        """Store ``value`` under ``key`` and flush it to disk."""
        data = self._read_all()
        data[key] = value

        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug(f"Stored key '{key}' in {self._path}")
