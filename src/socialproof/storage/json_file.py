"""JSON file persistence for throttle state."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Final

from socialproof.errors import PersistenceUnavailable

logger: Final = logging.getLogger(__name__)


class JsonFileStore:
    """Key-value store kept as a flat JSON object in a single file.

    A missing file is an empty store. Writes replace the file atomically
    so a crash never leaves half-written JSON behind.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def get(self, key: str) -> str | None:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def _read(self) -> dict[str, object]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise PersistenceUnavailable(f"Cannot read {self.path}: {exc}", exc) from exc
        except UnicodeDecodeError as exc:
            raise PersistenceUnavailable(f"State file {self.path} is not UTF-8", exc) from exc

        try:
            data = json.loads(raw)
        except ValueError as exc:
            raise PersistenceUnavailable(f"Corrupt state file {self.path}", exc) from exc
        if not isinstance(data, dict):
            raise PersistenceUnavailable(f"State file {self.path} is not a JSON object")
        return data

    def _write(self, data: dict[str, object]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".state-", suffix=".json")
        except OSError as exc:
            raise PersistenceUnavailable(f"Cannot write {self.path}: {exc}", exc) from exc

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2, sort_keys=True)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise PersistenceUnavailable(f"Cannot write {self.path}: {exc}", exc) from exc
        logger.debug("Saved throttle state to %s", self.path)
