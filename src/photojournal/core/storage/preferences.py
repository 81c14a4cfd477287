"""
Preference store backed by a single JSON file.

The file maps string keys to JSON values. Reads go to disk every time;
writes go through a temporary file in the same directory followed by
``os.replace`` so readers never see a half-written file.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from loguru import logger

from ..exceptions import StorageError
from ..types import JSONValue, PathLike


class PreferenceStore:
    """Key → JSON value store in one local file."""

    def __init__(self, path: PathLike):
        self.path = Path(path).expanduser()

    def _read_all(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e
        if not text.strip():
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise StorageError(f"Preference file {self.path} is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Preference file {self.path} does not contain an object")
        return data

    def _write_all(self, data: dict[str, Any]) -> None:
        try:
            payload = json.dumps(data, ensure_ascii=False, indent=2)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Preference values are not JSON-serializable: {e}") from e

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".prefs-", suffix=".tmp", dir=self.path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.remove(tmp_name)
                raise
        except OSError as e:
            raise StorageError(f"Cannot write {self.path}: {e}") from e

    def _read_for_update(self) -> dict[str, Any]:
        try:
            return self._read_all()
        except StorageError as e:
            logger.warning(f"Discarding unreadable preferences before write: {e}")
            return {}

    def contains(self, key: str) -> bool:
        return key in self._read_all()

    def get(self, key: str, default: JSONValue = None) -> JSONValue:
        """Return the value stored under *key*, or *default* if absent.

        Raises:
            StorageError: If the preference file exists but cannot be read.
        """
        return self._read_all().get(key, default)

    def set(self, key: str, value: JSONValue) -> None:
        """Store *value* under *key*, replacing any previous value.

        Raises:
            StorageError: If the value cannot be serialized or the file written.
        """
        data = self._read_for_update()
        data[key] = value
        self._write_all(data)

    def remove(self, key: str) -> bool:
        """Delete *key*. Returns True if it existed."""
        data = self._read_for_update()
        if key not in data:
            return False
        del data[key]
        self._write_all(data)
        return True

    def keys(self) -> list[str]:
        return list(self._read_all())
