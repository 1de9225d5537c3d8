"""Durable key-value storage backends for viewer settings."""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Protocol

from PyQt5 import QtCore


logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> str | None:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...


class MemoryStorage:
    """Process-local storage, mostly useful for tests and offline replay."""

    def __init__(self, items: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class JsonFileStorage:
    """Stores every key as a string entry inside one JSON document."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            logger.warning("Ignoring unreadable storage file: %s", self._path)
            return {}
        if not isinstance(payload, dict):
            return {}
        return {str(key): value for key, value in payload.items() if isinstance(value, str)}

    def _save(self, payload: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        tmp_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
        os.replace(tmp_path, self._path)

    def get_item(self, key: str) -> str | None:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        payload = self._load()
        payload[key] = value
        self._save(payload)

    def remove_item(self, key: str) -> None:
        payload = self._load()
        if payload.pop(key, None) is not None:
            self._save(payload)


class QSettingsStorage:
    """Backs the key-value contract with ``QSettings``."""

    def __init__(self, settings: QtCore.QSettings | None = None) -> None:
        self._settings = settings if settings is not None else QtCore.QSettings()

    def get_item(self, key: str) -> str | None:
        if not self._settings.contains(key):
            return None
        value = self._settings.value(key, type=str)
        return value if value else None

    def set_item(self, key: str, value: str) -> None:
        self._settings.setValue(key, value)
        self._settings.sync()

    def remove_item(self, key: str) -> None:
        self._settings.remove(key)
        self._settings.sync()
