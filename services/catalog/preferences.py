"""Key/value preference stores read by the catalog service.

Stores are read-through: every lookup consults the backing data so edits made
between classification passes are always observed.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Protocol

from services.catalog.constants import (
    DEFAULT_PREFERENCES_DIRNAME,
    DEFAULT_PREFERENCES_FILENAME,
    PREFERENCES_PATH_ENV,
)

_LOGGER = logging.getLogger(__name__)

_TRUE_STRINGS = {"1", "true", "t", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "f", "no", "off", ""}


class PreferenceStore(Protocol):
    def get_bool(self, key: str, default: bool = False) -> bool: ...

    def get_int(self, key: str, default: int = 0) -> int: ...

    def get_string_set(self, key: str) -> tuple[str, ...]: ...


def _coerce_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(int(value))
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in _TRUE_STRINGS:
            return True
        if normalized in _FALSE_STRINGS:
            return False
    return default


def _coerce_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return default
    return default


def _coerce_string_set(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple, set, frozenset)):
        return ()
    items = [item for item in value if isinstance(item, str) and item]
    if isinstance(value, (set, frozenset)):
        items.sort()
    return tuple(dict.fromkeys(items))


class _MappingBackedStore:
    def _values(self) -> Mapping[str, Any]:
        raise NotImplementedError

    def get_bool(self, key: str, default: bool = False) -> bool:
        return _coerce_bool(self._values().get(key), default)

    def get_int(self, key: str, default: int = 0) -> int:
        return _coerce_int(self._values().get(key), default)

    def get_string_set(self, key: str) -> tuple[str, ...]:
        return _coerce_string_set(self._values().get(key))


class InMemoryPreferenceStore(_MappingBackedStore):
    """Preference store backed by a mutable dictionary."""

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._data: Dict[str, Any] = dict(values or {})

    def _values(self) -> Mapping[str, Any]:
        return self._data

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def set_string_set(self, key: str, values: Iterable[str]) -> None:
        self._data[key] = list(values)


def default_preferences_path() -> Path:
    """Return the configured preferences path, falling back to the user home."""

    override = os.environ.get(PREFERENCES_PATH_ENV)
    if override:
        return Path(override)
    return Path.home() / DEFAULT_PREFERENCES_DIRNAME / DEFAULT_PREFERENCES_FILENAME


class JsonPreferenceStore(_MappingBackedStore):
    """Preference store persisted as a JSON object on disk.

    Missing, unreadable or malformed files behave like an empty store.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or default_preferences_path()

    @property
    def path(self) -> Path:
        return self._path

    def _values(self) -> Mapping[str, Any]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            _LOGGER.warning("Unable to read preferences from %s: %s", self._path, exc)
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            _LOGGER.warning("Ignoring malformed preferences file %s", self._path)
            return {}
        if not isinstance(data, dict):
            return {}
        return data

    def update(self, values: Mapping[str, Any]) -> None:
        """Merge ``values`` into the file, ignoring filesystem errors."""

        data: Dict[str, Any] = dict(self._values())
        for key, value in values.items():
            if isinstance(value, (set, frozenset)):
                value = sorted(value)
            elif isinstance(value, tuple):
                value = list(value)
            data[key] = value
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            payload = json.dumps(data, indent=2, sort_keys=True) + "\n"
            self._path.write_text(payload, encoding="utf-8")
        except OSError as exc:
            _LOGGER.warning("Unable to persist preferences to %s: %s", self._path, exc)


__all__ = [
    "InMemoryPreferenceStore",
    "JsonPreferenceStore",
    "PreferenceStore",
    "default_preferences_path",
]
