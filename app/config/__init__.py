"""Catalog engine configuration loaded from JSON resources."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Mapping

_CONFIG_RESOURCE = "catalog.json"
_CATALOG_CONFIG_CACHE: CatalogConfig | None = None

_DEFAULT_FIRST_PARTY_CONFIG_PREFIX = "https://www.androidacy.com/"
_DEFAULT_SELF_UPDATE_SOURCE = "update_json"
_DEFAULT_MODULE_ID_PATTERN = r"^[A-Za-z][A-Za-z0-9._-]+$"
_DEFAULT_MAX_WORKERS = 1


@dataclass(frozen=True)
class ClassificationConfig:
    """Settings for the classification pass."""

    max_workers: int

    @property
    def parallel(self) -> bool:
        return self.max_workers > 1


@dataclass(frozen=True)
class CatalogConfig:
    """Structured configuration values for the catalog engine."""

    first_party_config_prefix: str
    self_update_source: str
    module_id_pattern: str
    classification: ClassificationConfig


def get_catalog_config() -> CatalogConfig:
    """Return the cached catalog configuration."""

    global _CATALOG_CONFIG_CACHE
    if _CATALOG_CONFIG_CACHE is None:
        _CATALOG_CONFIG_CACHE = load_catalog_config()
    return _CATALOG_CONFIG_CACHE


def reset_catalog_config_cache() -> None:
    """Reset the cached configuration for subsequent reloads."""

    global _CATALOG_CONFIG_CACHE
    _CATALOG_CONFIG_CACHE = None


def load_catalog_config(path: str | Path | None = None) -> CatalogConfig:
    """Load configuration from ``path`` or the bundled JSON resource."""

    data = _read_config_data(path)
    classification_section = data.get("classification")
    return CatalogConfig(
        first_party_config_prefix=_coerce_text(
            data.get("first_party_config_prefix"), default=_DEFAULT_FIRST_PARTY_CONFIG_PREFIX
        ),
        self_update_source=_coerce_text(data.get("self_update_source"), default=_DEFAULT_SELF_UPDATE_SOURCE),
        module_id_pattern=_coerce_pattern(data.get("module_id_pattern"), default=_DEFAULT_MODULE_ID_PATTERN),
        classification=_parse_classification_section(classification_section),
    )


def _read_config_data(path: str | Path | None) -> Mapping[str, Any]:
    if path is not None:
        return _load_json_from_path(Path(path).expanduser())
    return _load_default_config_data()


def _load_json_from_path(path: Path) -> Mapping[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError:
        return {}
    return _parse_json(raw)


def _load_default_config_data() -> Mapping[str, Any]:
    try:
        resource = resources.files(__package__).joinpath(_CONFIG_RESOURCE)
        raw = resource.read_text(encoding="utf-8")
    except (FileNotFoundError, OSError):
        return {}
    return _parse_json(raw)


def _parse_json(raw: str) -> Mapping[str, Any]:
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        return {}
    if isinstance(parsed, Mapping):
        return parsed
    return {}


def _parse_classification_section(section: Any) -> ClassificationConfig:
    if not isinstance(section, Mapping):
        return ClassificationConfig(max_workers=_DEFAULT_MAX_WORKERS)
    workers = _coerce_positive_int(section.get("max_workers"), default=_DEFAULT_MAX_WORKERS)
    return ClassificationConfig(max_workers=workers)


def _coerce_text(value: Any, *, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _coerce_pattern(value: Any, *, default: str) -> str:
    if not isinstance(value, str) or not value:
        return default
    try:
        re.compile(value)
    except re.error:
        return default
    return value


def _coerce_positive_int(value: Any, *, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        candidate = int(value)
    elif isinstance(value, str):
        try:
            candidate = int(float(value))
        except ValueError:
            return default
    else:
        return default
    if candidate <= 0:
        return default
    return candidate


__all__ = [
    "CatalogConfig",
    "ClassificationConfig",
    "get_catalog_config",
    "load_catalog_config",
    "reset_catalog_config_cache",
]
