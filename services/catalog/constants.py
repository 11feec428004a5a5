"""Constants shared across the catalog service modules."""

from __future__ import annotations

from domain.catalog.suppression import PREF_UPDATE_CHECK_EXCLUDES, PREF_UPDATE_CHECK_EXCLUDES_VERSION

PREF_DISABLE_LOW_QUALITY_FILTER = "pref_disable_low_quality_module_filter"
PREF_FORCE_DEBUG_LOGGING = "pref_force_debug_logging"
PREF_SHOWCASE_MODE = "pref_showcase_mode"

PREFERENCES_PATH_ENV = "MODULE_CATALOG_PREFERENCES_PATH"
DEFAULT_PREFERENCES_DIRNAME = ".module_catalog"
DEFAULT_PREFERENCES_FILENAME = "preferences.json"

__all__ = [
    "DEFAULT_PREFERENCES_DIRNAME",
    "DEFAULT_PREFERENCES_FILENAME",
    "PREFERENCES_PATH_ENV",
    "PREF_DISABLE_LOW_QUALITY_FILTER",
    "PREF_FORCE_DEBUG_LOGGING",
    "PREF_SHOWCASE_MODE",
    "PREF_UPDATE_CHECK_EXCLUDES",
    "PREF_UPDATE_CHECK_EXCLUDES_VERSION",
]
