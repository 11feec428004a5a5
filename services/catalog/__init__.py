"""Public API for the catalog service package."""

from __future__ import annotations

from services.catalog.assembly import SECTION_CATEGORIES, assemble_entries, select_remote_record
from services.catalog.builder import build_catalog_service, refresh_catalog, schedule_catalog_refresh
from services.catalog.constants import (
    PREF_DISABLE_LOW_QUALITY_FILTER,
    PREF_FORCE_DEBUG_LOGGING,
    PREF_SHOWCASE_MODE,
    PREF_UPDATE_CHECK_EXCLUDES,
    PREF_UPDATE_CHECK_EXCLUDES_VERSION,
    PREFERENCES_PATH_ENV,
)
from services.catalog.models import CatalogRow, CatalogSnapshot, EntryError
from services.catalog.preferences import InMemoryPreferenceStore, JsonPreferenceStore, PreferenceStore
from services.catalog.service import CatalogService

__all__ = [
    "PREFERENCES_PATH_ENV",
    "PREF_DISABLE_LOW_QUALITY_FILTER",
    "PREF_FORCE_DEBUG_LOGGING",
    "PREF_SHOWCASE_MODE",
    "PREF_UPDATE_CHECK_EXCLUDES",
    "PREF_UPDATE_CHECK_EXCLUDES_VERSION",
    "SECTION_CATEGORIES",
    "CatalogRow",
    "CatalogService",
    "CatalogSnapshot",
    "EntryError",
    "InMemoryPreferenceStore",
    "JsonPreferenceStore",
    "PreferenceStore",
    "assemble_entries",
    "build_catalog_service",
    "refresh_catalog",
    "schedule_catalog_refresh",
    "select_remote_record",
]
