"""Helpers for constructing the catalog service and scheduling refreshes."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from typing import Callable

from domain.catalog.actions import ConfigTargetResolver
from domain.catalog.entries import NotificationKind
from domain.catalog.records import ModuleRecord
from services.catalog.assembly import RemoteRecords, assemble_entries
from services.catalog.constants import PREF_FORCE_DEBUG_LOGGING
from services.catalog.models import CatalogSnapshot
from services.catalog.preferences import JsonPreferenceStore, PreferenceStore
from services.catalog.service import CatalogService
from shared.logging_config import LogVerbosity, ensure_app_logging

_LOGGER = logging.getLogger(__name__)


def build_catalog_service(
    preferences: PreferenceStore | None = None,
    *,
    config_resolver: ConfigTargetResolver | None = None,
    configure_logging: bool = True,
) -> CatalogService:
    """Construct a :class:`CatalogService` for the current environment."""

    preferences = preferences or JsonPreferenceStore()
    if configure_logging:
        debug = preferences.get_bool(PREF_FORCE_DEBUG_LOGGING)
        ensure_app_logging(LogVerbosity.VERBOSE if debug else None)
    return CatalogService(preferences, config_resolver=config_resolver)


def refresh_catalog(
    service: CatalogService,
    local_records: Mapping[str, ModuleRecord],
    remote_records: RemoteRecords,
    *,
    notifications: Iterable[NotificationKind] = (),
    footer_height: int | None = None,
) -> CatalogSnapshot:
    """Assemble entries from record maps and run one catalog pass."""

    entries = assemble_entries(
        local_records,
        remote_records,
        notifications=notifications,
        footer_height=footer_height,
    )
    return service.build(entries, tracked_remote_ids=frozenset(remote_records))


def _run_refresh(
    service: CatalogService,
    local_records: Mapping[str, ModuleRecord],
    remote_records: RemoteRecords,
    notifications: tuple[NotificationKind, ...],
    on_snapshot: Callable[[CatalogSnapshot], None],
    on_complete: Callable[[], None] | None,
) -> None:
    try:
        snapshot = refresh_catalog(service, local_records, remote_records, notifications=notifications)
    except Exception:  # pragma: no cover - defensive guard
        _LOGGER.exception("Unexpected error while refreshing the module catalog")
        if on_complete:
            on_complete()
        return

    try:
        if service.is_current(snapshot):
            on_snapshot(snapshot)
        else:
            _LOGGER.debug("Discarding superseded catalog pass %d", snapshot.generation)
    finally:
        if on_complete:
            on_complete()


def schedule_catalog_refresh(
    service: CatalogService,
    local_records: Mapping[str, ModuleRecord],
    remote_records: RemoteRecords,
    on_snapshot: Callable[[CatalogSnapshot], None],
    *,
    notifications: Iterable[NotificationKind] = (),
    on_complete: Callable[[], None] | None = None,
) -> threading.Thread:
    """Run a catalog pass on a background thread.

    ``on_snapshot`` only receives the result when no newer pass started in the
    meantime.
    """

    thread = threading.Thread(
        target=_run_refresh,
        args=(service, dict(local_records), dict(remote_records), tuple(notifications), on_snapshot, on_complete),
        name="catalog-refresh",
        daemon=True,
    )
    thread.start()
    return thread


__all__ = ["build_catalog_service", "refresh_catalog", "schedule_catalog_refresh"]
