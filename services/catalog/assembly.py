"""Merge local and repository records into catalog entries."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from domain.catalog.entries import Category, Entry, NotificationKind
from domain.catalog.records import ModuleRecord, RemoteModuleRecord

_LOGGER = logging.getLogger(__name__)

SECTION_CATEGORIES = (Category.UPDATABLE, Category.INSTALLED, Category.INSTALLABLE)

RemoteRecords = Mapping[str, "RemoteModuleRecord | Sequence[RemoteModuleRecord]"]


def _offer_preference(record: RemoteModuleRecord) -> tuple[bool, int, int, str]:
    return (
        not record.repo_enabled,
        -record.version_code,
        -record.last_updated,
        record.repo_preference_id,
    )


def select_remote_record(records: Sequence[RemoteModuleRecord]) -> RemoteModuleRecord | None:
    """Pick the repository offer to show when several repositories carry a module.

    Enabled repositories win, then the highest version, then the most recent
    upload; the repository id breaks any remaining tie.
    """

    if not records:
        return None
    return min(records, key=_offer_preference)


def _normalise_remote(remote_records: RemoteRecords) -> dict[str, RemoteModuleRecord]:
    selected: dict[str, RemoteModuleRecord] = {}
    for module_id, value in remote_records.items():
        records = [value] if isinstance(value, RemoteModuleRecord) else list(value)
        record = select_remote_record(records)
        if record is None:
            continue
        if len(records) > 1:
            _LOGGER.debug(
                "Module %s offered by %d repositories; using %s",
                module_id,
                len(records),
                record.repo_preference_id,
            )
        selected[module_id] = record
    return selected


def assemble_entries(
    local_records: Mapping[str, ModuleRecord],
    remote_records: RemoteRecords,
    *,
    notifications: Iterable[NotificationKind] = (),
    sections: Iterable[Category] = SECTION_CATEGORIES,
    footer_height: int | None = None,
) -> list[Entry]:
    """Build one entry per module id plus the requested placeholder rows."""

    remote = _normalise_remote(remote_records)
    entries: list[Entry] = [Entry.notification_row(kind) for kind in notifications]
    entries.extend(Entry.separator_row(section) for section in sections)

    for module_id in sorted(set(local_records) | set(remote)):
        entries.append(Entry.module(module_id, local_records.get(module_id), remote.get(module_id)))

    if footer_height is not None:
        entries.append(Entry.footer(footer_height))
    _LOGGER.debug(
        "Assembled %d entries (local=%d, remote=%d)",
        len(entries),
        len(local_records),
        len(remote),
    )
    return entries


__all__ = ["SECTION_CATEGORIES", "assemble_entries", "select_remote_record"]
