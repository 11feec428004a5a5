"""Assign catalog categories and update decisions to entries."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import AbstractSet

from .artifacts import SELF_UPDATE_SOURCE, UpdateArtifact, resolve_update_artifact
from .entries import Category, Entry, EntryKind
from .records import ModuleMetadata, ModuleRecord
from .suppression import SuppressionRules
from .update_registry import UpdateSink

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassifiedEntry:
    """An entry together with everything derived for it during one pass."""

    entry: Entry
    category: Category
    compare_category: Category
    has_update: bool
    artifact: UpdateArtifact
    display_name: str | None

    @property
    def module_id(self) -> str:
        return self.entry.module_id


def authoritative_info(entry: Entry) -> ModuleRecord | ModuleMetadata | None:
    """Return the metadata that describes ``entry`` to the user.

    The repository copy wins when the module is not installed or when the
    repository version is not older than the installed one.
    """

    local, remote = entry.local, entry.remote
    if remote is not None and (local is None or local.version_code <= remote.version_code):
        return remote.metadata
    return local


def display_name(entry: Entry) -> str | None:
    if entry.kind is EntryKind.NOTIFICATION and entry.notification is not None:
        return entry.notification.key
    if not entry.is_module:
        return None
    info = authoritative_info(entry)
    return info.name if info is not None else None


def has_update(entry: Entry, tracked_remote_ids: AbstractSet[str] = frozenset()) -> bool:
    """Return ``True`` when an installed module has a newer version available.

    ``tracked_remote_ids`` lists every module id offered by any repository;
    a module a repository tracks only updates through that repository.
    """

    local = entry.local
    if local is None:
        if entry.is_module:
            _LOGGER.debug("Module %s has no local record", entry.module_id)
        return False
    remote = entry.remote
    if remote is None and entry.module_id not in tracked_remote_ids:
        if local.update_version_code > local.version_code:
            _LOGGER.debug(
                "Module %s has update from %d to %d",
                entry.module_id,
                local.version_code,
                local.update_version_code,
            )
            return True
    elif remote is not None and remote.version_code > local.version_code:
        _LOGGER.debug(
            "Module %s has update from repo from %d to %d",
            entry.module_id,
            local.version_code,
            remote.version_code,
        )
        return True
    return False


def compare_category(entry: Entry, category: Category) -> Category:
    """Return the category ``entry`` sorts as, which may differ from ``category``."""

    if entry.kind is EntryKind.SEPARATOR and entry.section is not None:
        return entry.section
    if entry.is_special_notification:
        return Category.SPECIAL_NOTIFICATION
    return category


class Classifier:
    """Categorize entries against one snapshot of suppression rules."""

    def __init__(
        self,
        rules: SuppressionRules,
        registry: UpdateSink | None = None,
        *,
        tracked_remote_ids: AbstractSet[str] = frozenset(),
        self_update_source: str = SELF_UPDATE_SOURCE,
        verbose: bool = False,
    ) -> None:
        self._rules = rules
        self._registry = registry
        self._tracked_remote_ids = tracked_remote_ids
        self._self_update_source = self_update_source
        self._verbose = verbose

    @property
    def rules(self) -> SuppressionRules:
        return self._rules

    def categorize(self, entry: Entry) -> Category:
        if entry.kind is EntryKind.FOOTER:
            return Category.FOOTER
        if entry.kind is EntryKind.SEPARATOR:
            return Category.SEPARATOR
        if entry.kind is EntryKind.NOTIFICATION:
            return Category.NOTIFICATION

        local, remote = entry.local, entry.remote
        if local is None:
            return Category.INSTALLABLE

        self_update = local.update_version_code > local.version_code
        repo_update = remote is not None and remote.version_code > local.version_code
        if not (self_update or repo_update):
            return Category.INSTALLED

        if self._verbose:
            _LOGGER.info("Module %s is updatable", entry.module_id)
        candidate = remote.version_code if remote is not None else local.update_version_code
        if self._rules.is_suppressed(entry.module_id, candidate):
            if self._verbose:
                _LOGGER.info("Module %s has update, but is ignored", entry.module_id)
            return Category.INSTALLED
        if not has_update(entry, self._tracked_remote_ids):
            return Category.INSTALLED
        if self._registry is not None:
            self._registry.mark_has_update(entry.module_id)
        return Category.UPDATABLE

    def has_update(self, entry: Entry) -> bool:
        return has_update(entry, self._tracked_remote_ids)

    def classify(self, entry: Entry) -> ClassifiedEntry:
        category = self.categorize(entry)
        return ClassifiedEntry(
            entry=entry,
            category=category,
            compare_category=compare_category(entry, category),
            has_update=self.has_update(entry),
            artifact=resolve_update_artifact(entry, self_update_source=self._self_update_source),
            display_name=display_name(entry),
        )


def categorize(
    entry: Entry,
    rules: SuppressionRules,
    registry: UpdateSink | None = None,
    *,
    tracked_remote_ids: AbstractSet[str] = frozenset(),
) -> Category:
    """Convenience wrapper around :meth:`Classifier.categorize`."""

    return Classifier(rules, registry, tracked_remote_ids=tracked_remote_ids).categorize(entry)


__all__ = [
    "ClassifiedEntry",
    "Classifier",
    "authoritative_info",
    "categorize",
    "compare_category",
    "display_name",
    "has_update",
]
