"""Service that turns catalog entries into an ordered, annotated list."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import AbstractSet

from app.config import CatalogConfig, get_catalog_config
from domain.catalog.actions import ActionDeriver, ConfigTargetResolver
from domain.catalog.classifier import ClassifiedEntry, Classifier
from domain.catalog.entries import Category, Entry, EntryKind
from domain.catalog.errors import MissingModuleNameError
from domain.catalog.logging_utils import describe_categories, describe_classified, describe_rules
from domain.catalog.ordering import sort_entries, sort_key
from domain.catalog.removal import NotificationPredicate, should_remove
from domain.catalog.suppression import SuppressionRules
from domain.catalog.update_registry import UpdateRegistry, get_update_registry
from services.catalog.constants import (
    PREF_DISABLE_LOW_QUALITY_FILTER,
    PREF_FORCE_DEBUG_LOGGING,
    PREF_SHOWCASE_MODE,
)
from services.catalog.models import CatalogRow, CatalogSnapshot, EntryError
from services.catalog.preferences import PreferenceStore

_LOGGER = logging.getLogger(__name__)


class CatalogService:
    """Run classification passes over catalog entries.

    Each call to :meth:`build` reads the preferences afresh, classifies every
    entry, drops stale rows, sorts the rest and derives their actions.  Passes
    are numbered; :meth:`is_current` reports whether a snapshot is still the
    newest one so callers can discard superseded results.  After each pass the
    update registry holds exactly the modules that pass found updatable.
    """

    def __init__(
        self,
        preferences: PreferenceStore,
        *,
        config_resolver: ConfigTargetResolver | None = None,
        registry: UpdateRegistry | None = None,
        config: CatalogConfig | None = None,
        notification_active: NotificationPredicate | None = None,
    ) -> None:
        self._preferences = preferences
        self._config_resolver = config_resolver
        self._registry = registry if registry is not None else get_update_registry()
        self._config = config or get_catalog_config()
        self._notification_active = notification_active
        self._generation_lock = threading.Lock()
        self._generation = 0

    @property
    def registry(self) -> UpdateRegistry:
        return self._registry

    def is_current(self, snapshot: CatalogSnapshot) -> bool:
        with self._generation_lock:
            return snapshot.generation == self._generation

    def build(
        self,
        entries: Iterable[Entry],
        *,
        tracked_remote_ids: AbstractSet[str] = frozenset(),
        max_workers: int | None = None,
    ) -> CatalogSnapshot:
        """Classify, filter, sort and annotate ``entries``."""

        generation = self._next_generation()
        rules = SuppressionRules.from_preferences(self._preferences)
        verbose = self._preferences.get_bool(PREF_FORCE_DEBUG_LOGGING)
        showcase_mode = self._preferences.get_bool(PREF_SHOWCASE_MODE)
        low_quality_filter = not self._preferences.get_bool(PREF_DISABLE_LOW_QUALITY_FILTER)
        if verbose:
            _LOGGER.info("Catalog pass %d starting with %s", generation, describe_rules(rules))

        classifier = Classifier(
            rules,
            self._registry,
            tracked_remote_ids=tracked_remote_ids,
            self_update_source=self._config.self_update_source,
            verbose=verbose,
        )
        workers = max_workers if max_workers is not None else self._config.classification.max_workers
        classified = self._classify_all(classifier, list(entries), workers)
        if verbose:
            for item in classified:
                _LOGGER.info("Classified %s", describe_classified(item))
        updatable_ids = frozenset(
            item.module_id for item in classified if item.category is Category.UPDATABLE
        )
        self._registry.retain(updatable_ids)

        kept = [
            item
            for item in classified
            if not should_remove(
                item,
                has_update_now=classifier.has_update(item.entry),
                low_quality_filter=low_quality_filter,
                notification_active=self._notification_active,
            )
        ]
        placeable, errors = self._partition_placeable(kept)
        ordered = sort_entries(_drop_empty_sections(placeable))

        deriver = ActionDeriver(
            self._config_resolver,
            showcase_mode=showcase_mode,
            module_id_pattern=self._config.module_id_pattern,
            first_party_config_prefix=self._config.first_party_config_prefix,
            self_update_source=self._config.self_update_source,
        )
        rows = tuple(CatalogRow(item=item, actions=deriver.derive(item)) for item in ordered)

        _LOGGER.debug(
            "Catalog pass %d: %d entries classified, %d shown (%s), %d errors",
            generation,
            len(classified),
            len(rows),
            describe_categories(item for item in ordered),
            len(errors),
        )
        return CatalogSnapshot(
            generation=generation,
            rows=rows,
            errors=tuple(errors),
            update_module_ids=updatable_ids,
        )

    def _next_generation(self) -> int:
        with self._generation_lock:
            self._generation += 1
            return self._generation

    @staticmethod
    def _classify_all(classifier: Classifier, entries: Sequence[Entry], workers: int) -> list[ClassifiedEntry]:
        if workers <= 1 or len(entries) < 2:
            return [classifier.classify(entry) for entry in entries]
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="catalog-classify") as executor:
            return list(executor.map(classifier.classify, entries))

    @staticmethod
    def _partition_placeable(
        items: Sequence[ClassifiedEntry],
    ) -> tuple[list[ClassifiedEntry], list[EntryError]]:
        placeable: list[ClassifiedEntry] = []
        errors: list[EntryError] = []
        for item in items:
            try:
                sort_key(item)
            except MissingModuleNameError as exc:
                _LOGGER.error("Skipping catalog entry: %s", exc)
                errors.append(EntryError(module_id=item.module_id, category=item.category, message=str(exc)))
                continue
            placeable.append(item)
        return placeable, errors


def _drop_empty_sections(items: Sequence[ClassifiedEntry]) -> list[ClassifiedEntry]:
    populated: set[Category] = {item.category for item in items if item.entry.is_module}
    result: list[ClassifiedEntry] = []
    for item in items:
        section = item.entry.section
        if item.entry.kind is EntryKind.SEPARATOR and section is not None and section.holds_modules:
            if section not in populated:
                continue
        result.append(item)
    return result


__all__ = ["CatalogService"]
