"""Data models returned by the catalog service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from domain.catalog.actions import ActionSet, ActionToken
from domain.catalog.artifacts import UpdateArtifact
from domain.catalog.classifier import ClassifiedEntry
from domain.catalog.entries import Category, Entry
from domain.catalog.logging_utils import format_update_time


@dataclass(frozen=True)
class CatalogRow:
    """A displayable row: the classified entry and its available actions."""

    item: ClassifiedEntry
    actions: ActionSet

    @property
    def entry(self) -> Entry:
        return self.item.entry

    @property
    def module_id(self) -> str:
        return self.item.module_id

    @property
    def category(self) -> Category:
        return self.item.category

    @property
    def name(self) -> str | None:
        return self.item.display_name

    @property
    def tokens(self) -> Tuple[ActionToken, ...]:
        return self.actions.tokens

    @property
    def update_artifact(self) -> UpdateArtifact:
        return self.actions.artifact

    @property
    def repo_name(self) -> str:
        return self.item.entry.repo_name

    @property
    def update_time_text(self) -> str:
        return format_update_time(self.item.entry.last_updated)


@dataclass(frozen=True)
class EntryError:
    """An entry that could not be placed in the catalog."""

    module_id: str
    category: Category
    message: str


@dataclass(frozen=True)
class CatalogSnapshot:
    """Result of one classification pass."""

    generation: int
    rows: Tuple[CatalogRow, ...]
    errors: Tuple[EntryError, ...] = ()
    update_module_ids: frozenset[str] = frozenset()

    @property
    def has_updates(self) -> bool:
        return bool(self.update_module_ids)

    @property
    def update_count(self) -> int:
        return len(self.update_module_ids)

    def row_for(self, module_id: str) -> CatalogRow | None:
        for row in self.rows:
            if row.module_id == module_id:
                return row
        return None

    def module_ids(self) -> list[str]:
        return [row.module_id for row in self.rows if row.entry.is_module]


__all__ = ["CatalogRow", "CatalogSnapshot", "EntryError"]
