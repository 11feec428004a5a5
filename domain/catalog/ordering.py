"""Total ordering of classified catalog entries.

Entries sort by the rank of the category they compare as, then by their real
category, then by a category-specific tie-break key from :data:`TIE_BREAKERS`.
Expressing every comparison as one lexicographic key keeps the order a strict
weak ordering.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping

from .classifier import ClassifiedEntry
from .entries import Category
from .errors import MissingModuleNameError

TieBreaker = Callable[[ClassifiedEntry], tuple[Any, ...]]


def _required_name(item: ClassifiedEntry) -> str:
    if item.display_name is None:
        raise MissingModuleNameError(item.category, item.module_id)
    return item.display_name


def _section_key(item: ClassifiedEntry) -> tuple[Any, ...]:
    section = item.entry.section
    return (section.value if section is not None else -1,)


def _recency_key(item: ClassifiedEntry) -> tuple[Any, ...]:
    return (item.entry.filter_level, -item.entry.last_updated, _required_name(item))


def _installed_key(item: ClassifiedEntry) -> tuple[Any, ...]:
    return (item.entry.filter_level, _required_name(item).lower())


def _footer_key(item: ClassifiedEntry) -> tuple[Any, ...]:
    return (item.entry.footer_height,)


TIE_BREAKERS: Mapping[Category, TieBreaker] = {
    Category.HEADER: _section_key,
    Category.SEPARATOR: _section_key,
    Category.NOTIFICATION: _recency_key,
    Category.SPECIAL_NOTIFICATION: _recency_key,
    Category.UPDATABLE: _recency_key,
    Category.INSTALLABLE: _recency_key,
    Category.INSTALLED: _installed_key,
    Category.FOOTER: _footer_key,
}


def sort_key(item: ClassifiedEntry) -> tuple[Any, ...]:
    """Return the key that places ``item`` in the catalog."""

    tie_break = TIE_BREAKERS[item.category](item)
    return (
        item.compare_category.value,
        item.category.value,
        tie_break,
        item.display_name or "",
        item.module_id,
        item.entry.filter_level,
    )


def compare_entries(first: ClassifiedEntry, second: ClassifiedEntry) -> int:
    """Return ``-1``, ``0`` or ``1`` as ``first`` sorts before, with or after ``second``."""

    first_key = sort_key(first)
    second_key = sort_key(second)
    return (first_key > second_key) - (first_key < second_key)


def sort_entries(items: Iterable[ClassifiedEntry]) -> list[ClassifiedEntry]:
    return sorted(items, key=sort_key)


__all__ = ["TIE_BREAKERS", "TieBreaker", "compare_entries", "sort_entries", "sort_key"]
