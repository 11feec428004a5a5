"""Helper formatting routines for catalog debug logging."""

from __future__ import annotations

import datetime
from typing import Iterable

from .classifier import ClassifiedEntry
from .entries import Entry, EntryKind
from .records import NO_UPDATE_VERSION_CODE
from .suppression import SuppressionRules


def format_update_time(last_updated: int) -> str:
    """Return a UTC timestamp for ``last_updated`` epoch millis, or ``""``.

    Values outside the range ``datetime`` can represent (for example a
    repository reporting microseconds) also yield ``""``.
    """

    if last_updated <= 0:
        return ""
    try:
        moment = datetime.datetime.fromtimestamp(last_updated / 1000, tz=datetime.timezone.utc)
    except (OverflowError, OSError, ValueError):
        return ""
    return moment.strftime("%Y-%m-%d %H:%M")


def _format_version(version_code: int) -> str:
    return "none" if version_code == NO_UPDATE_VERSION_CODE else str(version_code)


def describe_entry(entry: Entry) -> str:
    """Summarise ``entry`` for debug logging."""

    if entry.kind is EntryKind.NOTIFICATION and entry.notification is not None:
        return f"notification={entry.notification.key} special={entry.notification.special}"
    if entry.kind is EntryKind.SEPARATOR:
        section = entry.section.name if entry.section is not None else "none"
        return f"separator section={section}"
    if entry.kind is EntryKind.FOOTER:
        return f"footer height={entry.footer_height} header={entry.filter_level == 1}"

    parts = [f"module={entry.module_id}"]
    if entry.local is not None:
        parts.append(
            f"local={entry.local.version_code}->{_format_version(entry.local.update_version_code)}"
        )
    if entry.remote is not None:
        updated = format_update_time(entry.remote.last_updated) or "unknown"
        parts.append(
            f"remote={entry.remote.version_code}@{entry.remote.repo_preference_id or '?'} updated={updated}"
        )
    return " ".join(parts)


def describe_classified(item: ClassifiedEntry) -> str:
    """Summarise a classification result."""

    return (
        f"{describe_entry(item.entry)} category={item.category.name} "
        f"compare={item.compare_category.name} has_update={item.has_update} "
        f"source={item.artifact.source or '-'}"
    )


def describe_rules(rules: SuppressionRules) -> str:
    return f"excluded_ids={len(rules.excluded_ids)} version_rules={list(rules.version_rules)}"


def describe_categories(items: Iterable[ClassifiedEntry]) -> str:
    """Return ``NAME=count`` pairs for the categories present in ``items``."""

    counts: dict[str, int] = {}
    for item in items:
        counts[item.category.name] = counts.get(item.category.name, 0) + 1
    return " ".join(f"{name}={count}" for name, count in sorted(counts.items()))


__all__ = [
    "describe_categories",
    "describe_classified",
    "describe_entry",
    "describe_rules",
    "format_update_time",
]
