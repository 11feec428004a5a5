"""Decide which classified entries are dropped before display."""

from __future__ import annotations

import logging
from typing import Callable

from .classifier import ClassifiedEntry
from .entries import Category, EntryKind, NotificationKind
from .records import is_low_quality

NotificationPredicate = Callable[[NotificationKind], bool]

_LOGGER = logging.getLogger(__name__)


def removal_reason(
    item: ClassifiedEntry,
    *,
    has_update_now: bool | None = None,
    low_quality_filter: bool = True,
    notification_active: NotificationPredicate | None = None,
) -> str | None:
    """Return why ``item`` should be dropped, or ``None`` to keep it.

    ``has_update_now`` re-evaluates update availability at render time; it
    defaults to the value recorded during classification.
    """

    entry = item.entry
    category = item.category
    remote = entry.remote
    has_update = item.has_update if has_update_now is None else has_update_now

    if category not in (Category.INSTALLABLE, Category.UPDATABLE) and remote is not None:
        return f"type is {category.name} and remote record is present"
    if category is Category.UPDATABLE and not has_update:
        return f"type is {category.name} and has no update"
    # Shadowed by the first check.
    if category is Category.INSTALLED and remote is not None and has_update:
        return f"type is {category.name}, has update and remote record is present"
    if category is Category.INSTALLED and remote is not None:
        return f"type is {category.name} and remote record is present"
    if low_quality_filter:
        if remote is not None and is_low_quality(remote.metadata):
            return "remote record is low quality"
        if is_low_quality(entry.local):
            return "local record is low quality"

    if entry.kind is EntryKind.NOTIFICATION:
        assert entry.notification is not None
        if notification_active is not None and not notification_active(entry.notification):
            return f"notification {entry.notification.key} is inactive"
        return None
    if entry.is_module and entry.local is None and (remote is None or not remote.repo_enabled):
        return "not installed and repository is disabled"
    return None


def should_remove(
    item: ClassifiedEntry,
    *,
    has_update_now: bool | None = None,
    low_quality_filter: bool = True,
    notification_active: NotificationPredicate | None = None,
) -> bool:
    reason = removal_reason(
        item,
        has_update_now=has_update_now,
        low_quality_filter=low_quality_filter,
        notification_active=notification_active,
    )
    if reason is None:
        return False
    _LOGGER.debug("Removing %s because %s", item.module_id or str(item.entry), reason)
    return True


__all__ = ["NotificationPredicate", "removal_reason", "should_remove"]
