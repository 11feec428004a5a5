"""Process-wide record of modules with a pending update."""

from __future__ import annotations

import logging
import threading
from typing import Iterable, Protocol

_LOGGER = logging.getLogger(__name__)


class UpdateSink(Protocol):
    def mark_has_update(self, module_id: str) -> bool: ...


class UpdateRegistry:
    """Thread-safe set of module ids known to have an update.

    Marking is idempotent: the same id counts once no matter how many
    classification passes or worker threads report it.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._module_ids: set[str] = set()

    def mark_has_update(self, module_id: str) -> bool:
        """Register ``module_id``; return ``True`` if it was not yet known."""

        with self._lock:
            if module_id in self._module_ids:
                return False
            self._module_ids.add(module_id)
            count = len(self._module_ids)
        _LOGGER.debug("Module %s marked as updatable (update_count=%d)", module_id, count)
        return True

    @property
    def has_updates(self) -> bool:
        with self._lock:
            return bool(self._module_ids)

    @property
    def update_count(self) -> int:
        with self._lock:
            return len(self._module_ids)

    @property
    def module_ids(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._module_ids)

    def retain(self, module_ids: Iterable[str]) -> frozenset[str]:
        """Forget every id not in ``module_ids``; return the ids dropped."""

        keep = set(module_ids)
        with self._lock:
            dropped = frozenset(self._module_ids - keep)
            self._module_ids &= keep
        if dropped:
            _LOGGER.debug("Modules no longer updatable: %s", ", ".join(sorted(dropped)))
        return dropped

    def clear(self) -> None:
        with self._lock:
            self._module_ids.clear()


_DEFAULT_REGISTRY = UpdateRegistry()


def get_update_registry() -> UpdateRegistry:
    """Return the registry shared by the whole process."""

    return _DEFAULT_REGISTRY


def _reset_for_tests() -> None:
    _DEFAULT_REGISTRY.clear()


__all__ = ["UpdateRegistry", "UpdateSink", "get_update_registry"]
