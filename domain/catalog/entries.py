"""Catalog rows: module entries and the placeholder rows around them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

from .errors import InvalidEntryError
from .records import ModuleRecord, RemoteModuleRecord


class Category(IntEnum):
    """Display grouping of an entry; the value is its rank in the list."""

    HEADER = 0
    SEPARATOR = 1
    NOTIFICATION = 2
    UPDATABLE = 3
    INSTALLED = 4
    SPECIAL_NOTIFICATION = 5
    INSTALLABLE = 6
    FOOTER = 7

    @property
    def holds_modules(self) -> bool:
        return self in _MODULE_CATEGORIES


_MODULE_CATEGORIES = frozenset({Category.UPDATABLE, Category.INSTALLED, Category.INSTALLABLE})


class NotificationKind(Enum):
    """Notification rows shown above the module list."""

    DEBUG = ("debug", False)
    SHOWCASE_MODE = ("showcase_mode", False)
    NO_ROOT = ("no_root", False)
    ROOT_DENIED = ("root_denied", False)
    RUNTIME_OUTDATED = ("runtime_outdated", False)
    NO_INTERNET = ("no_internet", False)
    REPO_UPDATE_FAILED = ("repo_update_failed", False)
    UPDATE_AVAILABLE = ("update_available", False)
    INSTALL_FROM_STORAGE = ("install_from_storage", True)

    def __init__(self, key: str, special: bool) -> None:
        self.key = key
        self.special = special


class EntryKind(str, Enum):
    MODULE = "module"
    NOTIFICATION = "notification"
    SEPARATOR = "separator"
    FOOTER = "footer"


@dataclass(frozen=True)
class Entry:
    """One row of the catalog.

    Use the ``module``/``notification``/``separator``/``footer`` constructors;
    they enforce which fields belong to which kind.  A separator carries the
    category of the section it heads.
    """

    kind: EntryKind
    module_id: str = ""
    local: ModuleRecord | None = None
    remote: RemoteModuleRecord | None = None
    notification: NotificationKind | None = None
    section: Category | None = None
    footer_height: int = -1
    filter_level: int = 0

    @classmethod
    def module(
        cls,
        module_id: str,
        local: ModuleRecord | None = None,
        remote: RemoteModuleRecord | None = None,
        *,
        filter_level: int = 0,
    ) -> "Entry":
        if not module_id:
            raise InvalidEntryError("Module entries require a module id")
        if local is None and remote is None:
            raise InvalidEntryError(f"Module entry {module_id} has neither a local nor a remote record")
        return cls(
            kind=EntryKind.MODULE,
            module_id=module_id,
            local=local,
            remote=remote,
            filter_level=filter_level,
        )

    @classmethod
    def notification_row(cls, kind: NotificationKind, *, filter_level: int = 0) -> "Entry":
        return cls(kind=EntryKind.NOTIFICATION, notification=kind, filter_level=filter_level)

    @classmethod
    def separator_row(cls, section: Category, *, filter_level: int = 0) -> "Entry":
        return cls(kind=EntryKind.SEPARATOR, section=section, filter_level=filter_level)

    @classmethod
    def footer(cls, height: int, *, header: bool = False) -> "Entry":
        if height < 0:
            raise InvalidEntryError(f"Footer height must be non-negative, got {height}")
        return cls(kind=EntryKind.FOOTER, footer_height=height, filter_level=1 if header else 0)

    @property
    def is_module(self) -> bool:
        return self.kind is EntryKind.MODULE

    @property
    def is_special_notification(self) -> bool:
        return self.notification is not None and self.notification.special

    @property
    def last_updated(self) -> int:
        return self.remote.last_updated if self.remote is not None else 0

    @property
    def repo_name(self) -> str:
        return self.remote.repo_name if self.remote is not None else ""

    def __str__(self) -> str:
        return (
            f"Entry{{module_id='{self.module_id}', kind={self.kind.value}, "
            f"notification={self.notification}, section={self.section}, "
            f"footer_height={self.footer_height}}}"
        )


__all__ = ["Category", "Entry", "EntryKind", "NotificationKind"]
