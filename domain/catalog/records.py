"""Local and remote module records consumed by the catalog engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag

# Version a module reports when it declares no self-hosted update.
NO_UPDATE_VERSION_CODE = -(2**63)


class ModuleFlags(IntFlag):
    """State bits attached to module metadata."""

    NONE = 0
    DISABLED = 0x01
    UPDATING = 0x02
    ACTIVE = 0x04
    UNINSTALLING = 0x08
    UPDATING_ONLY = 0x10
    MAYBE_ACTIVE = 0x20
    LOW_QUALITY = 0x40
    METADATA_INVALID = 0x80


_LOW_QUALITY_FLAGS = ModuleFlags.LOW_QUALITY | ModuleFlags.METADATA_INVALID


@dataclass(frozen=True)
class ModuleMetadata:
    """Module properties advertised by a repository."""

    name: str | None
    version_code: int
    config: str | None = None
    support: str | None = None
    donate: str | None = None
    safe: bool = False
    flags: ModuleFlags = ModuleFlags.NONE

    def has_flag(self, flag: ModuleFlags) -> bool:
        return bool(self.flags & flag)


@dataclass(frozen=True)
class RemoteModuleRecord:
    """A module offered by one repository."""

    module_id: str
    metadata: ModuleMetadata
    repo_name: str = ""
    repo_preference_id: str = ""
    repo_enabled: bool = True
    zip_url: str | None = None
    checksum: str | None = None
    last_updated: int = 0
    notes_url: str | None = None

    @property
    def version_code(self) -> int:
        return self.metadata.version_code


@dataclass(frozen=True)
class ModuleRecord:
    """A module installed on the device.

    ``update_version_code`` is the version the module reports through its own
    update manifest.  ``remote_info`` mirrors the repository record seen during
    the last successful repository sync, if any.
    """

    module_id: str
    version_code: int
    name: str | None = None
    update_version_code: int = NO_UPDATE_VERSION_CODE
    update_zip_url: str | None = None
    update_checksum: str | None = None
    config: str | None = None
    flags: ModuleFlags = ModuleFlags.NONE
    support: str | None = None
    donate: str | None = None
    safe: bool = False
    remote_info: RemoteModuleRecord | None = None

    def has_flag(self, flag: ModuleFlags) -> bool:
        return bool(self.flags & flag)

    @property
    def declares_update_version(self) -> bool:
        """Return ``True`` when the module reports a real update version."""

        return self.update_version_code != NO_UPDATE_VERSION_CODE and self.update_version_code > 0


def is_low_quality(info: ModuleRecord | ModuleMetadata | None) -> bool:
    """Return ``True`` when ``info`` is flagged as low quality."""

    if info is None:
        return False
    return bool(info.flags & _LOW_QUALITY_FLAGS)


__all__ = [
    "NO_UPDATE_VERSION_CODE",
    "ModuleFlags",
    "ModuleMetadata",
    "ModuleRecord",
    "RemoteModuleRecord",
    "is_low_quality",
]
