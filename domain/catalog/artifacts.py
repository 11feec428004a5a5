"""Resolve which update archive a module entry should offer."""

from __future__ import annotations

from dataclasses import dataclass

from .entries import Entry

SELF_UPDATE_SOURCE = "update_json"


@dataclass(frozen=True)
class UpdateArtifact:
    """Location of an installable update archive and where it came from."""

    zip_url: str | None
    checksum: str | None
    source: str | None

    @property
    def is_available(self) -> bool:
        return self.zip_url is not None


NO_ARTIFACT = UpdateArtifact(zip_url=None, checksum=None, source=None)


def prefers_remote_artifact(entry: Entry) -> bool:
    """Return ``True`` when the repository archive supersedes the self-reported one."""

    if entry.local is None:
        return entry.remote is not None
    return entry.remote is not None and entry.local.update_version_code < entry.remote.version_code


def resolve_update_artifact(entry: Entry, *, self_update_source: str = SELF_UPDATE_SOURCE) -> UpdateArtifact:
    """Return the archive the install action should consume for ``entry``."""

    if not entry.is_module:
        return NO_ARTIFACT
    if prefers_remote_artifact(entry):
        remote = entry.remote
        assert remote is not None
        return UpdateArtifact(
            zip_url=remote.zip_url,
            checksum=remote.checksum,
            source=remote.repo_preference_id,
        )
    local = entry.local
    assert local is not None
    return UpdateArtifact(
        zip_url=local.update_zip_url,
        checksum=local.update_checksum,
        source=self_update_source,
    )


def resolve_reinstall_artifact(
    entry: Entry,
    fallback: UpdateArtifact,
    *,
    self_update_source: str = SELF_UPDATE_SOURCE,
) -> UpdateArtifact:
    """Return the archive for re-installing an already current module.

    The repository mirror stored with the local record is preferred, then the
    live repository record, then the module's own update manifest; ``fallback``
    is returned when none of them provides a URL.
    """

    local = entry.local
    if local is None:
        return fallback
    mirror = local.remote_info
    if mirror is not None:
        return UpdateArtifact(zip_url=mirror.zip_url, checksum=mirror.checksum, source=mirror.repo_preference_id)
    if entry.remote is not None:
        remote = entry.remote
        return UpdateArtifact(zip_url=remote.zip_url, checksum=remote.checksum, source=remote.repo_preference_id)
    if local.update_zip_url is not None:
        return UpdateArtifact(
            zip_url=local.update_zip_url,
            checksum=local.update_checksum,
            source=self_update_source,
        )
    return fallback


__all__ = [
    "NO_ARTIFACT",
    "SELF_UPDATE_SOURCE",
    "UpdateArtifact",
    "prefers_remote_artifact",
    "resolve_reinstall_artifact",
    "resolve_update_artifact",
]
