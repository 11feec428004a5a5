from __future__ import annotations

from domain.catalog.classifier import ClassifiedEntry, Classifier
from domain.catalog.entries import Entry
from domain.catalog.records import (
    NO_UPDATE_VERSION_CODE,
    ModuleFlags,
    ModuleMetadata,
    ModuleRecord,
    RemoteModuleRecord,
)
from domain.catalog.suppression import SuppressionRules


def make_local(
    module_id: str = "com.example.mod",
    version_code: int = 1,
    *,
    name: str | None = None,
    update_version_code: int = NO_UPDATE_VERSION_CODE,
    update_zip_url: str | None = None,
    update_checksum: str | None = None,
    config: str | None = None,
    flags: ModuleFlags = ModuleFlags.NONE,
    support: str | None = None,
    donate: str | None = None,
    safe: bool = False,
    remote_info: RemoteModuleRecord | None = None,
) -> ModuleRecord:
    return ModuleRecord(
        module_id=module_id,
        version_code=version_code,
        name=name if name is not None else module_id,
        update_version_code=update_version_code,
        update_zip_url=update_zip_url,
        update_checksum=update_checksum,
        config=config,
        flags=flags,
        support=support,
        donate=donate,
        safe=safe,
        remote_info=remote_info,
    )


def make_remote(
    module_id: str = "com.example.mod",
    version_code: int = 1,
    *,
    name: str | None = None,
    repo: str = "main",
    repo_enabled: bool = True,
    last_updated: int = 0,
    zip_url: str | None = None,
    checksum: str | None = None,
    notes_url: str | None = None,
    config: str | None = None,
    support: str | None = None,
    donate: str | None = None,
    safe: bool = False,
    flags: ModuleFlags = ModuleFlags.NONE,
) -> RemoteModuleRecord:
    return RemoteModuleRecord(
        module_id=module_id,
        metadata=ModuleMetadata(
            name=name if name is not None else module_id,
            version_code=version_code,
            config=config,
            support=support,
            donate=donate,
            safe=safe,
            flags=flags,
        ),
        repo_name=repo.title(),
        repo_preference_id=repo,
        repo_enabled=repo_enabled,
        zip_url=zip_url if zip_url is not None else f"https://{repo}.example/{module_id}-{version_code}.zip",
        checksum=checksum if checksum is not None else f"sha-{module_id}-{version_code}",
        last_updated=last_updated,
        notes_url=notes_url,
    )


def classify(entry: Entry, rules: SuppressionRules | None = None) -> ClassifiedEntry:
    return Classifier(rules or SuppressionRules()).classify(entry)


__all__ = ["classify", "make_local", "make_remote"]
