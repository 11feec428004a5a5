"""Derive the user actions available for a module entry."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from .artifacts import SELF_UPDATE_SOURCE, UpdateArtifact, resolve_reinstall_artifact
from .classifier import ClassifiedEntry, authoritative_info

DEFAULT_MODULE_ID_PATTERN = r"^[A-Za-z][A-Za-z0-9._-]+$"
DEFAULT_FIRST_PARTY_CONFIG_PREFIX = "https://www.androidacy.com/"

_LOGGER = logging.getLogger(__name__)


class ActionToken(str, Enum):
    WARNING = "warning"
    UNINSTALL = "uninstall"
    INFO = "info"
    UPDATE_INSTALL = "update_install"
    REMOTE = "remote"
    CONFIG = "config"
    SUPPORT = "support"
    DONATE = "donate"
    SAFE = "safe"


class ConfigTargetResolver(Protocol):
    """Answers whether a module's configuration screen can be opened."""

    def has_web_config_support(self) -> bool: ...

    def config_target_exists(self, package: str, target: str) -> bool: ...


class NoConfigTargets:
    """Resolver used when no package manager is available."""

    def has_web_config_support(self) -> bool:
        return False

    def config_target_exists(self, package: str, target: str) -> bool:
        return False


@dataclass(frozen=True)
class ActionSet:
    """Ordered action tokens plus the archive the install action should use."""

    tokens: tuple[ActionToken, ...]
    artifact: UpdateArtifact

    def __contains__(self, token: object) -> bool:
        return token in self.tokens

    def __iter__(self):
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)


def package_of_config(config: str) -> str:
    """Return the package part of a ``package/activity`` config target."""

    package, _, _ = config.partition("/")
    return package


def main_config(item: ClassifiedEntry) -> str | None:
    """Return the config target of an installed module."""

    local = item.entry.local
    if local is None:
        return None
    if local.config is not None:
        return local.config
    remote = item.entry.remote
    return remote.metadata.config if remote is not None else None


def is_suspicious_module_id(module_id: str, pattern: re.Pattern[str] | str = DEFAULT_MODULE_ID_PATTERN) -> bool:
    """Return ``True`` for hidden or malformed module ids."""

    if isinstance(pattern, str):
        pattern = re.compile(pattern)
    return module_id.startswith(".") or pattern.fullmatch(module_id) is None


class ActionDeriver:
    """Compute :class:`ActionSet` values for classified entries."""

    def __init__(
        self,
        config_resolver: ConfigTargetResolver | None = None,
        *,
        showcase_mode: bool = False,
        module_id_pattern: str = DEFAULT_MODULE_ID_PATTERN,
        first_party_config_prefix: str = DEFAULT_FIRST_PARTY_CONFIG_PREFIX,
        self_update_source: str = SELF_UPDATE_SOURCE,
    ) -> None:
        self._config_resolver = config_resolver or NoConfigTargets()
        self._showcase_mode = showcase_mode
        self._module_id_pattern = re.compile(module_id_pattern)
        self._first_party_config_prefix = first_party_config_prefix
        self._self_update_source = self_update_source

    def derive(self, item: ClassifiedEntry) -> ActionSet:
        entry = item.entry
        if not entry.is_module:
            return ActionSet(tokens=(), artifact=item.artifact)

        local, remote = entry.local, entry.remote
        tokens: list[ActionToken] = []
        artifact = item.artifact

        if is_suspicious_module_id(entry.module_id, self._module_id_pattern):
            tokens.append(ActionToken.WARNING)
        if local is not None and not self._showcase_mode:
            tokens.append(ActionToken.UNINSTALL)
        if remote is not None and remote.notes_url is not None:
            tokens.append(ActionToken.INFO)
        if remote is not None or (local is not None and local.update_version_code > local.version_code):
            tokens.append(ActionToken.UPDATE_INSTALL)
        if local is not None and self._is_current_install(item):
            tokens.append(ActionToken.REMOTE)
            artifact = resolve_reinstall_artifact(
                entry, artifact, self_update_source=self._self_update_source
            )
            _LOGGER.debug("Module %s reinstall archive: %s", entry.module_id, artifact.zip_url)
        if self._config_available(item):
            tokens.append(ActionToken.CONFIG)

        info = authoritative_info(entry)
        if info is not None:
            if info.support is not None:
                tokens.append(ActionToken.SUPPORT)
            if info.donate is not None:
                tokens.append(ActionToken.DONATE)
            if info.safe:
                tokens.append(ActionToken.SAFE)
        return ActionSet(tokens=tuple(tokens), artifact=artifact)

    @staticmethod
    def _is_current_install(item: ClassifiedEntry) -> bool:
        local = item.entry.local
        assert local is not None
        mirror = local.remote_info
        if mirror is not None and mirror.version_code <= local.version_code:
            return True
        return local.declares_update_version and local.update_version_code <= local.version_code

    def _config_available(self, item: ClassifiedEntry) -> bool:
        config = main_config(item)
        if config is None:
            return False
        if config.startswith(self._first_party_config_prefix) and self._config_resolver.has_web_config_support():
            return True
        package = package_of_config(config)
        if self._config_resolver.config_target_exists(package, config):
            return True
        _LOGGER.warning('Config package "%s" missing for module "%s"', package, item.module_id)
        return False


def derive_actions(
    item: ClassifiedEntry,
    *,
    showcase_mode: bool = False,
    config_resolver: ConfigTargetResolver | None = None,
) -> ActionSet:
    """Convenience wrapper around :meth:`ActionDeriver.derive`."""

    return ActionDeriver(config_resolver, showcase_mode=showcase_mode).derive(item)


__all__ = [
    "ActionDeriver",
    "ActionSet",
    "ActionToken",
    "ConfigTargetResolver",
    "DEFAULT_FIRST_PARTY_CONFIG_PREFIX",
    "DEFAULT_MODULE_ID_PATTERN",
    "NoConfigTargets",
    "derive_actions",
    "is_suspicious_module_id",
    "main_config",
    "package_of_config",
]
