"""Classification, update resolution and ordering for the module catalog."""

from .actions import ActionDeriver, ActionSet, ActionToken, ConfigTargetResolver, NoConfigTargets, derive_actions
from .artifacts import SELF_UPDATE_SOURCE, UpdateArtifact, resolve_update_artifact
from .classifier import ClassifiedEntry, Classifier, categorize, has_update
from .entries import Category, Entry, EntryKind, NotificationKind
from .errors import CatalogError, InvalidEntryError, MalformedSuppressionRuleError, MissingModuleNameError
from .ordering import compare_entries, sort_entries, sort_key
from .records import NO_UPDATE_VERSION_CODE, ModuleFlags, ModuleMetadata, ModuleRecord, RemoteModuleRecord
from .removal import removal_reason, should_remove
from .suppression import SuppressionRules, parse_version_rule
from .update_registry import UpdateRegistry, get_update_registry

__all__ = [
    "ActionDeriver",
    "ActionSet",
    "ActionToken",
    "CatalogError",
    "Category",
    "ClassifiedEntry",
    "Classifier",
    "ConfigTargetResolver",
    "Entry",
    "EntryKind",
    "InvalidEntryError",
    "MalformedSuppressionRuleError",
    "MissingModuleNameError",
    "ModuleFlags",
    "ModuleMetadata",
    "ModuleRecord",
    "NO_UPDATE_VERSION_CODE",
    "NoConfigTargets",
    "NotificationKind",
    "RemoteModuleRecord",
    "SELF_UPDATE_SOURCE",
    "SuppressionRules",
    "UpdateArtifact",
    "UpdateRegistry",
    "categorize",
    "compare_entries",
    "derive_actions",
    "get_update_registry",
    "has_update",
    "parse_version_rule",
    "removal_reason",
    "resolve_update_artifact",
    "should_remove",
    "sort_entries",
    "sort_key",
]
