"""Exceptions raised by the module catalog engine."""

from __future__ import annotations


class CatalogError(RuntimeError):
    """Base class for catalog engine failures."""


class InvalidEntryError(CatalogError, ValueError):
    """Raised when an entry is constructed in an impossible state."""


class MissingModuleNameError(CatalogError):
    """Raised when a module that must be displayed by name carries none."""

    def __init__(self, category: object, module_id: str) -> None:
        label = getattr(category, "name", str(category))
        super().__init__(f"Error for {label} id {module_id}: missing module name")
        self.category = category
        self.module_id = module_id


class MalformedSuppressionRuleError(CatalogError, ValueError):
    """Raised when a version suppression rule cannot be parsed."""

    def __init__(self, rule: str, reason: str) -> None:
        super().__init__(f"Malformed suppression rule {rule!r}: {reason}")
        self.rule = rule
        self.reason = reason


__all__ = [
    "CatalogError",
    "InvalidEntryError",
    "MalformedSuppressionRuleError",
    "MissingModuleNameError",
]
