"""User rules that hide detected updates.

Two preference-backed rule sets are supported:

``pref_background_update_check_excludes``
    Plain module ids; updates for these modules are never shown.

``pref_background_update_check_excludes_version``
    ``id:range`` strings.  ``range`` is an exact version code (``12``), a lower
    bound (``^12`` hides version 12 and newer) or an upper bound (``12$``
    hides version 12 and older).

A version rule applies to a module when the rule text starts with the module
id.  When several rules apply, a rule whose id equals the module id wins, then
the rule with the longest id, then the one stored first.  Only that rule is
consulted.

Matching on the rule text rather than its id part is intended: a rule such
as ``com.acme.mod:^5`` also governs a module named ``com.acme`` unless that
module has an exact rule of its own.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Protocol

from .errors import MalformedSuppressionRuleError

PREF_UPDATE_CHECK_EXCLUDES = "pref_background_update_check_excludes"
PREF_UPDATE_CHECK_EXCLUDES_VERSION = "pref_background_update_check_excludes_version"

_NON_DIGITS = re.compile(r"[^0-9]")

_LOGGER = logging.getLogger(__name__)


class StringSetSource(Protocol):
    def get_string_set(self, key: str) -> tuple[str, ...]: ...


class RangeKind(str, Enum):
    EXACT = "exact"
    AT_LEAST = "at_least"
    AT_MOST = "at_most"


@dataclass(frozen=True)
class VersionRule:
    """A parsed ``id:range`` suppression rule."""

    raw: str
    module_id: str
    version_code: int
    range_kind: RangeKind

    def matches(self, candidate_version: int) -> bool:
        if self.range_kind is RangeKind.AT_LEAST:
            return candidate_version >= self.version_code
        if self.range_kind is RangeKind.AT_MOST:
            return candidate_version <= self.version_code
        return candidate_version == self.version_code


def parse_version_rule(raw: str) -> VersionRule:
    """Parse ``raw`` into a :class:`VersionRule`.

    Raises :class:`MalformedSuppressionRuleError` when the colon or the
    version digits are missing.
    """

    module_id, sep, bound = raw.partition(":")
    if not sep:
        raise MalformedSuppressionRuleError(raw, "missing ':' separator")
    bound = bound.strip()
    digits = _NON_DIGITS.sub("", bound)
    if not digits:
        raise MalformedSuppressionRuleError(raw, "no version digits")
    if bound.startswith("^"):
        range_kind = RangeKind.AT_LEAST
    elif bound.endswith("$"):
        range_kind = RangeKind.AT_MOST
    else:
        range_kind = RangeKind.EXACT
    return VersionRule(raw=raw, module_id=module_id, version_code=int(digits), range_kind=range_kind)


@dataclass(frozen=True)
class SuppressionRules:
    """Snapshot of the user's update suppression preferences."""

    excluded_ids: frozenset[str] = frozenset()
    version_rules: tuple[str, ...] = ()

    @classmethod
    def from_preferences(cls, preferences: StringSetSource) -> "SuppressionRules":
        """Read both rule sets from ``preferences`` without caching."""

        return cls(
            excluded_ids=frozenset(preferences.get_string_set(PREF_UPDATE_CHECK_EXCLUDES)),
            version_rules=tuple(preferences.get_string_set(PREF_UPDATE_CHECK_EXCLUDES_VERSION)),
        )

    @classmethod
    def of(cls, excluded_ids: Iterable[str] = (), version_rules: Iterable[str] = ()) -> "SuppressionRules":
        return cls(excluded_ids=frozenset(excluded_ids), version_rules=tuple(version_rules))

    def find_version_rule(self, module_id: str) -> VersionRule | None:
        """Return the version rule that governs ``module_id``, if any."""

        candidates: list[tuple[int, int, int, VersionRule]] = []
        for position, raw in enumerate(self.version_rules):
            if not raw.startswith(module_id):
                continue
            try:
                rule = parse_version_rule(raw)
            except MalformedSuppressionRuleError as exc:
                _LOGGER.debug("Ignoring suppression rule: %s", exc)
                continue
            exact = 0 if rule.module_id == module_id else 1
            candidates.append((exact, -len(rule.module_id), position, rule))
        if not candidates:
            return None
        candidates.sort(key=lambda item: item[:3])
        return candidates[0][3]

    def is_suppressed(self, module_id: str, candidate_version: int) -> bool:
        """Return ``True`` when an update to ``candidate_version`` should be hidden."""

        if module_id in self.excluded_ids:
            _LOGGER.debug("Module %s has update, but is excluded by id", module_id)
            return True
        rule = self.find_version_rule(module_id)
        if rule is None:
            return False
        suppressed = rule.matches(candidate_version)
        _LOGGER.debug(
            "Module %s version %d checked against rule %r (%s %d): %s",
            module_id,
            candidate_version,
            rule.raw,
            rule.range_kind.value,
            rule.version_code,
            "skipping" if suppressed else "offering",
        )
        return suppressed


__all__ = [
    "PREF_UPDATE_CHECK_EXCLUDES",
    "PREF_UPDATE_CHECK_EXCLUDES_VERSION",
    "RangeKind",
    "StringSetSource",
    "SuppressionRules",
    "VersionRule",
    "parse_version_rule",
]
