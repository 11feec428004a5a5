from __future__ import annotations

import pytest

from domain.catalog.errors import MalformedSuppressionRuleError
from domain.catalog.suppression import (
    PREF_UPDATE_CHECK_EXCLUDES,
    PREF_UPDATE_CHECK_EXCLUDES_VERSION,
    RangeKind,
    SuppressionRules,
    parse_version_rule,
)
from services.catalog.preferences import InMemoryPreferenceStore


@pytest.mark.parametrize(
    ("raw", "version_code", "range_kind"),
    [
        ("com.acme.mod:5", 5, RangeKind.EXACT),
        ("com.acme.mod:^12", 12, RangeKind.AT_LEAST),
        ("com.acme.mod:7$", 7, RangeKind.AT_MOST),
        ("com.acme.mod:v1_0_3", 103, RangeKind.EXACT),
    ],
)
def test_parse_version_rule(raw: str, version_code: int, range_kind: RangeKind) -> None:
    rule = parse_version_rule(raw)

    assert rule.module_id == "com.acme.mod"
    assert rule.version_code == version_code
    assert rule.range_kind is range_kind


@pytest.mark.parametrize("raw", ["com.acme.mod", "com.acme.mod:", "com.acme.mod:^$"])
def test_parse_version_rule_rejects_malformed_rules(raw: str) -> None:
    with pytest.raises(MalformedSuppressionRuleError):
        parse_version_rule(raw)


def test_plain_id_exclusion_suppresses_every_version() -> None:
    rules = SuppressionRules.of(excluded_ids=["com.acme.mod"])

    assert rules.is_suppressed("com.acme.mod", 1)
    assert rules.is_suppressed("com.acme.mod", 999)
    assert not rules.is_suppressed("com.acme.other", 1)


def test_lower_bound_rule_suppresses_that_version_and_newer() -> None:
    rules = SuppressionRules.of(version_rules=["com.acme.mod:^5"])

    assert not rules.is_suppressed("com.acme.mod", 4)
    assert rules.is_suppressed("com.acme.mod", 5)
    assert rules.is_suppressed("com.acme.mod", 6)


def test_upper_bound_rule_suppresses_that_version_and_older() -> None:
    rules = SuppressionRules.of(version_rules=["com.acme.mod:5$"])

    assert rules.is_suppressed("com.acme.mod", 4)
    assert rules.is_suppressed("com.acme.mod", 5)
    assert not rules.is_suppressed("com.acme.mod", 6)


def test_exact_rule_only_suppresses_that_version() -> None:
    rules = SuppressionRules.of(version_rules=["com.acme.mod:5"])

    assert rules.is_suppressed("com.acme.mod", 5)
    assert not rules.is_suppressed("com.acme.mod", 4)
    assert not rules.is_suppressed("com.acme.mod", 6)


def test_malformed_rules_are_skipped() -> None:
    rules = SuppressionRules.of(version_rules=["com.acme.mod", "com.acme.mod:^3"])

    assert rules.is_suppressed("com.acme.mod", 3)


def test_exact_id_rule_wins_over_prefix_match() -> None:
    rules = SuppressionRules.of(version_rules=["com.acme.mod.extra:1", "com.acme.mod:^9"])

    rule = rules.find_version_rule("com.acme.mod")

    assert rule is not None
    assert rule.raw == "com.acme.mod:^9"
    assert not rules.is_suppressed("com.acme.mod", 1)


def test_longest_prefix_then_insertion_order_decide_between_prefix_matches() -> None:
    rules = SuppressionRules.of(
        version_rules=["com.acme.mod2:4", "com.acme.mod-long:7", "com.acme.mod3:1"]
    )

    rule = rules.find_version_rule("com.acme.mod")

    assert rule is not None
    assert rule.raw == "com.acme.mod-long:7"

    tie = SuppressionRules.of(version_rules=["com.acme.mod2:4", "com.acme.mod3:1"])
    tie_rule = tie.find_version_rule("com.acme.mod")
    assert tie_rule is not None
    assert tie_rule.raw == "com.acme.mod2:4"


def test_rules_without_match_do_not_suppress() -> None:
    rules = SuppressionRules.of(excluded_ids=["other"], version_rules=["another:^1"])

    assert not rules.is_suppressed("com.acme.mod", 10)


def test_rules_are_read_from_preferences_each_time() -> None:
    store = InMemoryPreferenceStore()
    store.set_string_set(PREF_UPDATE_CHECK_EXCLUDES, ["com.acme.mod"])

    first = SuppressionRules.from_preferences(store)
    store.set_string_set(PREF_UPDATE_CHECK_EXCLUDES, [])
    store.set_string_set(PREF_UPDATE_CHECK_EXCLUDES_VERSION, ["com.acme.mod:^2"])
    second = SuppressionRules.from_preferences(store)

    assert first.excluded_ids == frozenset({"com.acme.mod"})
    assert second.excluded_ids == frozenset()
    assert second.version_rules == ("com.acme.mod:^2",)


def test_rule_for_longer_id_also_governs_its_prefix_module() -> None:
    rules = SuppressionRules.of(version_rules=["com.acme.mod:^5"])

    assert rules.find_version_rule("com.acme").module_id == "com.acme.mod"
    assert rules.is_suppressed("com.acme", 5)
    assert not rules.is_suppressed("com.acme", 4)
    assert rules.find_version_rule("com.acme.module") is None


def test_exact_rule_shields_prefix_module_from_longer_rules() -> None:
    rules = SuppressionRules.of(version_rules=["com.acme.mod:^5", "com.acme:9"])

    assert rules.find_version_rule("com.acme").raw == "com.acme:9"
    assert not rules.is_suppressed("com.acme", 5)
    assert rules.is_suppressed("com.acme", 9)
