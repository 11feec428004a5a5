from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from pytest_bdd import given, parsers, then, when

from domain.catalog.actions import ActionToken
from domain.catalog.records import ModuleRecord, RemoteModuleRecord
from domain.catalog.update_registry import UpdateRegistry
from services.catalog.builder import refresh_catalog
from services.catalog.constants import PREF_SHOWCASE_MODE, PREF_UPDATE_CHECK_EXCLUDES_VERSION
from services.catalog.models import CatalogRow, CatalogSnapshot
from services.catalog.preferences import InMemoryPreferenceStore
from services.catalog.service import CatalogService
from tests.helpers import make_local, make_remote


@dataclass
class CatalogWorld:
    preferences: InMemoryPreferenceStore = field(default_factory=InMemoryPreferenceStore)
    registry: UpdateRegistry = field(default_factory=UpdateRegistry)
    local: Dict[str, ModuleRecord] = field(default_factory=dict)
    remote: Dict[str, RemoteModuleRecord] = field(default_factory=dict)
    version_rules: List[str] = field(default_factory=list)
    snapshot: CatalogSnapshot | None = None

    def row(self, module_id: str) -> CatalogRow:
        assert self.snapshot is not None, "catalog has not been refreshed"
        row = self.snapshot.row_for(module_id)
        assert row is not None, f"{module_id} is not listed"
        return row


@given("an empty module catalog", target_fixture="catalog")
def empty_catalog() -> CatalogWorld:
    return CatalogWorld()


@given(
    parsers.parse(
        'the installed module "{module_id}" at version {version:d} reporting update version {update:d}'
    )
)
def installed_module(catalog: CatalogWorld, module_id: str, version: int, update: int) -> None:
    catalog.local[module_id] = make_local(module_id, version, update_version_code=update)


@given(parsers.parse('the repository "{repo}" offers module "{module_id}" at version {version:d}'))
def repository_module(catalog: CatalogWorld, repo: str, module_id: str, version: int) -> None:
    catalog.remote[module_id] = make_remote(module_id, version, repo=repo)


@given(parsers.parse('the suppression rule "{rule}"'))
def suppression_rule(catalog: CatalogWorld, rule: str) -> None:
    catalog.version_rules.append(rule)
    catalog.preferences.set_string_set(PREF_UPDATE_CHECK_EXCLUDES_VERSION, catalog.version_rules)


@given("showcase mode is enabled")
def enable_showcase_mode(catalog: CatalogWorld) -> None:
    catalog.preferences.set(PREF_SHOWCASE_MODE, True)


@when("the catalog is refreshed")
def refresh(catalog: CatalogWorld) -> None:
    service = CatalogService(catalog.preferences, registry=catalog.registry)
    catalog.snapshot = refresh_catalog(service, catalog.local, catalog.remote)


@then(parsers.parse('the catalog lists "{module_id}" as {category}'))
def listed_as(catalog: CatalogWorld, module_id: str, category: str) -> None:
    assert catalog.row(module_id).category.name == category


@then(parsers.parse('the row "{module_id}" offers "{token}"'))
def offers(catalog: CatalogWorld, module_id: str, token: str) -> None:
    assert ActionToken(token) in catalog.row(module_id).tokens


@then(parsers.parse('the row "{module_id}" does not offer "{token}"'))
def does_not_offer(catalog: CatalogWorld, module_id: str, token: str) -> None:
    assert ActionToken(token) not in catalog.row(module_id).tokens


@then("no updates are pending")
def no_updates(catalog: CatalogWorld) -> None:
    assert catalog.snapshot is not None
    assert not catalog.snapshot.has_updates


@then(parsers.parse('the pending updates are "{module_ids}"'))
def pending_updates(catalog: CatalogWorld, module_ids: str) -> None:
    assert catalog.snapshot is not None
    assert catalog.snapshot.update_module_ids == frozenset(module_ids.split(", "))


@then(parsers.parse('the catalog order is "{module_ids}"'))
def catalog_order(catalog: CatalogWorld, module_ids: str) -> None:
    assert catalog.snapshot is not None
    assert catalog.snapshot.module_ids() == module_ids.split(", ")
