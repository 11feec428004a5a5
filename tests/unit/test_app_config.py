import json

from app.config import (
    CatalogConfig,
    ClassificationConfig,
    get_catalog_config,
    load_catalog_config,
    reset_catalog_config_cache,
)


def test_default_config_exposes_catalog_settings() -> None:
    reset_catalog_config_cache()
    config = load_catalog_config()
    assert isinstance(config, CatalogConfig)
    assert config.first_party_config_prefix == "https://www.androidacy.com/"
    assert config.self_update_source == "update_json"
    assert config.module_id_pattern == "^[A-Za-z][A-Za-z0-9._-]+$"
    assert config.classification == ClassificationConfig(max_workers=1)
    assert not config.classification.parallel


def test_load_catalog_config_from_custom_path(tmp_path) -> None:
    custom_config = {
        "first_party_config_prefix": "https://modules.example/",
        "self_update_source": "manifest",
        "module_id_pattern": "^[a-z_]+$",
        "classification": {"max_workers": 4},
    }
    config_path = tmp_path / "catalog.json"
    config_path.write_text(json.dumps(custom_config), encoding="utf-8")

    config = load_catalog_config(config_path)
    assert config.first_party_config_prefix == "https://modules.example/"
    assert config.self_update_source == "manifest"
    assert config.module_id_pattern == "^[a-z_]+$"
    assert config.classification.max_workers == 4
    assert config.classification.parallel


def test_invalid_config_values_fall_back_to_defaults(tmp_path) -> None:
    invalid_config = {
        "first_party_config_prefix": "   ",
        "self_update_source": 17,
        "module_id_pattern": "([unclosed",
        "classification": {"max_workers": -3},
    }
    config_path = tmp_path / "catalog.json"
    config_path.write_text(json.dumps(invalid_config), encoding="utf-8")

    config = load_catalog_config(config_path)
    assert config == load_catalog_config()


def test_missing_or_malformed_file_uses_defaults(tmp_path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")

    defaults = load_catalog_config()
    assert load_catalog_config(tmp_path / "missing.json") == defaults
    assert load_catalog_config(broken) == defaults


def test_get_catalog_config_uses_cached_config(monkeypatch, tmp_path) -> None:
    config_path = tmp_path / "catalog.json"
    config_path.write_text(json.dumps({"classification": {"max_workers": 3}}), encoding="utf-8")

    original_loader = load_catalog_config

    def _load_override(path=None):  # noqa: ANN001 - signature dictated by monkeypatch
        return original_loader(config_path)

    reset_catalog_config_cache()
    monkeypatch.setattr("app.config.load_catalog_config", _load_override)

    first = get_catalog_config()
    assert first.classification.max_workers == 3

    config_path.write_text(json.dumps({"classification": {"max_workers": 8}}), encoding="utf-8")

    second = get_catalog_config()
    assert second is first
    assert second.classification.max_workers == 3

    reset_catalog_config_cache()
    assert get_catalog_config().classification.max_workers == 8
