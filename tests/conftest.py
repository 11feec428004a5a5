from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_project_root_on_path() -> None:
    """Guarantee the repository root is discoverable for absolute imports."""

    root = Path(__file__).resolve().parent.parent
    root_str = str(root)
    if root_str not in sys.path:
        sys.path.insert(0, root_str)


_ensure_project_root_on_path()

from app.config import reset_catalog_config_cache  # noqa: E402
from domain.catalog import update_registry  # noqa: E402
from shared import logging_config  # noqa: E402


@pytest.fixture(autouse=True)
def _preferences_path_env(monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory):
    """Isolate preference reads and log files so tests never touch real user data."""

    pref_dir = tmp_path_factory.mktemp("prefs")
    monkeypatch.setenv("MODULE_CATALOG_PREFERENCES_PATH", str(pref_dir / "preferences.json"))
    monkeypatch.setenv("MODULE_CATALOG_LOG_DIR", str(tmp_path_factory.mktemp("logs")))
    yield


@pytest.fixture(autouse=True)
def _reset_process_state():
    update_registry._reset_for_tests()
    reset_catalog_config_cache()
    try:
        yield
    finally:
        update_registry._reset_for_tests()
        logging_config._reset_for_tests()
