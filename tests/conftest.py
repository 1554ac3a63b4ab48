"""
Pytest configuration and fixtures for cli-i18n tests.
"""

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from cli_i18n import main as main_module
from cli_i18n.localization import i18n as default_i18n


EN_TREE: Dict[str, Any] = {
    "_meta": {
        "name": "English",
        "nativeName": "English",
        "direction": "ltr",
        "completeness": 100,
    },
    "app": {
        "name": "Demo",
        "version": "Version {version}",
        "greeting": "Hello {name}, welcome to {app}",
    },
    "errors": {
        "not_found": "File {path} not found",
        "generic": "Something went wrong",
    },
    "only_in_english": "English only",
    "items": ["a", "b"],
}

JA_TREE: Dict[str, Any] = {
    "_meta": {
        "name": "Japanese",
        "nativeName": "日本語",
        "completeness": 80,
    },
    "app": {
        "name": "デモ",
        "version": "バージョン {version}",
        "greeting": "{name}さん、{app}へようこそ",
    },
    "errors": {
        "not_found": "ファイル {path} が見つかりません",
        "generic": "問題が発生しました",
    },
}

AR_TREE: Dict[str, Any] = {
    "app": {
        "name": "عرض",
    },
}


def write_locale(directory: Path, name: str, data: Any) -> Path:
    """Write ``data`` as ``<directory>/<name>.json``."""
    path = directory / f"{name}.json"
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def locales_dir(tmp_path: Path) -> Path:
    """Locale directory with en (complete), ja (partial) and ar (no metadata)."""
    directory = tmp_path / "locales"
    directory.mkdir()
    write_locale(directory, "en", EN_TREE)
    write_locale(directory, "ja", JA_TREE)
    write_locale(directory, "ar", AR_TREE)
    return directory


@pytest.fixture
def no_hints():
    """Hint source that reports no environment locale."""
    return lambda: []


@pytest.fixture(autouse=True)
def reset_default_instance():
    """Make sure the process-wide LocalizationManager never leaks between tests."""
    default_i18n.reset()
    yield
    default_i18n.reset()


@pytest.fixture(autouse=True)
def quiet_logging_setup(monkeypatch):
    """Keep main() from reconfiguring structlog with cached loggers."""
    monkeypatch.setattr(main_module, "setup_logging", lambda debug=False: None)
