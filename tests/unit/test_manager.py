"""
Unit tests for LocalizationManager.
"""

import json

import pytest
from structlog.testing import capture_logs

from cli_i18n.errors import ConfigurationError, LocaleParseError
from cli_i18n.localization import LocaleInfo, LocalizationManager, extract_key_paths

from conftest import EN_TREE, JA_TREE, write_locale


@pytest.fixture
def manager(locales_dir, no_hints):
    return LocalizationManager(locale="ja", locales_dir=locales_dir, hint_source=no_hints)


class TestConstruction:
    """Test active-locale selection and initial loading."""

    def test_explicit_locale(self, manager):
        assert manager.locale == "ja"
        assert manager.fallback_locale == "en"
        assert set(manager.translations) == {"ja", "en"}

    def test_locale_from_hints(self, locales_dir):
        manager = LocalizationManager(locales_dir=locales_dir, hint_source=lambda: ["ja_JP.UTF-8"])

        assert manager.locale == "ja"

    def test_locale_from_system(self, locales_dir, no_hints):
        manager = LocalizationManager(
            locales_dir=locales_dir,
            hint_source=no_hints,
            system_locale_source=lambda: "ar_EG",
        )

        assert manager.locale == "ar"

    def test_falls_back_when_nothing_detected(self, locales_dir, no_hints):
        manager = LocalizationManager(
            locales_dir=locales_dir,
            hint_source=no_hints,
            system_locale_source=lambda: None,
        )

        assert manager.locale == "en"
        assert list(manager.translations) == ["en"]

    def test_unknown_locale_keeps_working_on_fallback(self, locales_dir, no_hints):
        manager = LocalizationManager(locale="fr", locales_dir=locales_dir, hint_source=no_hints)

        assert manager.locale == "fr"
        assert manager.t("app.name") == "Demo"

    def test_missing_fallback_is_fatal(self, tmp_path, no_hints):
        write_locale(tmp_path, "ja", JA_TREE)

        with pytest.raises(ConfigurationError):
            LocalizationManager(locale="ja", locales_dir=tmp_path, hint_source=no_hints)

    def test_corrupt_active_locale_is_fatal(self, locales_dir, no_hints):
        (locales_dir / "de.json").write_text("[1, 2", encoding="utf-8")

        with pytest.raises(LocaleParseError):
            LocalizationManager(locale="de", locales_dir=locales_dir, hint_source=no_hints)

    def test_bundled_locales_by_default(self, no_hints):
        manager = LocalizationManager(locale="uk", hint_source=no_hints)

        assert manager.t("app.version", {"version": "1.0.0"}) == "Версія 1.0.0"
        assert manager.t("app.version", {"version": "1.0.0"}, locale="en") == "Version 1.0.0"


class TestTranslate:
    """Test key resolution, fallback and interpolation."""

    def test_own_value_preferred_over_fallback(self, manager):
        assert manager.t("app.name") == "デモ"

    def test_falls_back_to_fallback_locale(self, manager):
        assert manager.t("only_in_english") == "English only"

    def test_missing_everywhere_returns_key(self, manager):
        with capture_logs() as logs:
            assert manager.t("does.not.exist") == "does.not.exist"

        assert any(log["event"] == "Translation key not found" for log in logs)

    def test_interpolation(self, manager):
        assert manager.t("app.version", {"version": "1.0.0"}, locale="en") == "Version 1.0.0"

    def test_missing_param_left_literal(self, manager):
        assert manager.t("app.greeting", {"name": "Ann"}, locale="en") == "Hello Ann, welcome to {app}"

    def test_kwargs_params(self, manager):
        assert manager.t("errors.not_found", path="a.txt", locale="en") == "File a.txt not found"

    def test_kwargs_override_mapping(self, manager):
        assert manager.t("app.version", {"version": "1"}, locale="en", version="2") == "Version 2"

    def test_no_params_returns_template(self, manager):
        assert manager.t("app.version", locale="en") == "Version {version}"

    def test_non_string_value_returned_as_is(self, manager):
        subtree = manager.t("errors", {"path": "ignored"}, locale="en")

        assert subtree == EN_TREE["errors"]
        assert manager.t("items", locale="en") == ["a", "b"]

    def test_override_locale(self, manager):
        assert manager.t("app.name", locale="en") == "Demo"

    def test_override_with_unloaded_locale_uses_fallback(self, manager):
        assert manager.t("app.name", locale="ar") == "Demo"

    def test_no_partial_match(self, manager):
        assert manager.t("app.name.extra") == "app.name.extra"

    def test_metadata_is_not_a_translation(self, manager):
        assert manager.t("_meta.name") == "_meta.name"

    def test_locale_placeholder_filled_through_params(self, locales_dir, no_hints):
        write_locale(locales_dir, "en", {**EN_TREE, "switched": "Switched to {locale}"})
        manager = LocalizationManager(locale="en", locales_dir=locales_dir, hint_source=no_hints)

        assert manager.t("switched", {"locale": "uk"}) == "Switched to uk"
        assert manager.t("switched", locale="en") == "Switched to {locale}"

    def test_get_alias(self, manager):
        assert manager.get("app.name") == manager.t("app.name")

    def test_every_extracted_path_resolves(self, locales_dir, no_hints):
        manager = LocalizationManager(locale="en", locales_dir=locales_dir, hint_source=no_hints)
        tree = json.loads((locales_dir / "en.json").read_text(encoding="utf-8"))

        for path in extract_key_paths(tree):
            assert manager.t(path) != path


class TestSetLocale:
    """Test switching the current locale."""

    def test_same_locale_is_noop(self, manager):
        before = dict(manager.translations)

        assert manager.set_locale("ja") is True
        assert manager.set_locale("ja") is True
        assert manager.locale == "ja"
        assert manager.translations == before

    def test_switch_loads_locale(self, manager):
        assert manager.set_locale("ar") is True
        assert manager.locale == "ar"
        assert manager.t("app.name") == "عرض"
        assert manager.t("errors.generic") == "Something went wrong"

    def test_switch_to_fallback(self, manager):
        assert manager.set_locale("en") is True
        assert manager.locale == "en"

    def test_unknown_locale_keeps_current(self, manager):
        with capture_logs() as logs:
            assert manager.set_locale("fr") is False

        assert manager.locale == "ja"
        assert any(log["event"] == "Failed to set language, keeping current" for log in logs)


class TestLocaleInfo:
    def test_current_locale_info(self, manager):
        info = manager.locale_info()

        assert info == LocaleInfo(
            locale="ja",
            name="Japanese",
            native_name="日本語",
            direction="ltr",
            completeness=80,
        )

    def test_defaults_without_metadata(self, manager):
        manager.set_locale("ar")

        info = manager.locale_info("ar")

        assert info.name == "ar"
        assert info.native_name == "ar"
        assert info.direction == "ltr"
        assert info.completeness is None

    def test_not_loaded(self, manager):
        assert manager.locale_info("ar") is None
        assert manager.locale_info("fr") is None


class TestAvailabilityAndReload:
    def test_available_languages(self, manager):
        assert manager.get_available_languages() == ["ar", "en", "ja"]
        assert manager.is_language_available("ar")
        assert not manager.is_language_available("fr")

    def test_reload_picks_up_changes(self, manager, locales_dir):
        manager.set_locale("ar")
        write_locale(locales_dir, "ar", {"app": {"name": "جديد"}})

        manager.reload()

        assert set(manager.translations) == {"ar", "en"}
        assert manager.t("app.name") == "جديد"

    def test_reload_when_current_is_fallback(self, locales_dir, no_hints):
        manager = LocalizationManager(locale="en", locales_dir=locales_dir, hint_source=no_hints)
        manager.set_locale("en")

        manager.reload()

        assert list(manager.translations) == ["en"]

    def test_failed_reload_keeps_previous_translations(self, manager, locales_dir):
        (locales_dir / "ja.json").write_text("{ broken", encoding="utf-8")

        with pytest.raises(LocaleParseError):
            manager.reload()

        assert set(manager.translations) == {"ja", "en"}
        assert manager.t("app.name") == "デモ"
        assert manager.t("only_in_english") == "English only"


class TestMissingKeyTracking:
    """Test bookkeeping of unresolved keys."""

    def test_tracks_frequency(self, manager):
        manager.t("missing.one")
        manager.t("missing.one")
        manager.t("missing.two", locale="en")

        summary = manager.get_missing_keys_summary()

        assert summary["total_missing_keys"] == 2
        assert summary["languages_affected"] == ["en", "ja"]
        assert summary["most_frequent_keys"][0]["key"] == "missing.one"
        assert summary["most_frequent_keys"][0]["frequency"] == 2

    def test_resolved_keys_not_tracked(self, manager):
        manager.t("app.name")
        manager.t("only_in_english")

        assert manager.missing_keys == {}

    def test_dump_missing_translations(self, manager, tmp_path):
        manager.t("missing.one")
        manager.t("missing.one")

        path = manager.dump_missing_translations(tmp_path / "out" / "missing.json")
        data = json.loads(path.read_text(encoding="utf-8"))

        assert data["total_missing_keys"] == 1
        assert data["missing_keys"][0]["key"] == "missing.one"
        assert data["summary_by_language"] == {"ja": {"count": 1, "total_frequency": 2}}
