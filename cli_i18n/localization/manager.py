"""Localization manager for resolving translations."""

import json
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import structlog

from .detection import HintSource, SystemLocaleSource, detect_default_locale
from .loader import LocaleLoader
from .tree import MISSING, get_metadata, get_nested_value, interpolate

logger = structlog.get_logger(__name__)

DEFAULT_LOCALES_DIR = Path(__file__).resolve().parent.parent / "locales"
DEFAULT_FALLBACK_LOCALE = "en"


@dataclass(frozen=True)
class LocaleInfo:
    """Descriptive metadata for a loaded locale."""
    locale: str
    name: str
    native_name: str
    direction: str = "ltr"
    completeness: Optional[Any] = None


class LocalizationManager:
    """Resolves dotted translation keys against a current and a fallback locale."""

    def __init__(
        self,
        locale: Optional[str] = None,
        fallback_locale: str = DEFAULT_FALLBACK_LOCALE,
        locales_dir: Union[str, Path, None] = None,
        hint_source: Optional[HintSource] = None,
        system_locale_source: Optional[SystemLocaleSource] = None,
    ):
        """Initialize the localization manager.

        Args:
            locale: Active locale; detected from the environment if omitted
            fallback_locale: Locale consulted when a key is missing
            locales_dir: Directory containing ``<locale>.json`` files
            hint_source: Callable returning locale hint strings (env vars by default)
            system_locale_source: Callable returning the OS locale

        Raises:
            ConfigurationError: the fallback locale file does not exist
            LocaleParseError: the active or fallback locale file is corrupt
        """
        self.fallback_locale = fallback_locale
        self.loader = LocaleLoader(locales_dir or DEFAULT_LOCALES_DIR, fallback_locale)
        self.locale = locale or detect_default_locale(
            hint_source, system_locale_source, fallback=fallback_locale
        )
        self.missing_keys: Dict[str, Dict[str, Any]] = {}
        self._load_initial()

    def _load_initial(self) -> None:
        self.loader.load(self.locale)
        if self.locale != self.fallback_locale:
            self.loader.load(self.fallback_locale)

    @property
    def translations(self) -> Dict[str, Dict[str, Any]]:
        return self.loader.translations

    def t(self, key: str, params: Optional[Mapping[str, Any]] = None,
          locale: Optional[str] = None, **kwargs: Any) -> Any:
        """Get translated text for the given key.

        Args:
            key: Translation key (dot notation for nested keys)
            params: Values for ``{name}`` placeholders
            locale: Resolve against this locale instead of the current one
            **kwargs: More placeholder values, merged over ``params``. A
                placeholder named ``{locale}`` can only be filled through
                ``params``, since ``locale=`` selects the locale.

        Returns:
            The translation, interpolated if it is a string and parameters
            were given. Non-string values (e.g. a whole subtree) are returned
            as-is. If the key is found in neither the target nor the
            fallback locale, the key itself is returned.
        """
        target_locale = locale or self.locale

        value = get_nested_value(self.loader.get(target_locale), key)
        if value is MISSING and target_locale != self.fallback_locale:
            value = get_nested_value(self.loader.get(self.fallback_locale), key)

        if value is MISSING:
            self._track_missing_key(key, target_locale)
            logger.warning("Translation key not found", key=key, language=target_locale)
            return key

        values = {**(params or {}), **kwargs}
        if isinstance(value, str) and values:
            return interpolate(value, values)
        return value

    get = t

    def set_locale(self, locale: str) -> bool:
        """Switch the current locale.

        Returns:
            True if the locale is now current, False if it could not be
            loaded (the current locale is kept in that case).
        """
        if locale == self.locale:
            return True

        if self.loader.load(locale) or locale == self.fallback_locale:
            self.locale = locale
            return True

        logger.warning(
            "Failed to set language, keeping current",
            requested=locale,
            current=self.locale,
        )
        return False

    def get_available_languages(self) -> List[str]:
        """Get locale ids available in the locales directory, sorted."""
        return self.loader.list_available()

    def is_language_available(self, language: str) -> bool:
        """Check if a locale file exists for ``language``."""
        return self.loader.is_available(language)

    def locale_info(self, locale: Optional[str] = None) -> Optional[LocaleInfo]:
        """Describe a loaded locale from its ``_meta`` block.

        Returns None if the locale has never been loaded.
        """
        target_locale = locale or self.locale
        if not self.loader.is_loaded(target_locale):
            return None

        meta = get_metadata(self.loader.get(target_locale))
        return LocaleInfo(
            locale=target_locale,
            name=meta.get("name") or target_locale,
            native_name=meta.get("nativeName") or target_locale,
            direction=meta.get("direction") or "ltr",
            completeness=meta.get("completeness"),
        )

    def reload(self) -> None:
        """Reload the current and fallback locales from disk."""
        if self.locale != self.fallback_locale:
            self.loader.reload(self.locale, self.fallback_locale)
        else:
            self.loader.reload(self.locale)

    def _track_missing_key(self, key: str, language: str) -> None:
        """Track missing translation keys with frequency and timestamp."""
        key_id = f"{key}:{language}"
        current_time = datetime.now().isoformat()

        if key_id in self.missing_keys:
            self.missing_keys[key_id]["frequency"] += 1
            self.missing_keys[key_id]["last_accessed"] = current_time
        else:
            self.missing_keys[key_id] = {
                "key": key,
                "language": language,
                "frequency": 1,
                "first_accessed": current_time,
                "last_accessed": current_time,
            }

    def get_missing_keys_summary(self) -> Dict[str, Any]:
        """Get summary of missing translation keys.

        Returns:
            Dictionary with the number of missing keys, affected languages
            and the ten most frequently requested missing keys
        """
        return {
            "total_missing_keys": len(self.missing_keys),
            "languages_affected": sorted({data["language"] for data in self.missing_keys.values()}),
            "most_frequent_keys": sorted(
                self.missing_keys.values(),
                key=lambda x: x["frequency"],
                reverse=True,
            )[:10],
        }

    def dump_missing_translations(self, output_file: Union[str, Path] = "missing_translations.json") -> Path:
        """Export missing translation keys to a JSON file.

        Args:
            output_file: Path to the output JSON file

        Returns:
            The path written to
        """
        output_data: Dict[str, Any] = {
            "generated_at": datetime.now().isoformat(),
            "total_missing_keys": len(self.missing_keys),
            "missing_keys": list(self.missing_keys.values()),
            "summary_by_language": {},
        }

        for key_data in self.missing_keys.values():
            summary = output_data["summary_by_language"].setdefault(
                key_data["language"], {"count": 0, "total_frequency": 0}
            )
            summary["count"] += 1
            summary["total_frequency"] += key_data["frequency"]

        output_path = Path(output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(output_data, f, indent=2, ensure_ascii=False)

        logger.info("Missing translations exported",
                    file=str(output_path),
                    total_keys=len(self.missing_keys))
        return output_path
