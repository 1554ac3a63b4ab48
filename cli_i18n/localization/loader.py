"""Locale file loading and the per-instance locale registry."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import structlog

from ..errors import ConfigurationError, I18nError, LocaleParseError

logger = structlog.get_logger(__name__)

LOCALE_FILE_SUFFIX = ".json"


def read_locale_file(path: Path, locale: Optional[str] = None) -> Dict[str, Any]:
    """Read and parse a single locale file.

    Raises:
        LocaleParseError: if the file can't be read, is not valid JSON, or
            does not contain a JSON object at the top level.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise LocaleParseError(
            f"Failed to parse {path}: line {e.lineno}, column {e.colno}: {e.msg}",
            source=str(path),
            locale=locale,
            previous_error=e,
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise LocaleParseError(
            f"Failed to read {path}: {e}",
            source=str(path),
            locale=locale,
            previous_error=e,
        ) from e

    if not isinstance(data, dict):
        raise LocaleParseError(
            f"Failed to parse {path}: expected a JSON object, got {type(data).__name__}",
            source=str(path),
            locale=locale,
        )
    return data


class LocaleLoader:
    """Loads locale trees from ``<locales_dir>/<locale>.json`` on demand."""

    def __init__(self, locales_dir: Union[str, Path], fallback_locale: str = "en"):
        """Initialize the loader.

        Args:
            locales_dir: Directory containing one JSON file per locale
            fallback_locale: Locale that must always be loadable
        """
        self.locales_dir = Path(locales_dir)
        self.fallback_locale = fallback_locale
        self.translations: Dict[str, Dict[str, Any]] = {}

    def locale_path(self, locale: str) -> Path:
        return self.locales_dir / f"{locale}{LOCALE_FILE_SUFFIX}"

    def load(self, locale: str) -> bool:
        """Load a locale into the registry.

        Returns:
            True if the locale is (now) loaded, False if its file does not
            exist and it is not the fallback locale.

        Raises:
            ConfigurationError: the fallback locale file is missing
            LocaleParseError: the locale file exists but is not a valid tree
        """
        if locale in self.translations:
            return True

        path = self.locale_path(locale)
        if not path.is_file():
            if locale == self.fallback_locale:
                raise ConfigurationError(
                    f"Fallback locale file not found: {path}", source=str(path)
                )
            logger.warning(
                "Locale file not found, falling back",
                locale=locale,
                file=str(path),
                fallback=self.fallback_locale,
            )
            return False

        self.translations[locale] = read_locale_file(path, locale)
        logger.debug("Loaded translations", language=locale, file=str(path))
        return True

    def get(self, locale: str) -> Optional[Dict[str, Any]]:
        """Return a loaded locale tree, or None if it was never loaded."""
        return self.translations.get(locale)

    def is_loaded(self, locale: str) -> bool:
        return locale in self.translations

    def list_available(self) -> List[str]:
        """List locale ids found in the locales directory, alphabetically.

        Never raises: if the directory can't be read, only the fallback
        locale is reported.
        """
        try:
            return sorted(
                entry.stem
                for entry in self.locales_dir.iterdir()
                if entry.suffix == LOCALE_FILE_SUFFIX and entry.is_file()
            )
        except OSError as e:
            logger.warning(
                "Failed to read locales directory",
                dir=str(self.locales_dir),
                error=str(e),
            )
            return [self.fallback_locale]

    def is_available(self, locale: str) -> bool:
        return locale in self.list_available()

    def reload(self, *locales: str) -> None:
        """Drop every loaded tree, then load ``locales`` again in order.

        If any load raises, the previously loaded trees are kept.
        """
        previous = self.translations
        self.translations = {}
        try:
            for locale in locales:
                self.load(locale)
        except I18nError:
            self.translations = previous
            raise
