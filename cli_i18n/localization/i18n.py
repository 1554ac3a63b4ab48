"""
Process-wide default LocalizationManager.

Library code should receive a LocalizationManager explicitly. These helpers
exist for the outermost layer of a command line tool, where threading an
instance through every call is not worth it.
"""

from typing import Any, List, Mapping, Optional, Sequence

from ..config import Settings, load_config
from .detection import parse_language_from_args
from .manager import LocalizationManager

_instance: Optional[LocalizationManager] = None


def init(settings: Optional[Settings] = None, argv: Optional[Sequence[str]] = None) -> LocalizationManager:
    """(Re)create the default instance.

    A ``--lang``/``--language`` argument takes precedence over the configured
    locale.
    """
    global _instance
    settings = settings or load_config()
    _instance = LocalizationManager(
        locale=parse_language_from_args(argv) or settings.locale,
        fallback_locale=settings.fallback_locale,
        locales_dir=settings.locales_dir,
    )
    return _instance


def get_i18n() -> LocalizationManager:
    """Return the default instance, creating it on first use."""
    if _instance is None:
        return init()
    return _instance


def reset() -> None:
    """Forget the default instance."""
    global _instance
    _instance = None


def t(key: str, params: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Any:
    """Shorthand for ``get_i18n().t(...)``."""
    return get_i18n().t(key, params, **kwargs)


def set_language(locale: str) -> bool:
    return get_i18n().set_locale(locale)


def get_language() -> str:
    return get_i18n().locale


def get_available_languages() -> List[str]:
    return get_i18n().get_available_languages()
