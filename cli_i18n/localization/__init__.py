"""Translation lookup with fallback and parameter interpolation."""

from .detection import detect_default_locale, parse_language_from_args
from .loader import LocaleLoader
from .manager import LocaleInfo, LocalizationManager
from .tree import extract_key_paths, get_nested_value, interpolate, is_metadata_key

__all__ = [
    "LocaleInfo",
    "LocaleLoader",
    "LocalizationManager",
    "detect_default_locale",
    "extract_key_paths",
    "get_nested_value",
    "interpolate",
    "is_metadata_key",
    "parse_language_from_args",
]
