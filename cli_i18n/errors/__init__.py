"""
Error types for cli-i18n.

Fatal errors are raised as I18nError subclasses; the validator CLI turns
them into a non-zero exit code.
"""

from .exceptions import (
    I18nError,
    ConfigurationError,
    LocaleLoadError,
    LocaleParseError,
)

__all__ = [
    "I18nError",
    "ConfigurationError",
    "LocaleLoadError",
    "LocaleParseError",
]
