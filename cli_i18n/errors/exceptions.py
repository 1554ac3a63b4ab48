"""
Error hierarchy for cli-i18n.

Fatal problems (a missing fallback or master locale, a corrupt locale file,
an unreadable config file) are raised as subclasses of I18nError so callers
can tell them apart from ordinary Python failures. Soft failures such as a
missing non-fallback locale or an unresolved key are logged, never raised.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class I18nError(Exception):
    """
    Base exception for all cli-i18n errors.

    Carries a machine-readable error code and a context dict alongside the
    human-readable message.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        previous_error: Optional[Exception] = None,
    ):
        super().__init__(message)

        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}
        self.previous_error = previous_error
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "previous_error": str(self.previous_error) if self.previous_error else None,
        }


class ConfigurationError(I18nError):
    """No usable configuration: fallback/master locale missing, bad config file."""

    def __init__(self, message: str, source: Optional[str] = None, **kwargs):
        super().__init__(message, context={"source": source}, **kwargs)
        self.source = source


class LocaleLoadError(I18nError):
    """A locale source exists but could not be loaded."""

    def __init__(self, message: str, source: Optional[str] = None,
                 locale: Optional[str] = None, **kwargs):
        super().__init__(message, context={"source": source, "locale": locale}, **kwargs)
        self.source = source
        self.locale = locale


class LocaleParseError(LocaleLoadError):
    """A locale source is not a valid locale tree."""
    pass
