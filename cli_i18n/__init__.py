"""cli-i18n: translation lookup and locale file validation for command line tools."""

__version__ = "1.0.0"
