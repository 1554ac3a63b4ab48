"""Key-set validation of locale files against a master locale."""

from .report import build_report, print_validation_report, save_json_report
from .validator import (
    ComparisonResult,
    TranslationValidator,
    ValidationResult,
    compare_key_paths,
    validate_all,
)

__all__ = [
    "ComparisonResult",
    "TranslationValidator",
    "ValidationResult",
    "build_report",
    "compare_key_paths",
    "print_validation_report",
    "save_json_report",
    "validate_all",
]
