"""Validate translation keys of every locale file against a master locale."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence, Union

import structlog

from ..errors import ConfigurationError
from ..localization.loader import LOCALE_FILE_SUFFIX, read_locale_file
from ..localization.tree import extract_key_paths, round_percentage
from .report import print_validation_report, save_json_report

logger = structlog.get_logger(__name__)


@dataclass
class ComparisonResult:
    """Key-set comparison of one target locale against the master."""
    language: str
    total_keys: int
    missing_keys: List[str] = field(default_factory=list)
    extra_keys: List[str] = field(default_factory=list)
    coverage: float = 0.0
    is_complete: bool = False

    @property
    def issue_count(self) -> int:
        return len(self.missing_keys) + len(self.extra_keys)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "language": self.language,
            "totalKeys": self.total_keys,
            "missingKeys": list(self.missing_keys),
            "extraKeys": list(self.extra_keys),
            "coverage": self.coverage,
            "isComplete": self.is_complete,
        }


@dataclass
class ValidationResult:
    master_key_count: int
    languages: List[ComparisonResult] = field(default_factory=list)

    @property
    def total_issues(self) -> int:
        return sum(lang.issue_count for lang in self.languages)

    @property
    def has_issues(self) -> bool:
        return any(lang.issue_count for lang in self.languages)


def compare_key_paths(master_paths: Sequence[str], target_paths: Sequence[str],
                      language: str) -> ComparisonResult:
    """Compare a target's key paths with the master's.

    Coverage is ``(len(target) - len(extra)) / len(master) * 100``, i.e. the
    share of master keys the target provides, rounded to two decimals.
    """
    master_set = set(master_paths)
    target_set = set(target_paths)

    missing_keys = [key for key in master_paths if key not in target_set]
    extra_keys = [key for key in target_paths if key not in master_set]

    if master_paths:
        coverage = round_percentage((len(target_paths) - len(extra_keys)) / len(master_paths) * 100)
    else:
        coverage = 0.0

    return ComparisonResult(
        language=language,
        total_keys=len(target_paths),
        missing_keys=missing_keys,
        extra_keys=extra_keys,
        coverage=coverage,
        is_complete=not missing_keys and not extra_keys,
    )


def validate_all(master_tree: Mapping[str, Any],
                 target_trees: Mapping[str, Mapping[str, Any]]) -> ValidationResult:
    """Compare every target tree with the master tree, in iteration order."""
    master_paths = extract_key_paths(master_tree)
    results = ValidationResult(master_key_count=len(master_paths))

    for language, tree in target_trees.items():
        results.languages.append(compare_key_paths(master_paths, extract_key_paths(tree), language))

    return results


class TranslationValidator:
    """Checks every ``*.json`` locale file in a directory against a master file."""

    def __init__(
        self,
        locales_dir: Union[str, Path],
        master_file: str = "en.json",
        strict: bool = False,
        warn_only: bool = False,
        allow_missing: bool = False,
        generate_report: bool = False,
        report_file: Union[str, Path] = "translation-report.json",
    ):
        self.locales_dir = Path(locales_dir)
        self.master_file = master_file
        # Strict is the default behaviour; the flag only makes it explicit.
        self.strict = strict
        self.warn_only = warn_only
        self.allow_missing = allow_missing
        self.generate_report = generate_report
        self.report_file = Path(report_file)

    def load_language_file(self, filename: str) -> Dict[str, Any]:
        """Load and parse a locale file from the locales directory.

        Raises:
            ConfigurationError: the file does not exist
            LocaleParseError: the file is not a valid locale tree
        """
        path = self.locales_dir / filename
        if not path.is_file():
            raise ConfigurationError(f"Language file not found: {path}", source=str(path))
        return read_locale_file(path, Path(filename).stem)

    def language_files(self) -> List[str]:
        """Locale files to validate: every JSON file except the master, sorted."""
        try:
            entries = list(self.locales_dir.iterdir())
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read locales directory {self.locales_dir}: {e}",
                source=str(self.locales_dir),
                previous_error=e,
            ) from e

        return sorted(
            entry.name
            for entry in entries
            if entry.suffix == LOCALE_FILE_SUFFIX and entry.is_file() and entry.name != self.master_file
        )

    def validate(self) -> ValidationResult:
        """Validate all locale files; the first unreadable file aborts the run."""
        master_data = self.load_language_file(self.master_file)

        print(f"🔍 Validating translations against master: {self.master_file}")

        language_files = self.language_files()
        if not language_files:
            print("📝 No additional language files found.")
            return validate_all(master_data, {})

        print(f"🌍 Found {len(language_files)} language file(s): {', '.join(language_files)}")

        targets: Dict[str, Dict[str, Any]] = {}
        for lang_file in language_files:
            targets[lang_file] = self.load_language_file(lang_file)

        results = validate_all(master_data, targets)
        print(f"📋 Master file contains {results.master_key_count} keys")

        for comparison in results.languages:
            if comparison.is_complete:
                print(f"✅ {comparison.language}: Perfect sync")
            else:
                print(f"⚠️  {comparison.language}: {comparison.issue_count} issue(s) found "
                      f"({comparison.coverage}% coverage)")

        logger.info(
            "Validation finished",
            master=self.master_file,
            languages=len(results.languages),
            issues=results.total_issues,
        )
        return results

    def exit_code(self, results: ValidationResult) -> int:
        """0 when in sync or a lenient mode is active, otherwise 1."""
        if not results.has_issues or self.allow_missing or self.warn_only:
            return 0
        return 1

    def run(self) -> int:
        """Validate, print the report, optionally save it, return the exit code."""
        results = self.validate()
        print_validation_report(results, self.master_file, allow_missing=self.allow_missing)

        if self.generate_report:
            path = save_json_report(results, self.master_file, self.report_file)
            print(f"\n📄 Detailed report saved to: {path}")

        if not results.has_issues:
            print("\n🎉 All translations validated successfully!")
        elif self.allow_missing:
            print("\n✅ Validation complete (missing keys allowed in current mode)")
        elif self.warn_only:
            print("\n⚠️  Validation complete with warnings")
        else:
            print("\n❌ Validation failed due to translation inconsistencies")
            print("💡 Use --allow-missing flag for initial development phase")

        return self.exit_code(results)
