"""Console and JSON rendering of validation results."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Union

import structlog

if TYPE_CHECKING:
    from .validator import ValidationResult

logger = structlog.get_logger(__name__)

# Missing keys listed per language before the rest is summarised.
MAX_LISTED_MISSING_KEYS = 10
RULE = "=" * 50


def print_validation_report(results: "ValidationResult", master_file: str,
                            allow_missing: bool = False) -> None:
    """Print a human readable report of a validation run."""
    print("\n" + RULE)
    print("Translation Validation Report")
    print(RULE)
    print(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"Master: {master_file} ({results.master_key_count} keys)")

    if not results.languages:
        print("\nNo additional language files found.")
        return

    for lang in results.languages:
        print(f"\n{lang.language}:")
        print(f"- Total keys: {lang.total_keys}")
        print(f"- Missing keys: {len(lang.missing_keys)}")
        print(f"- Extra keys: {len(lang.extra_keys)}")
        print(f"- Coverage: {lang.coverage}%")

        if lang.missing_keys:
            shown = lang.missing_keys[:MAX_LISTED_MISSING_KEYS]
            print(f"\nMissing keys in {lang.language} (showing {len(shown)}/{len(lang.missing_keys)}):")
            for key in shown:
                print(f"  - {key}")
            if len(lang.missing_keys) > len(shown):
                print(f"  ... and {len(lang.missing_keys) - len(shown)} more")

        if lang.extra_keys:
            print(f"\nExtra keys in {lang.language}:")
            for key in lang.extra_keys:
                print(f"  + {key}")

    print("\n" + RULE)
    print("Summary:")
    print(f"- Languages validated: {len(results.languages)}")
    print(f"- Total issues found: {results.total_issues}")

    if results.total_issues == 0:
        print("✅ All translations are in sync!")
    elif allow_missing:
        print("⚠️  Issues found but allowed in current mode")
    else:
        print("❌ Translation sync issues detected")


def build_report(results: "ValidationResult", master_file: str) -> Dict[str, Any]:
    """Machine readable summary of a validation run."""
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "master": {
            "file": master_file,
            "keyCount": results.master_key_count,
        },
        "languages": [lang.to_dict() for lang in results.languages],
        "summary": {
            "totalLanguages": len(results.languages),
            "totalIssues": results.total_issues,
        },
    }


def save_json_report(results: "ValidationResult", master_file: str,
                     report_file: Union[str, Path]) -> Path:
    """Write the JSON report and return its path."""
    report_path = Path(report_file)
    report_path.parent.mkdir(parents=True, exist_ok=True)

    with open(report_path, "w", encoding="utf-8") as f:
        json.dump(build_report(results, master_file), f, indent=2, ensure_ascii=False)

    logger.info("Translation report saved", file=str(report_path))
    return report_path
