"""Command line entry point for the translation validator."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import structlog

from cli_i18n import __version__
from cli_i18n.config import load_config
from cli_i18n.errors import I18nError
from cli_i18n.localization.manager import DEFAULT_LOCALES_DIR
from cli_i18n.validation import TranslationValidator

EPILOG = """\
Examples:
  cli-i18n-validate                    # Default strict mode
  cli-i18n-validate --allow-missing    # Development mode
  cli-i18n-validate --warn-only        # Warnings only
  cli-i18n-validate --report           # Generate report
"""


def setup_logging(debug: bool = False) -> None:
    """Configure structured logging."""
    level = logging.DEBUG if debug else logging.INFO

    # Logs go to stderr; stdout carries the validation report.
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logging.basicConfig(
        level=level,
        handlers=[handler],
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            (
                structlog.dev.ConsoleRenderer(colors=True)
                if debug
                else structlog.processors.JSONRenderer()
            ),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="cli-i18n-validate",
        description="Translation Validation Tool: check locale files against the master locale",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version", action="version", version=f"cli-i18n {__version__}"
    )

    parser.add_argument("--strict", action="store_true",
                        help="Fail on any missing or extra keys (default)")
    parser.add_argument("--warn-only", action="store_true",
                        help="Show warnings but don't fail")
    parser.add_argument("--allow-missing", action="store_true",
                        help="Allow missing keys (for development phase)")
    parser.add_argument("--report", action="store_true",
                        help="Generate JSON report file")

    parser.add_argument("--locales-dir", type=Path, help="Directory with <locale>.json files")
    parser.add_argument("--master", help="Master locale file name (default: en.json)")
    parser.add_argument("--report-file", type=Path,
                        help="Where to write the JSON report (default: translation-report.json)")
    parser.add_argument("--config-file", type=Path, help="Path to YAML configuration file")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the validator and return the process exit code."""
    args = parse_args(argv)

    try:
        config = load_config(
            config_file=args.config_file,
            locales_dir=args.locales_dir,
            master_file=args.master,
            report_file=args.report_file,
        )
    except I18nError as e:
        setup_logging(debug=args.debug)
        structlog.get_logger().error("Configuration failed", **e.to_dict())
        print(f"❌ Validation failed: {e}", file=sys.stderr)
        return 1

    setup_logging(debug=args.debug or config.debug)
    logger = structlog.get_logger()

    try:
        validator = TranslationValidator(
            locales_dir=config.locales_dir or DEFAULT_LOCALES_DIR,
            master_file=config.master_file,
            strict=args.strict,
            warn_only=args.warn_only,
            allow_missing=args.allow_missing,
            generate_report=args.report,
            report_file=config.report_file,
        )
        return validator.run()

    except I18nError as e:
        logger.error("Validation failed", **e.to_dict())
        print(f"❌ Validation failed: {e}", file=sys.stderr)
        return 1


def run() -> None:
    """Synchronous entry point for setuptools."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nCancelled by user")
        sys.exit(130)


if __name__ == "__main__":
    run()
