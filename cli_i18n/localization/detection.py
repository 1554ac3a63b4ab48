"""Figuring out which locale the user wants.

Environment and OS queries are passed in as callables so the detection logic
itself stays deterministic in tests.
"""

import locale as _locale
import os
import re
import sys
from typing import Callable, Iterable, List, Optional, Sequence

import structlog

logger = structlog.get_logger(__name__)

# Checked in order; the first non-empty value wins.
LOCALE_ENV_VARS = ("CLI_I18N_LANG", "LANG", "LANGUAGE", "LC_ALL")

LANG_FLAGS = ("--lang", "--language")

_SUBTAG_SEPARATORS = re.compile(r"[_.\-]")

HintSource = Callable[[], Iterable[Optional[str]]]
SystemLocaleSource = Callable[[], Optional[str]]


def environment_hints() -> List[Optional[str]]:
    """Default hint source: the locale environment variables, in priority order."""
    return [os.environ.get(name) for name in LOCALE_ENV_VARS]


def system_locale() -> Optional[str]:
    """Default OS locale source, e.g. ``"en_US"``."""
    return _locale.getlocale()[0]


def primary_subtag(value: str) -> str:
    """Extract the language code, e.g. ``"ja_JP.UTF-8"`` -> ``"ja"``."""
    return _SUBTAG_SEPARATORS.split(value, maxsplit=1)[0].lower()


def detect_default_locale(
    hint_source: Optional[HintSource] = None,
    system_locale_source: Optional[SystemLocaleSource] = None,
    fallback: str = "en",
) -> str:
    """Pick a locale from hints, then the OS locale, then ``fallback``."""
    hint_source = hint_source or environment_hints
    system_locale_source = system_locale_source or system_locale

    for hint in hint_source():
        if hint:
            code = primary_subtag(hint)
            if code:
                return code

    try:
        os_locale = system_locale_source()
    except (ValueError, OSError) as e:
        logger.debug("Could not query system locale", error=str(e))
        return fallback

    if os_locale:
        code = primary_subtag(os_locale)
        if code:
            return code
    return fallback


def parse_language_from_args(args: Optional[Sequence[str]] = None) -> Optional[str]:
    """Find a ``--lang``/``--language`` value among command line arguments.

    Accepts both ``--lang ja`` and ``--lang=ja``. Arguments are scanned left
    to right and the first flag that carries a value wins, whichever form it
    uses: ``["--lang=ja", "--lang", "fr"]`` gives ``"ja"``. Returns None when
    no flag has a value.
    """
    if args is None:
        args = sys.argv[1:]

    for index, arg in enumerate(args):
        if arg in LANG_FLAGS:
            if index + 1 < len(args) and args[index + 1]:
                return args[index + 1]
            continue

        flag, sep, value = arg.partition("=")
        if sep and flag in LANG_FLAGS and value:
            return value

    return None
