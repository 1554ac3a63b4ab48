"""Helpers for walking nested locale trees.

A locale tree is a JSON object whose values are either translation templates
(strings) or further objects. Keys starting with ``_`` carry metadata such as
``_meta`` and are never treated as translation content.
"""

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Mapping

METADATA_PREFIX = "_"
KEY_SEPARATOR = "."

# Placeholders look like {name}; names are ASCII letters, digits and underscores.
PLACEHOLDER_PATTERN = re.compile(r"\{([A-Za-z0-9_]+)\}")

# Returned by get_nested_value when a key path does not resolve.
MISSING = object()


def is_metadata_key(key: str, prefix: str = METADATA_PREFIX) -> bool:
    """Return True if ``key`` names a metadata entry rather than a translation."""
    return key.startswith(prefix)


def is_tree(value: Any) -> bool:
    return isinstance(value, dict)


def get_nested_value(tree: Any, key: str, prefix: str = METADATA_PREFIX) -> Any:
    """Follow a dotted key path through ``tree``.

    Args:
        tree: Locale tree (or None for a locale that is not loaded)
        key: Dotted key path, e.g. ``"app.version"``
        prefix: Metadata prefix; segments starting with it never resolve

    Returns:
        The value at the end of the path, or ``MISSING`` if any segment is
        absent, hits a non-tree node, or names a metadata entry.
    """
    if not is_tree(tree):
        return MISSING

    current = tree
    for segment in key.split(KEY_SEPARATOR):
        if not is_tree(current) or is_metadata_key(segment, prefix) or segment not in current:
            return MISSING
        current = current[segment]
    return current


def extract_key_paths(tree: Mapping[str, Any], prefix: str = "",
                      metadata_prefix: str = METADATA_PREFIX) -> List[str]:
    """Return the sorted list of leaf key paths reachable from ``tree``.

    Metadata segments are skipped at every depth. Anything that is not a
    nested object (strings, numbers, booleans, lists, None) is a leaf.
    """
    keys: List[str] = []
    for key, value in tree.items():
        if is_metadata_key(key, metadata_prefix):
            continue

        full_key = f"{prefix}{KEY_SEPARATOR}{key}" if prefix else key
        if is_tree(value):
            keys.extend(extract_key_paths(value, full_key, metadata_prefix))
        else:
            keys.append(full_key)

    return sorted(keys)


def interpolate(template: str, params: Mapping[str, Any]) -> str:
    """Substitute ``{name}`` placeholders from ``params`` in a single pass.

    Unknown placeholders stay in the output untouched, and substituted
    values are never expanded again.
    """
    def _replace(match: "re.Match[str]") -> str:
        name = match.group(1)
        if name in params:
            return str(params[name])
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(_replace, template)


def get_metadata(tree: Mapping[str, Any], section: str = "_meta") -> Dict[str, Any]:
    """Return the metadata block of a tree, or an empty dict if there is none."""
    meta = tree.get(section)
    return meta if is_tree(meta) else {}


def round_percentage(value: float) -> float:
    """Round to two decimals, halves away from zero."""
    return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
