"""CSV value normalization — handles BOM, trailing spaces, spreadsheet quirks."""

from __future__ import annotations

import re

_TRUE_VALUES = {"1", "true", "yes", "y", "active", "on"}
_FALSE_VALUES = {"0", "false", "no", "n", "inactive", "off", "disabled"}


def normalize_column_name(name: str) -> str:
    """Normalize a CSV column name.

    - Removes BOM characters (\\ufeff)
    - Strips whitespace, lowercases
    - Replaces runs of spaces / non-breaking spaces with a single underscore
    - Drops anything that is not alphanumeric or underscore
    """
    name = name.replace("\ufeff", "").strip()
    name = re.sub(r"[\s\u00a0]+", "_", name)
    name = name.lower()
    return re.sub(r"[^\w]", "", name, flags=re.UNICODE)


def clean_string(value: str | None) -> str | None:
    """Strip whitespace and return None for empty strings."""
    if value is None:
        return None
    value = value.strip()
    return value if value else None


def parse_bool(raw: str | None, default: bool = True) -> bool:
    """Parse flags like 'yes', '0', 'inactive'. Blank means ``default``."""
    value = clean_string(raw)
    if value is None:
        return default
    key = value.lower()
    if key in _TRUE_VALUES:
        return True
    if key in _FALSE_VALUES:
        return False
    raise ValueError(f"Unrecognized boolean value: {raw!r}")
