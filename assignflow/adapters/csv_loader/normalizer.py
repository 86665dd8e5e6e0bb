"""CSV column normalization — handles BOM, trailing spaces, encoding quirks."""

from __future__ import annotations

import re

_TRUE_VALUES = {"1", "true", "yes", "y", "active", "نعم", "نشط"}
_FALSE_VALUES = {"0", "false", "no", "n", "inactive", "لا", "غير نشط"}


def normalize_column_name(name: str) -> str:
    """Normalize a CSV column name.

    - Removes BOM characters (\\ufeff)
    - Collapses spaces, non-breaking spaces and dashes into one underscore
    - Lowercases and drops anything that is not a word character (Arabic kept)
    """
    name = name.replace("\ufeff", "").strip()
    name = re.sub(r"[\s\u00a0\-]+", "_", name)
    name = name.lower()
    name = re.sub(r"[^\w]", "", name, flags=re.UNICODE)
    return name


def clean_string(value: str | None) -> str | None:
    """Strip whitespace and return None for empty strings."""
    if value is None:
        return None
    value = value.strip()
    return value if value else None


def parse_bool(value: str | None, default: bool = True) -> bool:
    """Parse yes/no style flags; unknown or empty values fall back to *default*."""
    cleaned = clean_string(value)
    if cleaned is None:
        return default
    key = cleaned.lower()
    if key in _TRUE_VALUES:
        return True
    if key in _FALSE_VALUES:
        return False
    return default
