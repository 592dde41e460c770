from __future__ import annotations

import re

_MULTISPACE_RE = re.compile(r"\s+")
_LIKE_SPECIAL_RE = re.compile(r"([/%_])")

# "/" rather than backslash: renders the same on PostgreSQL and SQLite.
LIKE_ESCAPE = "/"


def normalize_query(value: str | None) -> str:
    """Trim and collapse inner whitespace; case is left to the comparisons."""
    if not value:
        return ""
    return _MULTISPACE_RE.sub(" ", value.strip())


def contains_pattern(value: str) -> str:
    """Build an ILIKE pattern matching ``value`` as a literal substring."""
    escaped = _LIKE_SPECIAL_RE.sub(r"/\1", value)
    return f"%{escaped}%"


def contains_ci(haystack: str | None, needle: str | None) -> bool:
    if not haystack or not needle:
        return False
    return needle.lower() in haystack.lower()
