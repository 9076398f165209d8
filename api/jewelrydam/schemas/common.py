"""Shared field parsing for request schemas and form fields."""

import json
from datetime import date, datetime
from typing import Any, Iterable, List, Optional, Union


def parse_date(value: Any) -> Optional[date]:
    """Parse a date from a date, datetime or ISO string.

    Browsers send ``Date.toISOString()`` values, so only the date part of a
    datetime string is kept.

    Examples:
        >>> parse_date("2024-03-01T00:00:00.000Z")
        datetime.date(2024, 3, 1)
        >>> parse_date("") is None
        True
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text or text.lower() in ("null", "undefined"):
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        raise ValueError(f"Invalid date: {value!r}")


def normalize_tags(value: Union[None, str, Iterable[str]]) -> Optional[str]:
    """Normalize tags to a comma-separated string.

    Accepts a list, a JSON array string or a comma-separated string.
    Blank entries and duplicates are dropped, order is preserved.

    Examples:
        >>> normalize_tags('["gold", "ring"]')
        'gold,ring'
        >>> normalize_tags("gold, ring, gold")
        'gold,ring'
        >>> normalize_tags([]) is None
        True
    """
    if value is None:
        return None

    items: List[str]
    if isinstance(value, str):
        text = value.strip()
        items = []
        if text.startswith("["):
            try:
                decoded = json.loads(text)
            except json.JSONDecodeError:
                decoded = None
            if isinstance(decoded, list):
                items = [str(item) for item in decoded]
        if not items and not text.startswith("["):
            items = text.split(",")
    else:
        items = [str(item) for item in value]

    seen = []
    for item in items:
        tag = item.strip()
        if tag and tag not in seen:
            seen.append(tag)

    return ",".join(seen) or None
