"""
Formatting helpers shared by the service layer.

All functions are pure and never raise on malformed stored data.
"""

import json
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any
from urllib.parse import quote

from core.config import get_settings


def _rating_value(item: Any) -> float:
    if item is None:
        return 0
    if isinstance(item, (int, float)):
        return item
    if isinstance(item, Mapping):
        value = item.get("rating")
    else:
        value = getattr(item, "rating", None)
    return value or 0


def average_rating(ratings: Iterable[Any] | None) -> float:
    """
    Mean of a collection of ratings, 0 when there are none.

    Items may be ORM rows or mappings with a ``rating`` field, or bare
    numbers. No rounding is applied; callers round for display.
    """
    if not ratings:
        return 0
    values = [_rating_value(r) for r in ratings]
    if not values:
        return 0
    return sum(values) / len(values)


def parse_tags(raw: str | None) -> list[str]:
    """Decode a JSON tag array, keeping its string elements. Anything else yields []."""
    if not raw:
        return []
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        return []
    if not isinstance(parsed, list):
        return []
    return [tag for tag in parsed if isinstance(tag, str)]


def avatar_url(name: str | None, image: str | None) -> str:
    """The user's image if set, else a generated avatar keyed by display name."""
    if image:
        return image
    base_url = get_settings().placeholder_base_url
    return f"{base_url}/?name={quote(name or 'Unknown', safe='')}&background=random"


def iso(value: datetime | str | None) -> str | None:
    """ISO-8601 rendering of a datetime or date string; None when unparseable."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    try:
        return datetime.fromisoformat(value).isoformat()
    except (TypeError, ValueError):
        return None
