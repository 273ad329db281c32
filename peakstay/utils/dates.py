"""Calendar date helpers shared by the picker and the inquiry funnel.

Dates cross every boundary as ISO ``YYYY-MM-DD`` strings. Zero padding makes
plain string comparison agree with calendar order, so callers compare strings
directly.
"""

from __future__ import annotations

from datetime import date
from typing import Optional, Union

DateLike = Union[str, date, None]

MONTH_ABBR = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def to_iso(value: DateLike) -> str:
    if value is None:
        return ""
    if isinstance(value, date):
        return value.isoformat()
    return str(value).strip()


def parse_iso(value: DateLike) -> Optional[date]:
    """Parse an ISO calendar date, returning None for blank or malformed text."""

    if isinstance(value, date):
        return value
    text = to_iso(value)
    parts = text.split("-")
    if len(parts) != 3:
        return None
    try:
        year, month, day = (int(p) for p in parts)
        return date(year, month, day)
    except ValueError:
        return None


def format_short(value: DateLike) -> str:
    """``2025-01-26`` -> ``26/01``."""

    parsed = parse_iso(value)
    return parsed.strftime("%d/%m") if parsed else ""


def format_long(value: DateLike) -> str:
    """``2025-01-26`` -> ``26/01/2025``."""

    parsed = parse_iso(value)
    return parsed.strftime("%d/%m/%Y") if parsed else ""


def format_label(value: DateLike) -> str:
    parsed = parse_iso(value)
    if parsed is None:
        return "Select"
    return f"{parsed.day:02d} {MONTH_ABBR[parsed.month - 1]}"


def stay_nights(check_in: DateLike, check_out: DateLike) -> Optional[int]:
    start = parse_iso(check_in)
    end = parse_iso(check_out)
    if start is None or end is None:
        return None
    nights = (end - start).days
    return nights if nights > 0 else None


__all__ = ["to_iso", "parse_iso", "format_short", "format_long", "format_label", "stay_nights"]
