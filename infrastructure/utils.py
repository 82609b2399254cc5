"""Utilities for timestamp encoding and human-readable date labels.

This module centralizes date parsing/formatting so the store and the view
models share one behavior.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo

# Seconds-since-reference encoding used by journals written by the original app
REFERENCE_DATE = datetime(2001, 1, 1, tzinfo=timezone.utc)

_ONES = [
    "zero",
    "one",
    "two",
    "three",
    "four",
    "five",
    "six",
    "seven",
    "eight",
    "nine",
    "ten",
    "eleven",
    "twelve",
    "thirteen",
    "fourteen",
    "fifteen",
    "sixteen",
    "seventeen",
    "eighteen",
    "nineteen",
]
_TENS = ["", "", "twenty", "thirty", "forty", "fifty", "sixty", "seventy", "eighty", "ninety"]

_UNITS: list[tuple[str, int]] = [
    ("year", 365 * 24 * 3600),
    ("month", 30 * 24 * 3600),
    ("week", 7 * 24 * 3600),
    ("day", 24 * 3600),
    ("hour", 3600),
    ("minute", 60),
    ("second", 1),
]


def format_created(dt: datetime) -> str:
    """Format a creation timestamp as ISO-8601 in UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat()


def parse_created(value: object) -> datetime:
    """Parse a creation timestamp into an aware datetime.

    Accepts ISO-8601 strings (naive values are taken as UTC, a trailing `Z` is
    allowed) and numbers of seconds since 2001-01-01 UTC.

    Raises:
        ValueError: if the value is neither form.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid timestamp: {value!r}")
    if isinstance(value, (int, float)):
        try:
            return REFERENCE_DATE + timedelta(seconds=float(value))
        except OverflowError as ex:
            raise ValueError(f"Timestamp out of range: {value!r}") from ex
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid timestamp: {value!r}")
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def spell_number(n: int) -> str:
    """Spell out a non-negative integer below one million in English words."""
    if n < 20:
        return _ONES[n]
    if n < 100:
        tens, rest = divmod(n, 10)
        return _TENS[tens] + (f"-{_ONES[rest]}" if rest else "")
    if n < 1000:
        hundreds, rest = divmod(n, 100)
        head = f"{_ONES[hundreds]} hundred"
        return f"{head} {spell_number(rest)}" if rest else head
    if n < 1_000_000:
        thousands, rest = divmod(n, 1000)
        head = f"{spell_number(thousands)} thousand"
        return f"{head} {spell_number(rest)}" if rest else head
    return str(n)


def format_time_ago(created: datetime, now: datetime | None = None) -> str:
    """Return an "N units ago" label using the single largest unit."""
    if now is None:
        now = datetime.now(timezone.utc)
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    seconds = max(0, int((now - created).total_seconds()))
    for name, size in _UNITS:
        count = seconds // size
        if count >= 1:
            return f"{spell_number(count)} {name}{'' if count == 1 else 's'} ago"
    return "zero seconds ago"


def format_short_datetime(dt: datetime, tz: tzinfo | None = None) -> str:
    """Format as short date and time, e.g. `1/5/24, 3:07 PM`.

    Rendered in `tz`, or local time when not given.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    local = dt.astimezone(tz)
    hour = local.hour % 12 or 12
    suffix = "AM" if local.hour < 12 else "PM"
    return f"{local.month}/{local.day}/{local:%y}, {hour}:{local:%M} {suffix}"
