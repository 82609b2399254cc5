"""Sorting service for selfie lists.

Performs multi-key sorting with per-key ascending/descending order. Missing
values always sort last, whatever the direction.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from core.models import Selfie


def _sort_value(value: Any, ascending: bool) -> tuple[Any, ...]:
    if value is None:
        return (1, 0)
    if isinstance(value, datetime):
        value = value.timestamp()
    if isinstance(value, (int, float)):
        return (0, value if ascending else -value)
    text = str(value).casefold()
    if ascending:
        return (0, text)
    # Invert code points so a plain ascending sort yields descending text
    return (0, tuple(-ord(ch) for ch in text) + (1,))


class SortService:
    """Provides sorting utilities for selfie lists."""

    def sort(self, selfies: Iterable[Selfie], sort_keys: list[tuple[str, bool]]) -> list[Selfie]:
        """Return `selfies` sorted by the given keys.

        Args:
            selfies: Selfies to sort; not mutated.
            sort_keys: List of tuples (field_name, ascending).
        """
        items = list(selfies)
        if not sort_keys:
            return items

        def key(item: Selfie) -> tuple[Any, ...]:
            return tuple(
                _sort_value(getattr(item, field_name, None), ascending)
                for field_name, ascending in sort_keys
            )

        return sorted(items, key=key)
