"""Tests for selfie sorting."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from core.models import Selfie
from core.services.sort_service import SortService

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _selfie(title: str, minutes: int) -> Selfie:
    return Selfie(title=title, created=T0 + timedelta(minutes=minutes))


def test_newest_first() -> None:
    items = [_selfie("a", 1), _selfie("b", 3), _selfie("c", 2)]

    result = SortService().sort(items, [("created", False)])

    assert [s.title for s in result] == ["b", "c", "a"]
    assert [s.title for s in items] == ["a", "b", "c"]


def test_title_descending_then_created() -> None:
    items = [_selfie("ab", 1), _selfie("b", 2), _selfie("a", 3), _selfie("b", 0)]

    result = SortService().sort(items, [("title", False), ("created", True)])

    assert [(s.title, s.created.minute) for s in result] == [
        ("b", 0),
        ("b", 2),
        ("ab", 1),
        ("a", 3),
    ]


def test_no_keys_keeps_order() -> None:
    items = [_selfie("x", 5), _selfie("y", 1)]

    assert SortService().sort(items, []) == items
