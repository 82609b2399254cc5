"""Tests for the selfie model and its JSON mapping."""

from __future__ import annotations

from datetime import datetime, timezone
import uuid

import pytest

from core.models import DEFAULT_TITLE, Coordinate, Selfie
from infrastructure.selfie_store import selfie_from_dict, selfie_to_dict


def test_defaults() -> None:
    selfie = Selfie()

    assert selfie.title == DEFAULT_TITLE == "New Selfie!"
    assert selfie.position is None
    assert selfie.created.tzinfo is not None


def test_ids_are_unique() -> None:
    assert len({Selfie().id for _ in range(50)}) == 50


def test_id_and_created_are_immutable() -> None:
    selfie = Selfie(title="Fixed")

    with pytest.raises(AttributeError):
        selfie.id = uuid.uuid4()
    with pytest.raises(AttributeError):
        selfie.created = datetime.now(timezone.utc)

    selfie.title = "Renamed"
    assert selfie.title == "Renamed"


def test_coordinate_equality_is_componentwise() -> None:
    assert Coordinate(1.5, 2.5) == Coordinate(latitude=1.5, longitude=2.5)
    assert Coordinate(1.5, 2.5) != Coordinate(1.5, 2.6)


def test_to_dict_omits_absent_position() -> None:
    data = selfie_to_dict(Selfie(title="Plain"))

    assert "position" not in data
    assert data["title"] == "Plain"


def test_from_dict_round_trip_with_position() -> None:
    selfie = Selfie(title="Peak", position=Coordinate(46.55, 7.98))

    assert selfie_from_dict(selfie_to_dict(selfie)) == selfie


def test_from_dict_accepts_reference_date_seconds_and_lowercase_id() -> None:
    selfie_id = uuid.uuid4()
    data = {"created": 86400.0, "id": str(selfie_id).lower(), "title": "Old", "position": None}

    selfie = selfie_from_dict(data)

    assert selfie.id == selfie_id
    assert selfie.created == datetime(2001, 1, 2, tzinfo=timezone.utc)
    assert selfie.position is None


@pytest.mark.parametrize(
    "data",
    [
        [],
        {"created": "2024-01-01T00:00:00Z", "id": "nope", "title": "x"},
        {"created": "2024-01-01T00:00:00Z", "id": str(uuid.uuid4()), "title": 3},
        {"created": "yesterday", "id": str(uuid.uuid4()), "title": "x"},
        {"created": "2024-01-01T00:00:00Z", "id": str(uuid.uuid4()), "title": "x", "position": 5},
    ],
)
def test_from_dict_rejects_malformed(data) -> None:
    with pytest.raises((KeyError, TypeError, ValueError)):
        selfie_from_dict(data)
