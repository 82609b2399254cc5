"""Core domain models for selfie records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
import uuid

DEFAULT_TITLE = "New Selfie!"


@dataclass(frozen=True)
class Coordinate:
    """A geo-coordinate in degrees; equal when both components are equal."""

    latitude: float
    longitude: float


@dataclass
class Selfie:
    """A single journal entry.

    `id` and `created` are fixed at construction. The image is not a field:
    it lives in the store under the same id.
    """

    title: str = DEFAULT_TITLE
    position: Coordinate | None = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __setattr__(self, name: str, value: Any) -> None:
        if name in ("id", "created") and name in self.__dict__:
            raise AttributeError(f"Selfie.{name} is immutable")
        super().__setattr__(name, value)
