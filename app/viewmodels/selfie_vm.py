"""Lightweight view model wrapper around `Selfie`."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from PIL import Image
from loguru import logger

from core.models import Coordinate, Selfie
from core.services.interfaces import ISelfieStore, SelfieStoreError
from infrastructure.utils import format_short_datetime, format_time_ago


@dataclass
class SelfieVM:
    """Expose convenient properties for list rows and the detail screen."""

    selfie: Selfie
    store: ISelfieStore

    @property
    def title(self) -> str:
        """Title shown as the main label."""
        return self.selfie.title

    @property
    def created_label(self) -> str:
        """Short date and time of creation."""
        return format_short_datetime(self.selfie.created)

    def time_ago(self, now: datetime | None = None) -> str:
        """Label such as "five minutes ago"."""
        return format_time_ago(self.selfie.created, now)

    @property
    def position(self) -> Coordinate | None:
        """Where the selfie was taken, if known."""
        return self.selfie.position

    @property
    def has_location(self) -> bool:
        """True if the map should be shown."""
        return self.selfie.position is not None

    @property
    def image(self) -> Image.Image | None:
        """The selfie's image, read through the store."""
        return self.store.get_image(self.selfie.id)

    @image.setter
    def image(self, value: Image.Image | None) -> None:
        try:
            self.store.set_image(self.selfie.id, value)
        except (SelfieStoreError, OSError) as ex:
            logger.error("Set image failed for {}: {}", self.selfie.id, ex)
