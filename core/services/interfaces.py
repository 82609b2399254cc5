"""Core service interfaces and the store error taxonomy.

Failures that callers must see are raised as `SelfieStoreError` subclasses or
as plain `OSError` from the filesystem. Best-effort lookups (`load`,
`get_image`) never raise and return None instead.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
import uuid

from core.models import Selfie


class SelfieStoreError(Exception):
    """Base class for store failures."""


class CannotSaveImage(SelfieStoreError):
    """JPEG encoding failed.

    Attributes:
        image: The object that could not be encoded, kept for diagnostics.
    """

    def __init__(self, image: Any, reason: str | None = None) -> None:
        self.image = image
        message = "Cannot save image"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class SelfieDecodeError(SelfieStoreError):
    """A metadata file could not be decoded into a `Selfie`.

    Attributes:
        path: The offending metadata file.
    """

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"Cannot decode {self.path.name}: {reason}")


class ISelfieStore:
    """Interface consumed by the presentation layer."""

    def list_selfies(self) -> list[Selfie]:
        """Return every stored selfie; raise on the first corrupt file."""
        raise NotImplementedError

    def load(self, selfie_id: uuid.UUID) -> Selfie | None:
        """Return the selfie for `selfie_id`, or None if missing or unreadable."""
        raise NotImplementedError

    def save(self, selfie: Selfie) -> None:
        """Persist metadata for `selfie`, overwriting any previous version."""
        raise NotImplementedError

    def delete(self, target: uuid.UUID | Selfie) -> None:
        """Remove metadata and image for an id or selfie."""
        raise NotImplementedError

    def get_image(self, selfie_id: uuid.UUID) -> Any | None:
        """Return the image for `selfie_id`, or None."""
        raise NotImplementedError

    def set_image(self, selfie_id: uuid.UUID, image: Any | None) -> None:
        """Store `image` for `selfie_id`, or remove it when None."""
        raise NotImplementedError
