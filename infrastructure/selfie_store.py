"""File-backed selfie store.

Each selfie lives in one flat directory as two files keyed by its upper-case
UUID: `<ID>.json` for metadata and `<ID>-image.jpg` for the JPEG image.
Decoded images are kept in an in-memory cache that every mutating call
updates.

The store is synchronous and unlocked; callers serialize access.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any
import uuid

from PIL import Image
from loguru import logger

from core.models import Coordinate, Selfie
from core.services.interfaces import ISelfieStore, SelfieDecodeError
from infrastructure.image_service import (
    DEFAULT_JPEG_QUALITY,
    ImageCache,
    decode_image,
    encode_jpeg,
)
from infrastructure.utils import format_created, parse_created

METADATA_SUFFIX = ".json"
IMAGE_SUFFIX = "-image.jpg"


def selfie_to_dict(selfie: Selfie) -> dict[str, Any]:
    """Return the JSON-ready metadata mapping; the image is never included."""
    data: dict[str, Any] = {
        "created": format_created(selfie.created),
        "id": str(selfie.id).upper(),
        "title": selfie.title,
    }
    if selfie.position is not None:
        data["position"] = {
            "latitude": selfie.position.latitude,
            "longitude": selfie.position.longitude,
        }
    return data


def selfie_from_dict(data: Any) -> Selfie:
    """Decode a metadata mapping.

    A missing or null `position` decodes to no position.

    Raises:
        KeyError, TypeError, ValueError: when a field is missing or malformed.
    """
    if not isinstance(data, dict):
        raise TypeError(f"expected an object, got {type(data).__name__}")
    title = data["title"]
    if not isinstance(title, str):
        raise TypeError("title must be a string")
    raw_position = data.get("position")
    position = None
    if raw_position is not None:
        if not isinstance(raw_position, dict):
            raise TypeError("position must be an object")
        position = Coordinate(
            latitude=float(raw_position["latitude"]),
            longitude=float(raw_position["longitude"]),
        )
    return Selfie(
        title=title,
        position=position,
        id=uuid.UUID(str(data["id"])),
        created=parse_created(data["created"]),
    )


def _decode_metadata(path: Path) -> Selfie:
    """Read and decode one metadata file, wrapping decode failures."""
    raw = path.read_bytes()
    try:
        return selfie_from_dict(json.loads(raw.decode("utf-8")))
    except (
        UnicodeDecodeError,
        json.JSONDecodeError,
        KeyError,
        TypeError,
        ValueError,
        OverflowError,
        RecursionError,
    ) as ex:
        raise SelfieDecodeError(path, str(ex)) from ex


def _write_replacing(path: Path, data: bytes) -> None:
    """Write `data` beside `path` and swap it in, leaving `path` intact on failure."""
    tmp = path.with_name(f".{path.name}.tmp")
    try:
        tmp.write_bytes(data)
        os.replace(tmp, path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise


class SelfieStore(ISelfieStore):
    """Persist selfies and their images under one directory."""

    def __init__(
        self,
        documents_dir: str | Path,
        jpeg_quality: int = DEFAULT_JPEG_QUALITY,
        cache_capacity: int = 256,
    ) -> None:
        self._dir = Path(documents_dir)
        self._dir.mkdir(parents=True, exist_ok=True)
        self._quality = jpeg_quality
        self._image_cache = ImageCache(cache_capacity)

    @property
    def documents_dir(self) -> Path:
        """Directory holding every metadata and image file."""
        return self._dir

    def metadata_path(self, selfie_id: uuid.UUID) -> Path:
        """Path of the metadata file for `selfie_id`."""
        return self._dir / f"{str(selfie_id).upper()}{METADATA_SUFFIX}"

    def image_path(self, selfie_id: uuid.UUID) -> Path:
        """Path of the image file for `selfie_id`."""
        return self._dir / f"{str(selfie_id).upper()}{IMAGE_SUFFIX}"

    # Images
    def get_image(self, selfie_id: uuid.UUID) -> Image.Image | None:
        """Return the image for `selfie_id` from cache or disk, or None."""
        cached = self._image_cache.get(selfie_id)
        if cached is not None:
            return cached

        path = self.image_path(selfie_id)
        try:
            data = path.read_bytes()
        except OSError as ex:
            logger.debug("No image for {}: {}", selfie_id, ex)
            return None

        image = decode_image(data)
        if image is None:
            logger.debug("Undecodable image file {}", path)
            return None

        self._image_cache.put(selfie_id, image)
        return image

    def set_image(self, selfie_id: uuid.UUID, image: Image.Image | None) -> None:
        """Write `image` as JPEG for `selfie_id`, or remove the file when None.

        Raises:
            CannotSaveImage: if the image cannot be encoded.
            OSError: if the file cannot be written or removed.
        """
        path = self.image_path(selfie_id)
        if image is not None:
            data = encode_jpeg(image, self._quality)
            self._image_cache.discard(selfie_id)
            _write_replacing(path, data)
            self._image_cache.put(selfie_id, image)
            logger.debug("Saved image {} ({} bytes)", path.name, len(data))
        else:
            if path.exists():
                path.unlink()
                logger.debug("Removed image {}", path.name)
            self._image_cache.discard(selfie_id)

    # Metadata
    def list_selfies(self) -> list[Selfie]:
        """Decode every metadata file in the directory.

        Raises:
            SelfieDecodeError: on the first file that fails to decode.
            OSError: if the directory or a file cannot be read.
        """
        paths = sorted(
            p for p in self._dir.iterdir() if p.name.endswith(METADATA_SUFFIX) and p.is_file()
        )
        selfies: list[Selfie] = []
        for path in paths:
            try:
                selfies.append(_decode_metadata(path))
            except SelfieDecodeError as ex:
                logger.warning("List selfies failed: {}", ex)
                raise
        return selfies

    def load(self, selfie_id: uuid.UUID) -> Selfie | None:
        """Return the stored selfie, or None if missing or unreadable."""
        path = self.metadata_path(selfie_id)
        try:
            return _decode_metadata(path)
        except Exception as ex:  # pylint: disable=broad-exception-caught
            logger.debug("Load {} failed: {}", selfie_id, ex)
            return None

    def save(self, selfie: Selfie) -> None:
        """Write metadata for `selfie`, overwriting any previous file.

        The payload is fully encoded before the file is touched, so a failed
        save leaves the previous version in place. The image is not touched;
        use `set_image` for that.

        Raises:
            UnicodeEncodeError, TypeError, ValueError: if the record cannot be encoded.
            OSError: if the file cannot be written.
        """
        path = self.metadata_path(selfie.id)
        try:
            payload = json.dumps(selfie_to_dict(selfie), ensure_ascii=False).encode("utf-8")
            _write_replacing(path, payload)
        except (OSError, UnicodeEncodeError, TypeError, ValueError) as ex:
            logger.warning("Save {} failed: {}", path.name, ex)
            raise
        logger.info("Saved selfie {} ({!r})", selfie.id, selfie.title)

    def delete(self, target: uuid.UUID | Selfie) -> None:
        """Remove metadata and image for an id or selfie, if present.

        Raises:
            OSError: if an existing file cannot be removed.
        """
        selfie_id = target.id if isinstance(target, Selfie) else target
        for path in (self.metadata_path(selfie_id), self.image_path(selfie_id)):
            if path.exists():
                try:
                    path.unlink()
                except OSError as ex:
                    logger.warning("Delete {} failed: {}", path.name, ex)
                    raise
        self._image_cache.discard(selfie_id)
        logger.info("Deleted selfie {}", selfie_id)
