"""JPEG encoding/decoding and in-memory image caching.

Images are Pillow `Image` objects. Decoding is best-effort and returns None on
failure; encoding failures raise `CannotSaveImage`.
"""

from __future__ import annotations

from collections import OrderedDict
from io import BytesIO
from typing import Any
import uuid

from PIL import Image, UnidentifiedImageError
from loguru import logger

from core.services.interfaces import CannotSaveImage

DEFAULT_JPEG_QUALITY = 90

# Modes Pillow can write as JPEG without conversion
_JPEG_MODES = {"1", "L", "RGB", "CMYK"}


def encode_jpeg(image: Any, quality: int = DEFAULT_JPEG_QUALITY) -> bytes:
    """Encode a Pillow image as JPEG bytes.

    Raises:
        CannotSaveImage: if `image` is not a Pillow image or encoding fails.
    """
    if not isinstance(image, Image.Image):
        raise CannotSaveImage(image, f"not an image: {type(image).__name__}")
    try:
        to_save = image if image.mode in _JPEG_MODES else image.convert("RGB")
        buf = BytesIO()
        to_save.save(buf, format="JPEG", quality=int(quality))
    except (OSError, ValueError, SystemError) as ex:
        raise CannotSaveImage(image, str(ex)) from ex
    return buf.getvalue()


def decode_image(data: bytes) -> Image.Image | None:
    """Decode image bytes fully, returning None when Pillow cannot read them."""
    try:
        with Image.open(BytesIO(data)) as im:
            im.load()
            return im.copy()
    except (UnidentifiedImageError, OSError, ValueError, SyntaxError) as ex:
        logger.debug("Image decode failed: {}", ex)
        return None
    except Image.DecompressionBombError as ex:
        logger.warning("Image rejected as decompression bomb: {}", ex)
        return None
    except Exception as ex:  # pylint: disable=broad-exception-caught
        logger.debug("Unexpected image decode failure: {}", ex)
        return None


class ImageCache:
    """Id-keyed LRU cache of decoded images.

    Eviction only drops memory: the store reads evicted images back from disk.
    """

    def __init__(self, capacity: int = 256) -> None:
        self._cap = max(1, int(capacity or 1))
        self._data: OrderedDict[uuid.UUID, Image.Image] = OrderedDict()

    def get(self, key: uuid.UUID) -> Image.Image | None:
        """Return the cached image for `key`, moving it to the MRU position."""
        image = self._data.get(key)
        if image is None:
            return None
        self._data.move_to_end(key)
        return image

    def put(self, key: uuid.UUID, image: Image.Image) -> None:
        """Insert or replace `key`, evicting the LRU entry when over capacity."""
        self._data[key] = image
        self._data.move_to_end(key)
        while len(self._data) > self._cap:
            evicted, _ = self._data.popitem(last=False)
            logger.debug("Image cache evicted {}", evicted)

    def discard(self, key: uuid.UUID) -> None:
        """Drop `key` if cached."""
        self._data.pop(key, None)

    def clear(self) -> None:
        """Drop every cached image."""
        self._data.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)
