"""Tests for JPEG encoding and the image cache."""

from __future__ import annotations

import uuid

from PIL import Image
import pytest

from core.services.interfaces import CannotSaveImage
from infrastructure.image_service import ImageCache, decode_image, encode_jpeg


def test_encode_is_deterministic(sample_image) -> None:
    assert encode_jpeg(sample_image, 90) == encode_jpeg(sample_image, 90)


def test_encode_converts_alpha_images() -> None:
    image = Image.new("RGBA", (10, 10), (0, 128, 255, 100))

    decoded = decode_image(encode_jpeg(image))

    assert decoded is not None
    assert decoded.mode == "RGB"


def test_encode_rejects_non_images() -> None:
    with pytest.raises(CannotSaveImage) as excinfo:
        encode_jpeg(b"raw bytes")

    assert excinfo.value.image == b"raw bytes"


def test_decode_garbage_returns_none() -> None:
    assert decode_image(b"") is None
    assert decode_image(b"\xff\xd8\xff garbage") is None


def test_cache_lru_eviction() -> None:
    cache = ImageCache(capacity=2)
    a, b, c = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()
    img = Image.new("L", (1, 1))
    cache.put(a, img)
    cache.put(b, img)
    cache.get(a)
    cache.put(c, img)

    assert a in cache
    assert b not in cache
    assert c in cache
    assert len(cache) == 2


def test_cache_discard_and_clear() -> None:
    cache = ImageCache()
    key = uuid.uuid4()
    cache.put(key, Image.new("L", (1, 1)))

    cache.discard(key)
    cache.discard(key)
    assert cache.get(key) is None

    cache.put(key, Image.new("L", (1, 1)))
    cache.clear()
    assert len(cache) == 0
