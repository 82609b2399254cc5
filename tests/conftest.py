"""Shared test fixtures."""

from __future__ import annotations

from io import BytesIO

from PIL import Image, ImageChops, ImageStat
import pytest

from infrastructure.selfie_store import SelfieStore


def make_image(color: tuple[int, int, int] = (200, 40, 40), size: tuple[int, int] = (32, 24)):
    """Return a small gradient image so JPEG has something to compress."""
    image = Image.new("RGB", size, color)
    for x in range(size[0]):
        image.putpixel((x, 0), (x * 7 % 256, 80, 160))
    return image


def jpeg_bytes(image: Image.Image, quality: int = 90) -> bytes:
    buf = BytesIO()
    image.save(buf, format="JPEG", quality=quality)
    return buf.getvalue()


def mean_difference(first: Image.Image, second: Image.Image) -> float:
    """Largest per-band mean absolute pixel difference between two images."""
    diff = ImageChops.difference(first.convert("RGB"), second.convert("RGB"))
    return max(ImageStat.Stat(diff).mean)


@pytest.fixture
def store(tmp_path) -> SelfieStore:
    return SelfieStore(tmp_path / "Documents")


@pytest.fixture
def sample_image() -> Image.Image:
    return make_image()
