"""Shared fixtures: synthetic portraits built in memory."""

import io

import numpy as np
import pytest
from PIL import Image

from modules.palette import BRAND_COLORS, PaletteResolver
from utils.raster import RasterImage

NAVY = (30, 42, 69)
AQUA = (0, 255, 220)
SUBJECT_RGB = (200, 120, 80)


def make_disc(size: int = 200, radius: float = 60.0, rgb=SUBJECT_RGB) -> RasterImage:
    """Opaque disc with a 1px anti-aliased rim on a transparent square."""
    yy, xx = np.mgrid[0:size, 0:size]
    center = (size - 1) / 2
    dist = np.sqrt((xx - center) ** 2 + (yy - center) ** 2)
    alpha = np.clip(radius - dist + 0.5, 0, 1) * 255

    pixels = np.zeros((size, size, 4), dtype=np.uint8)
    pixels[:, :, :3] = rgb
    pixels[:, :, 3] = np.rint(alpha).astype(np.uint8)
    return RasterImage(pixels)


def to_png_bytes(image: RasterImage) -> bytes:
    buffer = io.BytesIO()
    image.to_pil().save(buffer, format="PNG")
    return buffer.getvalue()


def open_rgba(data: bytes) -> Image.Image:
    return Image.open(io.BytesIO(data)).convert("RGBA")


@pytest.fixture
def palette():
    return PaletteResolver(BRAND_COLORS)


@pytest.fixture
def disc():
    return make_disc()


@pytest.fixture
def portrait_png():
    return to_png_bytes(make_disc())


@pytest.fixture
def noise_raster():
    rng = np.random.default_rng(42)
    pixels = rng.integers(0, 256, size=(256, 256, 4), dtype=np.uint8)
    pixels[:, :, 3] = 255
    return RasterImage(pixels)
