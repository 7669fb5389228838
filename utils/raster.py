"""
Raster utilities - RGBA pixel buffer with bounds-checked pixel access
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np
from PIL import Image

from utils.exceptions import InvalidDimensionsError

CHANNELS = 4


def validate_dimensions(width, height) -> None:
    """
    Check that width and height are positive integers

    Args:
        width: Width candidate
        height: Height candidate

    Raises:
        InvalidDimensionsError: If either value is not a positive int
    """
    for value in (width, height):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value <= 0:
            raise InvalidDimensionsError(width, height)


@dataclass
class CropBox:
    """Rectangle in raster coordinates, right/bottom exclusive"""
    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


class RasterImage:
    """
    RGBA raster, row-major with a top-left origin.

    Pixels live in a ``(height, width, 4)`` uint8 array. The flat view of
    that array is the RGBA buffer, so ``len(buffer) == width * height * 4``
    always holds. Single pixels are addressed through ``index()``, which
    refuses coordinates outside the raster.
    """

    def __init__(self, pixels: np.ndarray):
        if pixels.ndim != 3 or pixels.shape[2] != CHANNELS:
            raise ValueError(f"Expected (height, width, 4) array, got shape {pixels.shape}")
        validate_dimensions(int(pixels.shape[1]), int(pixels.shape[0]))
        self._pixels = np.ascontiguousarray(pixels, dtype=np.uint8)

    @classmethod
    def blank(cls, width: int, height: int, rgba: Tuple[int, int, int, int] = (0, 0, 0, 0)) -> "RasterImage":
        """Allocate a raster filled with a single RGBA value"""
        validate_dimensions(width, height)
        pixels = np.empty((height, width, CHANNELS), dtype=np.uint8)
        pixels[:, :] = rgba
        return cls(pixels)

    @classmethod
    def from_pil(cls, image: Image.Image) -> "RasterImage":
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return cls(np.array(image, dtype=np.uint8))

    def to_pil(self) -> Image.Image:
        return Image.fromarray(self._pixels)

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def pixels(self) -> np.ndarray:
        """(height, width, 4) view of the pixel data"""
        return self._pixels

    @property
    def buffer(self) -> np.ndarray:
        """Flat RGBA buffer (a view, not a copy)"""
        return self._pixels.reshape(-1)

    @property
    def alpha(self) -> np.ndarray:
        return self._pixels[:, :, 3]

    def index(self, x: int, y: int) -> int:
        """
        Offset of pixel (x, y) in the flat buffer

        Raises:
            IndexError: If (x, y) lies outside the raster
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} raster")
        return (y * self.width + x) * CHANNELS

    def get_pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        i = self.index(x, y)
        r, g, b, a = self.buffer[i:i + CHANNELS]
        return int(r), int(g), int(b), int(a)

    def set_pixel(self, x: int, y: int, rgba: Tuple[int, int, int, int]) -> None:
        i = self.index(x, y)
        self.buffer[i:i + CHANNELS] = rgba

    def crop(self, box: CropBox) -> "RasterImage":
        """Copy out the pixels inside box"""
        if box.is_empty:
            raise InvalidDimensionsError(box.width, box.height)
        if box.left < 0 or box.top < 0 or box.right > self.width or box.bottom > self.height:
            raise IndexError(f"Crop {box} outside {self.width}x{self.height} raster")
        return RasterImage(self._pixels[box.top:box.bottom, box.left:box.right].copy())

    def copy(self) -> "RasterImage":
        return RasterImage(self._pixels.copy())

    def __eq__(self, other) -> bool:
        if not isinstance(other, RasterImage):
            return NotImplemented
        return self.size == other.size and np.array_equal(self._pixels, other._pixels)

    def __repr__(self) -> str:
        return f"RasterImage({self.width}x{self.height})"
