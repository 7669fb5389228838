"""
Utility Functions
"""

from .raster import RasterImage, CropBox, validate_dimensions
from .image_utils import (
    decode_image,
    decode_and_resize,
    encode_image,
    load_image_bytes,
    resize_cover,
    resize_contain,
    to_grayscale,
)

__all__ = [
    "RasterImage",
    "CropBox",
    "validate_dimensions",
    "decode_image",
    "decode_and_resize",
    "encode_image",
    "load_image_bytes",
    "resize_cover",
    "resize_contain",
    "to_grayscale",
]
