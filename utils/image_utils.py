"""
Image utility functions for decoding, resizing and encoding rasters
"""

import io
from pathlib import Path
from typing import Union, Tuple

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from utils.raster import RasterImage, validate_dimensions
from utils.exceptions import CorruptImageError, UnsupportedFormatError

# Formats accepted for subjects and logos
DECODABLE_FORMATS = {"PNG", "JPEG", "WEBP"}

# Output format name -> Pillow format name
ENCODABLE_FORMATS = {"png": "PNG", "jpeg": "JPEG"}


def normalize_format(fmt: str) -> str:
    """
    Normalize output format name ("jpg" -> "jpeg", case-insensitive)

    Raises:
        UnsupportedFormatError: If the format cannot be encoded
    """
    name = str(fmt).lower().lstrip(".")
    if name == "jpg":
        name = "jpeg"
    if name not in ENCODABLE_FORMATS:
        raise UnsupportedFormatError(fmt)
    return name


def load_image_bytes(image_path: Union[str, Path]) -> bytes:
    """
    Read raw image bytes from file path

    Args:
        image_path: Path to image file

    Returns:
        File contents
    """
    image_path = Path(image_path)
    if not image_path.exists():
        raise FileNotFoundError(f"Image not found: {image_path}")
    return image_path.read_bytes()


def decode_image(data: bytes) -> RasterImage:
    """
    Decode PNG/JPEG/WEBP bytes into an RGBA raster

    Args:
        data: Encoded image bytes

    Returns:
        Decoded RasterImage (images without alpha become fully opaque)
    """
    if not data:
        raise CorruptImageError("empty input")

    try:
        img = Image.open(io.BytesIO(data))
    except UnidentifiedImageError:
        raise UnsupportedFormatError("unknown", "Could not identify image format")
    except Image.DecompressionBombError as e:
        raise CorruptImageError(str(e)) from e

    if img.format not in DECODABLE_FORMATS:
        raise UnsupportedFormatError(img.format)

    try:
        img.load()
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise CorruptImageError(str(e)) from e

    return RasterImage.from_pil(img)


def _premultiplied_resize(pixels: np.ndarray, size: Tuple[int, int]) -> np.ndarray:
    """
    Resize an RGBA array with premultiplied alpha so that fully transparent
    pixels do not bleed their (meaningless) color into visible edges.
    """
    h, w = pixels.shape[:2]
    target_w, target_h = size
    interpolation = cv2.INTER_AREA if target_w * target_h < w * h else cv2.INTER_LANCZOS4

    rgba = pixels.astype(np.float32)
    alpha = rgba[:, :, 3:4] / 255.0
    rgba[:, :, :3] *= alpha

    resized = cv2.resize(rgba, (target_w, target_h), interpolation=interpolation)
    resized = np.clip(resized, 0, 255)

    out_alpha = resized[:, :, 3:4] / 255.0
    with np.errstate(divide="ignore", invalid="ignore"):
        rgb = np.where(out_alpha > 0, resized[:, :, :3] / out_alpha, 0)
    resized[:, :, :3] = np.clip(rgb, 0, 255)

    return np.rint(resized).astype(np.uint8)


def resize_cover(image: RasterImage, target_w: int, target_h: int) -> RasterImage:
    """
    Scale to fill target box and center-crop the overflow

    Args:
        image: Source raster
        target_w: Target width
        target_h: Target height

    Returns:
        Raster of exactly target_w x target_h
    """
    validate_dimensions(target_w, target_h)
    w, h = image.size
    if (w, h) == (target_w, target_h):
        return image.copy()

    scale = max(target_w / w, target_h / h)
    new_w = max(target_w, int(round(w * scale)))
    new_h = max(target_h, int(round(h * scale)))

    resized = _premultiplied_resize(image.pixels, (new_w, new_h))

    left = (new_w - target_w) // 2
    top = (new_h - target_h) // 2
    return RasterImage(resized[top:top + target_h, left:left + target_w].copy())


def resize_contain(image: RasterImage, target_w: int, target_h: int) -> RasterImage:
    """
    Scale to fit inside target box, padding with transparent pixels

    Args:
        image: Source raster
        target_w: Target width
        target_h: Target height

    Returns:
        Raster of exactly target_w x target_h
    """
    validate_dimensions(target_w, target_h)
    w, h = image.size
    scale = min(target_w / w, target_h / h)
    new_w = min(target_w, max(1, int(round(w * scale))))
    new_h = min(target_h, max(1, int(round(h * scale))))

    resized = _premultiplied_resize(image.pixels, (new_w, new_h))

    out = np.zeros((target_h, target_w, 4), dtype=np.uint8)
    left = (target_w - new_w) // 2
    top = (target_h - new_h) // 2
    out[top:top + new_h, left:left + new_w] = resized
    return RasterImage(out)


def decode_and_resize(data: bytes, target_w: int, target_h: int, fit: str = "cover") -> RasterImage:
    """
    Decode image bytes and resize to target box

    Args:
        data: Encoded image bytes
        target_w: Target width
        target_h: Target height
        fit: "cover" (fill and crop) or "contain" (fit and pad)

    Returns:
        Resized RasterImage
    """
    image = decode_image(data)
    if fit == "cover":
        return resize_cover(image, target_w, target_h)
    if fit == "contain":
        return resize_contain(image, target_w, target_h)
    raise ValueError(f"Unknown fit mode: {fit}")


def to_grayscale(image: RasterImage) -> RasterImage:
    """
    Convert color channels to grayscale, keeping alpha untouched

    Args:
        image: Source raster

    Returns:
        New grayscale RGBA raster
    """
    gray = cv2.cvtColor(np.ascontiguousarray(image.pixels[:, :, :3]), cv2.COLOR_RGB2GRAY)
    out = np.empty_like(image.pixels)
    out[:, :, 0] = gray
    out[:, :, 1] = gray
    out[:, :, 2] = gray
    out[:, :, 3] = image.alpha
    return RasterImage(out)


def encode_image(
    image: RasterImage,
    fmt: str,
    quality: int = None,
    compress_level: int = None,
    optimize: bool = False
) -> bytes:
    """
    Encode raster to bytes

    Args:
        image: Raster to encode
        fmt: "png" or "jpeg"/"jpg"
        quality: JPEG quality (1-95)
        compress_level: PNG zlib level (0-9)
        optimize: Let the encoder spend extra effort on size

    Returns:
        Encoded bytes
    """
    fmt = normalize_format(fmt)
    img = image.to_pil()
    options = {"optimize": optimize}

    if fmt == "jpeg":
        # JPEG has no alpha channel
        img = img.convert("RGB")
        if quality is not None:
            options["quality"] = quality
    elif compress_level is not None:
        options["compress_level"] = compress_level

    buffer = io.BytesIO()
    img.save(buffer, format=ENCODABLE_FORMATS[fmt], **options)
    return buffer.getvalue()
