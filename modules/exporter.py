"""
Exporter Module - Encode images within a file size budget and save them
"""

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from loguru import logger

from config import settings
from utils.raster import RasterImage
from utils.image_utils import encode_image, normalize_format

MB = 1024 * 1024

FILE_EXTENSIONS = {"png": "png", "jpeg": "jpg"}


@dataclass
class EncodedOutput:
    """Encoded image bytes plus how they were produced"""
    data: bytes
    format: str
    setting: Dict
    byte_budget: int
    retried: bool = False
    budget_exceeded: bool = False

    @property
    def byte_length(self) -> int:
        return len(self.data)

    @property
    def size_mb(self) -> float:
        return self.byte_length / MB


class SizeConstrainedEncoder:
    """
    Encodes an image and retries once with stricter settings when the
    result is over the byte budget.

    The retry happens at most once and its result is kept even if it is
    still too large. That is a known looseness: the output is not
    guaranteed to fit, it is only flagged with ``budget_exceeded``.
    """

    def __init__(
        self,
        jpeg_quality: int = None,
        jpeg_quality_strict: int = None,
        png_compress_level: int = None,
        png_compress_level_strict: int = None,
        byte_budget: int = None
    ):
        """
        Initialize SizeConstrainedEncoder

        Args:
            jpeg_quality: JPEG quality for the first attempt
            jpeg_quality_strict: JPEG quality for the retry (must be lower)
            png_compress_level: PNG compression level for the first attempt
            png_compress_level_strict: PNG compression level for the retry
            byte_budget: Default maximum output size in bytes
        """
        self.jpeg_quality = jpeg_quality if jpeg_quality is not None else settings.JPEG_QUALITY
        self.jpeg_quality_strict = (
            jpeg_quality_strict if jpeg_quality_strict is not None else settings.JPEG_QUALITY_STRICT
        )
        self.png_compress_level = (
            png_compress_level if png_compress_level is not None else settings.PNG_COMPRESS_LEVEL
        )
        self.png_compress_level_strict = (
            png_compress_level_strict
            if png_compress_level_strict is not None
            else settings.PNG_COMPRESS_LEVEL_STRICT
        )
        self.byte_budget = byte_budget if byte_budget is not None else settings.MAX_FILE_SIZE_BYTES

        if self.jpeg_quality_strict >= self.jpeg_quality:
            raise ValueError("Strict JPEG quality must be lower than normal quality")

    def settings_for(self, fmt: str, strict: bool = False) -> Dict:
        """Encoder options for a format, normal or strict"""
        if fmt == "jpeg":
            return {
                "quality": self.jpeg_quality_strict if strict else self.jpeg_quality,
                "optimize": True,
            }
        return {
            "compress_level": self.png_compress_level_strict if strict else self.png_compress_level,
            "optimize": strict,
        }

    def encode(self, image: RasterImage, fmt: str, byte_budget: Optional[int] = None) -> EncodedOutput:
        """
        Encode image, re-encoding once if it exceeds byte_budget

        Args:
            image: Composited raster
            fmt: "png" or "jpeg"/"jpg"
            byte_budget: Maximum size in bytes (default: encoder budget)

        Returns:
            EncodedOutput (budget_exceeded set if still too large)
        """
        fmt = normalize_format(fmt)
        budget = byte_budget if byte_budget is not None else self.byte_budget

        setting = self.settings_for(fmt)
        data = encode_image(image, fmt, **setting)
        retried = False

        if len(data) > budget:
            logger.warning(
                f"File size is {len(data) / MB:.2f}MB, exceeding the "
                f"{budget / MB:.2f}MB limit. Compressing..."
            )
            setting = self.settings_for(fmt, strict=True)
            data = encode_image(image, fmt, **setting)
            retried = True

        exceeded = len(data) > budget
        if exceeded:
            logger.warning(
                f"File size after compression: {len(data) / MB:.2f}MB. Still exceeds limit."
            )

        logger.debug(f"Encoded {image.width}x{image.height} {fmt}: {len(data)} bytes ({setting})")

        return EncodedOutput(
            data=data,
            format=fmt,
            setting=setting,
            byte_budget=budget,
            retried=retried,
            budget_exceeded=exceeded,
        )


class Exporter:
    """
    Saves encoded images with consistent naming
    """

    def __init__(self, output_dir: Path = None):
        """
        Initialize Exporter

        Args:
            output_dir: Output directory (default: workspace/out)
        """
        self.output_dir = Path(output_dir or settings.OUT_DIR)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        logger.info(f"Exporter initialized with output dir: {self.output_dir}")

    @staticmethod
    def _clean_name(name: str) -> str:
        """
        Clean a name for use in a filename

        Args:
            name: Original name

        Returns:
            Cleaned name
        """
        name = name.strip()
        name = re.sub(r'[^a-zA-Z0-9\s_-]', '', name)
        name = re.sub(r'[\s_]+', '_', name)

        max_length = 50
        if len(name) > max_length:
            name = name[:max_length]

        return name or "image"

    def avatar_filename(
        self,
        portrait_name: str,
        color: str,
        size: int,
        grayscale: bool = False,
        fmt: str = "png"
    ) -> str:
        """
        Generate filename following pattern: avatar-NAME-COLOR-SIZE[-grayscale].png
        """
        suffix = "-grayscale" if grayscale else ""
        ext = FILE_EXTENSIONS[normalize_format(fmt)]
        return f"avatar-{self._clean_name(portrait_name)}-{color.lower()}-{size}{suffix}.{ext}"

    def social_filename(self, image_type: str, color: str, width: int, height: int, fmt: str) -> str:
        """
        Generate filename following pattern: linkedin-TYPE-COLOR-WxH.ext
        """
        ext = FILE_EXTENSIONS[normalize_format(fmt)]
        return f"linkedin-{image_type}-{color.lower()}-{width}x{height}.{ext}"

    def save(self, output: EncodedOutput, filename: str, metadata: Optional[dict] = None) -> Path:
        """
        Write encoded image to the output directory

        Args:
            output: Encoded image
            filename: Target filename (no directories)
            metadata: Optional metadata to save alongside

        Returns:
            Path to saved file
        """
        output_path = self.output_dir / Path(filename).name
        output_path.write_bytes(output.data)

        logger.info(f"Saved image: {output_path} ({output.size_mb:.2f}MB)")

        if metadata:
            self._save_metadata(output_path, metadata)

        return output_path

    def _save_metadata(self, image_path: Path, metadata: dict) -> None:
        """
        Save metadata JSON alongside image

        Args:
            image_path: Path to image
            metadata: Metadata dictionary
        """
        metadata_path = image_path.with_suffix('.json')

        with open(metadata_path, 'w', encoding='utf-8') as f:
            json.dump(metadata, f, ensure_ascii=False, indent=2)

        logger.debug(f"Saved metadata: {metadata_path}")

    def list_images(self) -> list[Path]:
        """
        List all images in output directory, newest first

        Returns:
            List of image paths
        """
        images = [
            p for p in self.output_dir.iterdir()
            if p.is_file() and p.suffix.lower().lstrip('.') in FILE_EXTENSIONS.values()
        ]
        images.sort(key=lambda p: p.stat().st_mtime, reverse=True)

        logger.info(f"Found {len(images)} images in {self.output_dir}")

        return images
