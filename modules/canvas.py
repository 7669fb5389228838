"""
Canvas Module - Solid color background rasters
"""

from typing import Tuple

from loguru import logger

from utils.raster import RasterImage, validate_dimensions


class CanvasBuilder:
    """Allocates opaque single-color canvases"""

    def build(self, width: int, height: int, rgb: Tuple[int, int, int]) -> RasterImage:
        """
        Create a canvas filled with rgb at full opacity

        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels
            rgb: (r, g, b) background color

        Returns:
            Opaque RGBA raster
        """
        validate_dimensions(width, height)
        r, g, b = rgb
        logger.debug(f"Building {width}x{height} canvas with color ({r}, {g}, {b})")
        return RasterImage.blank(width, height, (r, g, b, 255))
