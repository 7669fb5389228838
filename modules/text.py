"""
Text Module - Render text overlays as transparent layers
"""

from pathlib import Path
from typing import Tuple

from PIL import Image, ImageDraw, ImageFont
from loguru import logger

from config import settings
from utils.raster import RasterImage, validate_dimensions


class TextRenderer:
    """
    Draws a single line of text on a transparent canvas-sized raster
    """

    def __init__(self, font_path: Path = None):
        """
        Initialize TextRenderer

        Args:
            font_path: TrueType font (default: FONTS_DIR / FONT_TEXT)
        """
        self.font_path = Path(font_path or settings.FONTS_DIR / settings.FONT_TEXT)

    def _load_font(self, font_size: int) -> ImageFont.FreeTypeFont:
        try:
            return ImageFont.truetype(str(self.font_path), font_size)
        except OSError as e:
            logger.warning(f"⚠️ Font {self.font_path.name} unavailable ({e}), using default font")
            return ImageFont.load_default(size=font_size)

    def render(
        self,
        text: str,
        width: int,
        height: int,
        font_size: int,
        x: int,
        y: int,
        fill: Tuple[int, int, int] = None
    ) -> RasterImage:
        """
        Render text centered on (x, y)

        Args:
            text: Text to draw
            width: Layer width (usually canvas width)
            height: Layer height (usually canvas height)
            font_size: Font size in pixels
            x: Horizontal anchor (text middle)
            y: Vertical anchor (text middle)
            fill: Text color (default: settings.TEXT_FILL)

        Returns:
            Transparent RGBA raster with the text drawn on it
        """
        validate_dimensions(width, height)
        fill = tuple(fill or settings.TEXT_FILL)

        layer = Image.new("RGBA", (width, height), (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)
        font = self._load_font(max(1, font_size))
        draw.text((x, y), text, font=font, fill=fill + (255,), anchor="mm")

        logger.debug(f"Rendered text '{text[:30]}' at ({x}, {y}), size={font_size}px")
        return RasterImage.from_pil(layer)
