"""
Silhouette Module - Flat-color, alpha-preserving shadow shapes of a subject
"""

from typing import Dict, List, Optional, Tuple

import numpy as np
from loguru import logger

from config import settings
from utils.raster import RasterImage
from utils.exceptions import NoShadowColorAvailableError


class SilhouetteRecolorer:
    """
    Recolors a subject cutout into a single-color silhouette.

    Only RGB is replaced; alpha is copied bit for bit, so anti-aliased
    edges of the cutout stay anti-aliased in the silhouette.
    """

    def __init__(self, shadow_table: Optional[Dict[str, List[str]]] = None):
        """
        Initialize SilhouetteRecolorer

        Args:
            shadow_table: Background color name -> ordered shadow color names
                (default: settings.SHADOW_COLOR_TABLE)
        """
        table = shadow_table if shadow_table is not None else settings.SHADOW_COLOR_TABLE
        self.shadow_table = {name.lower(): list(candidates) for name, candidates in table.items()}

    def shadow_color_for(self, background: str) -> str:
        """
        Pick the shadow color for a background color

        Args:
            background: Background color name

        Returns:
            First candidate shadow color name
        """
        candidates = self.shadow_table.get(background.lower())
        if not candidates:
            raise NoShadowColorAvailableError(background)
        return candidates[0]

    def recolor(self, subject: RasterImage, rgb: Tuple[int, int, int]) -> RasterImage:
        """
        Create silhouette of subject in rgb

        Args:
            subject: Subject raster (already resized to silhouette size)
            rgb: Silhouette color

        Returns:
            New raster with uniform RGB and the subject's alpha
        """
        out = np.empty_like(subject.pixels)
        out[:, :, :3] = np.asarray(rgb, dtype=np.uint8)
        out[:, :, 3] = subject.alpha

        logger.debug(f"Recolored {subject.width}x{subject.height} silhouette to {tuple(rgb)}")
        return RasterImage(out)
