"""
Compositor Module - Source-over alpha compositing of layers onto a canvas
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

import numpy as np
from loguru import logger

from modules.canvas import CanvasBuilder
from modules.layout import BLEND_OVER, Layer, visible_region
from modules.palette import ColorSpec
from utils.raster import RasterImage


@dataclass(frozen=True)
class CompositionRequest:
    """Everything needed to compose one output image"""
    width: int
    height: int
    background: ColorSpec
    layers: Tuple[Layer, ...] = field(default_factory=tuple)
    output_format: str = "png"
    byte_budget: Optional[int] = None


class Compositor:
    """
    Paints layers onto a canvas in order, later layers on top.

    The canvas passed in is never modified; compositing happens on a copy.
    """

    def __init__(self, canvas_builder: Optional[CanvasBuilder] = None):
        self.canvas_builder = canvas_builder or CanvasBuilder()

    def compose(self, request: CompositionRequest) -> RasterImage:
        """
        Build the background canvas of a request and composite its layers

        Args:
            request: Composition request

        Returns:
            Composited opaque raster
        """
        canvas = self.canvas_builder.build(request.width, request.height, request.background.rgb)
        return self.composite(canvas, request.layers)

    def composite(self, canvas: RasterImage, layers: Sequence[Layer]) -> RasterImage:
        """
        Alpha-blend layers onto a copy of canvas

        Args:
            canvas: Opaque base canvas
            layers: Layers in paint order

        Returns:
            New composited raster
        """
        result = canvas.copy()
        dst = result.pixels

        for i, layer in enumerate(layers):
            if layer.blend != BLEND_OVER:
                raise ValueError(f"Unsupported blend mode: {layer.blend}")

            crop = visible_region(
                layer.image.width, layer.image.height,
                layer.left, layer.top,
                result.width, result.height,
            )
            if crop.is_empty:
                logger.debug(f"Layer {i} at ({layer.left}, {layer.top}) is off-canvas, skipped")
                continue

            x = layer.left + crop.left
            y = layer.top + crop.top
            src = layer.image.pixels[crop.top:crop.bottom, crop.left:crop.right]
            region = dst[y:y + crop.height, x:x + crop.width]

            region[:, :, :3] = _blend_over(src, region)
            logger.debug(f"Layer {i}: blended {crop.width}x{crop.height} at ({x}, {y})")

        return result


def _blend_over(src: np.ndarray, dst: np.ndarray) -> np.ndarray:
    """
    Source-over blend of RGB channels

    out = src * a/255 + dst * (1 - a/255), rounded to nearest. Integer math
    keeps a == 0 and a == 255 exact.
    """
    alpha = src[:, :, 3:4].astype(np.uint32)
    blended = (
        src[:, :, :3].astype(np.uint32) * alpha
        + dst[:, :, :3].astype(np.uint32) * (255 - alpha)
        + 127
    ) // 255
    return blended.astype(np.uint8)
