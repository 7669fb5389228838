"""
Layout Engine - Placement and clipping of layers on the canvas
"""

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from loguru import logger

from config import settings
from utils.raster import CropBox, RasterImage, validate_dimensions
from utils.exceptions import EmptyVisibleRegionError

BLEND_OVER = "over"


@dataclass
class Position:
    """Position with x, y coordinates"""
    x: int
    y: int


@dataclass
class Layer:
    """Raster placed on the canvas at (left, top)"""
    image: RasterImage
    left: int = 0
    top: int = 0
    blend: str = BLEND_OVER


@dataclass(frozen=True)
class OffsetBand:
    """Shadow offset rule for canvases up to max_size (inclusive)"""
    name: str
    max_size: int
    multiplier: float
    min_offset: int


@dataclass
class SilhouettePlacement:
    """Where the silhouette lands on a square canvas"""
    canvas_size: int
    size: int
    band: OffsetBand
    offset: int
    placed: Position
    crop: CropBox

    @property
    def position(self) -> Position:
        """Top-left corner of the cropped silhouette on the canvas"""
        return Position(max(0, self.placed.x), max(0, self.placed.y))


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def visible_region(
    layer_w: int,
    layer_h: int,
    left: int,
    top: int,
    canvas_w: int,
    canvas_h: int
) -> CropBox:
    """
    Part of a layer that falls inside the canvas, in layer coordinates

    The box may be empty (width or height <= 0) when the layer lies
    completely outside the canvas.
    """
    return CropBox(
        left=max(0, -left),
        top=max(0, -top),
        right=min(layer_w, canvas_w - left),
        bottom=min(layer_h, canvas_h - top),
    )


def bands_from_settings(rows: Iterable[Sequence]) -> List[OffsetBand]:
    """Build OffsetBand table from (name, max_size, multiplier, min_offset) rows"""
    return [OffsetBand(str(name), int(max_size), float(mult), int(min_off))
            for name, max_size, mult, min_off in rows]


class PlacementPlanner:
    """
    Plans silhouette placement on square canvases.

    The silhouette is scaled past the canvas size, centered, then shifted
    up-and-left by an offset taken from a size-banded table. Bands are
    scanned in ascending max_size order and the first band with
    ``canvas_size <= max_size`` wins.
    """

    def __init__(
        self,
        bands: Optional[Sequence[OffsetBand]] = None,
        silhouette_multiplier: Optional[float] = None
    ):
        """
        Initialize PlacementPlanner

        Args:
            bands: Offset bands (default: settings.SHADOW_OFFSET_BANDS)
            silhouette_multiplier: Silhouette size / canvas size
                (default: settings.SILHOUETTE_SIZE_MULTIPLIER)
        """
        if bands is None:
            bands = bands_from_settings(settings.SHADOW_OFFSET_BANDS)
        if not bands:
            raise ValueError("At least one offset band is required")

        self.bands: Tuple[OffsetBand, ...] = tuple(sorted(bands, key=lambda b: b.max_size))
        self.silhouette_multiplier = (
            silhouette_multiplier
            if silhouette_multiplier is not None
            else settings.SILHOUETTE_SIZE_MULTIPLIER
        )

        logger.debug(
            f"PlacementPlanner initialized (bands={[b.name for b in self.bands]}, "
            f"multiplier={self.silhouette_multiplier})"
        )

    def band_for(self, canvas_size: int) -> OffsetBand:
        """
        Select offset band for canvas size

        Canvases larger than every band use the largest band.
        """
        for band in self.bands:
            if canvas_size <= band.max_size:
                return band
        return self.bands[-1]

    def offset_for(self, canvas_size: int) -> int:
        band = self.band_for(canvas_size)
        return max(band.min_offset, round_half_up(canvas_size * band.multiplier))

    def silhouette_size(self, canvas_size: int) -> int:
        return max(1, math.floor(canvas_size * self.silhouette_multiplier))

    def plan_silhouette(self, canvas_size: int) -> SilhouettePlacement:
        """
        Compute silhouette size, offset, placement and visible crop

        Args:
            canvas_size: Side length of the square canvas

        Returns:
            SilhouettePlacement
        """
        validate_dimensions(canvas_size, canvas_size)

        size = self.silhouette_size(canvas_size)
        band = self.band_for(canvas_size)
        offset = self.offset_for(canvas_size)

        center = (canvas_size - size) // 2
        placed = Position(center - offset, center - offset)

        crop = visible_region(size, size, placed.x, placed.y, canvas_size, canvas_size)
        if crop.is_empty:
            raise EmptyVisibleRegionError(canvas_size, crop)

        logger.debug(
            f"Silhouette plan: canvas={canvas_size}px size={size}px band={band.name} "
            f"offset={offset}px placed=({placed.x}, {placed.y}) crop={crop}"
        )

        return SilhouettePlacement(
            canvas_size=canvas_size,
            size=size,
            band=band,
            offset=offset,
            placed=placed,
            crop=crop,
        )

    def place_silhouette(self, silhouette: RasterImage, canvas_size: int) -> Layer:
        """
        Clip a silhouette raster to the canvas and return it as a layer

        Args:
            silhouette: Silhouette raster of silhouette_size(canvas_size) pixels
            canvas_size: Side length of the square canvas

        Returns:
            Layer holding only the visible part of the silhouette
        """
        plan = self.plan_silhouette(canvas_size)
        if silhouette.size != (plan.size, plan.size):
            raise ValueError(
                f"Silhouette is {silhouette.width}x{silhouette.height}, "
                f"expected {plan.size}x{plan.size}"
            )

        position = plan.position
        return Layer(image=silhouette.crop(plan.crop), left=position.x, top=position.y)
