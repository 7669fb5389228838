"""
Renderer Module - Avatar and social image pipelines
"""

from pathlib import Path
from typing import List, Optional

from loguru import logger

from config import settings
from modules.canvas import CanvasBuilder
from modules.compositor import Compositor, CompositionRequest
from modules.exporter import EncodedOutput, SizeConstrainedEncoder
from modules.layout import Layer, PlacementPlanner
from modules.palette import PaletteResolver
from modules.platforms import get_image_spec, logo_placement, text_style
from modules.silhouette import SilhouetteRecolorer
from modules.text import TextRenderer
from utils.raster import RasterImage, validate_dimensions
from utils.exceptions import NoShadowColorAvailableError, UnknownColorError
from utils.image_utils import (
    decode_and_resize,
    decode_image,
    load_image_bytes,
    resize_cover,
    to_grayscale,
)


class Renderer:
    """
    Renders final images: background canvas, optional silhouette,
    subject or logo, then text, encoded within the size budget
    """

    def __init__(
        self,
        palette: Optional[PaletteResolver] = None,
        planner: Optional[PlacementPlanner] = None,
        recolorer: Optional[SilhouetteRecolorer] = None,
        encoder: Optional[SizeConstrainedEncoder] = None,
        text_renderer: Optional[TextRenderer] = None,
        default_logo_path: Optional[Path] = None
    ):
        """
        Initialize Renderer

        Args:
            palette: Color resolver (default: brand colors)
            planner: Silhouette placement planner
            recolorer: Silhouette recolorer
            encoder: Size-constrained encoder
            text_renderer: Text overlay renderer
            default_logo_path: Logo used for the "logo" type when none is given
        """
        self.palette = palette or PaletteResolver()
        self.planner = planner or PlacementPlanner()
        self.recolorer = recolorer or SilhouetteRecolorer()
        self.encoder = encoder or SizeConstrainedEncoder()
        self.text_renderer = text_renderer or TextRenderer()
        self.default_logo_path = Path(default_logo_path or settings.DEFAULT_LOGO_PATH)
        self.compositor = Compositor(CanvasBuilder())

        logger.info("Renderer initialized")

    def silhouette_layer(self, subject: RasterImage, background: str, canvas_size: int) -> Layer:
        """
        Build the clipped shadow silhouette layer for a subject

        Args:
            subject: Decoded subject cutout (any size)
            background: Background color name
            canvas_size: Square canvas size

        Returns:
            Silhouette layer placed on the canvas
        """
        shadow_name = self.recolorer.shadow_color_for(background)
        try:
            shadow = self.palette.resolve(shadow_name)
        except UnknownColorError as e:
            raise NoShadowColorAvailableError(background) from e

        size = self.planner.silhouette_size(canvas_size)
        silhouette = self.recolorer.recolor(resize_cover(subject, size, size), shadow.rgb)

        logger.debug(f"Silhouette color for {background}: {shadow.name} ({shadow.hex})")
        return self.planner.place_silhouette(silhouette, canvas_size)

    def create_avatar(
        self,
        subject_bytes: bytes,
        color: str,
        size: int = None,
        grayscale: bool = False,
        with_shadow: bool = True,
        fmt: str = "png",
        byte_budget: Optional[int] = None
    ) -> EncodedOutput:
        """
        Generate square avatar with brand color background

        Args:
            subject_bytes: Cut-out portrait (PNG with transparency)
            color: Brand color name
            size: Output size in pixels (square)
            grayscale: Convert the portrait (not the background) to grayscale
            with_shadow: Add the offset shadow silhouette behind the portrait
            fmt: Output format
            byte_budget: Maximum output size in bytes

        Returns:
            Encoded avatar
        """
        size = settings.AVATAR_DEFAULT_SIZE if size is None else size
        validate_dimensions(size, size)
        background = self.palette.resolve(color)

        logger.info(f"Generating {size}x{size}px avatar with {background.name} background...")

        source = decode_image(subject_bytes)

        layers: List[Layer] = []
        if with_shadow:
            layers.append(self.silhouette_layer(source, background.name, size))

        subject = resize_cover(source, size, size)
        if grayscale:
            subject = to_grayscale(subject)
        layers.append(Layer(image=subject, left=0, top=0))

        request = CompositionRequest(
            width=size,
            height=size,
            background=background,
            layers=tuple(layers),
            output_format=fmt,
            byte_budget=byte_budget,
        )
        return self._render(request)

    def create_social_image(
        self,
        image_type: str,
        color: str = "navy",
        logo_bytes: Optional[bytes] = None,
        text: Optional[str] = None,
        fmt: Optional[str] = None,
        use_recommended: bool = True,
        byte_budget: Optional[int] = None
    ) -> EncodedOutput:
        """
        Generate LinkedIn image

        Args:
            image_type: logo, title, culture-main, culture-module, photo, post
            color: Brand color name
            logo_bytes: Encoded logo (raster formats only)
            text: Optional text overlay
            fmt: Output format (default: png for logo, jpeg otherwise)
            use_recommended: Recommended instead of minimum dimensions
            byte_budget: Maximum output size in bytes

        Returns:
            Encoded image
        """
        spec = get_image_spec(image_type)
        width, height = spec.dimensions(use_recommended)
        background = self.palette.resolve(color)
        fmt = fmt or spec.default_format

        logger.info(f"Generating {image_type} image: {width}x{height}px with {background.name} background...")

        layers: List[Layer] = []

        if logo_bytes is None and image_type == "logo":
            if self.default_logo_path.exists():
                logo_bytes = load_image_bytes(self.default_logo_path)
            else:
                logger.warning(f"Logo not found: {self.default_logo_path}, skipping logo overlay")

        if logo_bytes is not None:
            placement = logo_placement(image_type, width, height)
            logo = decode_and_resize(logo_bytes, placement.size, placement.size, fit="contain")
            layers.append(Layer(image=logo, left=placement.x, top=placement.y))

        if text:
            style = text_style(image_type, width, height)
            overlay = self.text_renderer.render(text, width, height, style.font_size, style.x, style.y)
            layers.append(Layer(image=overlay, left=0, top=0))

        request = CompositionRequest(
            width=width,
            height=height,
            background=background,
            layers=tuple(layers),
            output_format=fmt,
            byte_budget=byte_budget,
        )
        return self._render(request)

    def _render(self, request: CompositionRequest) -> EncodedOutput:
        image = self.compositor.compose(request)
        output = self.encoder.encode(image, request.output_format, request.byte_budget)

        logger.info(
            f"Rendered {request.width}x{request.height} {output.format}: "
            f"{output.size_mb:.2f}MB ({len(request.layers)} layers)"
        )
        return output
