"""
Brand Image Generator Modules
"""

from .palette import PaletteResolver, ColorSpec
from .canvas import CanvasBuilder
from .silhouette import SilhouetteRecolorer
from .layout import PlacementPlanner, Layer
from .compositor import Compositor, CompositionRequest
from .exporter import SizeConstrainedEncoder, EncodedOutput, Exporter
from .text import TextRenderer
from .renderer import Renderer
from .batch import SampleGenerator, SocialSampleGenerator

__all__ = [
    "PaletteResolver",
    "ColorSpec",
    "CanvasBuilder",
    "SilhouetteRecolorer",
    "PlacementPlanner",
    "Layer",
    "Compositor",
    "CompositionRequest",
    "SizeConstrainedEncoder",
    "EncodedOutput",
    "Exporter",
    "TextRenderer",
    "Renderer",
    "SampleGenerator",
    "SocialSampleGenerator",
]
