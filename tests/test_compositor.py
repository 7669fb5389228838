import numpy as np
import pytest

from modules.canvas import CanvasBuilder
from modules.compositor import CompositionRequest, Compositor
from modules.layout import Layer
from modules.palette import ColorSpec
from utils.raster import RasterImage

NAVY = ColorSpec("navy", (30, 42, 69))


@pytest.fixture
def canvas():
    return CanvasBuilder().build(8, 8, NAVY.rgb)


def solid(width, height, rgba):
    return RasterImage.blank(width, height, rgba)


def test_transparent_layer_changes_nothing(canvas):
    result = Compositor().composite(canvas, [Layer(solid(8, 8, (255, 0, 0, 0)))])
    assert result == canvas


def test_opaque_layer_replaces_pixels(canvas):
    result = Compositor().composite(canvas, [Layer(solid(2, 2, (255, 0, 143, 255)), 3, 4)])

    assert result.get_pixel(3, 4) == (255, 0, 143, 255)
    assert result.get_pixel(4, 5) == (255, 0, 143, 255)
    assert result.get_pixel(5, 5) == (30, 42, 69, 255)


def test_opaque_layer_is_idempotent(canvas):
    layer = Layer(solid(4, 4, (0, 255, 220, 255)), 2, 2)
    once = Compositor().composite(canvas, [layer])
    twice = Compositor().composite(canvas, [layer, layer])
    assert once == twice


def test_half_alpha_blend():
    canvas = CanvasBuilder().build(1, 1, (0, 0, 0))
    result = Compositor().composite(canvas, [Layer(solid(1, 1, (255, 255, 255, 128)))])
    assert result.get_pixel(0, 0) == (128, 128, 128, 255)


def test_later_layers_paint_on_top(canvas):
    result = Compositor().composite(canvas, [
        Layer(solid(8, 8, (0, 255, 220, 255))),
        Layer(solid(1, 1, (255, 0, 143, 255)), 7, 7),
    ])
    assert result.get_pixel(0, 0) == (0, 255, 220, 255)
    assert result.get_pixel(7, 7) == (255, 0, 143, 255)


def test_negative_offset_is_clipped(canvas):
    result = Compositor().composite(canvas, [Layer(solid(4, 4, (255, 255, 255, 255)), -2, -3)])

    assert result.get_pixel(1, 0) == (255, 255, 255, 255)
    assert result.get_pixel(2, 0) == (30, 42, 69, 255)
    assert result.get_pixel(0, 1) == (30, 42, 69, 255)


def test_off_canvas_layer_is_skipped(canvas):
    result = Compositor().composite(canvas, [Layer(solid(4, 4, (255, 255, 255, 255)), 8, 0)])
    assert result == canvas


def test_canvas_is_not_modified(canvas):
    before = canvas.copy()
    Compositor().composite(canvas, [Layer(solid(8, 8, (255, 255, 255, 255)))])
    assert canvas == before


def test_output_stays_opaque(canvas, disc):
    result = Compositor().composite(canvas, [Layer(disc, -50, -50)])
    assert (result.alpha == 255).all()


def test_unsupported_blend(canvas):
    with pytest.raises(ValueError):
        Compositor().composite(canvas, [Layer(solid(1, 1, (0, 0, 0, 255)), blend="multiply")])


def test_compose_builds_background():
    request = CompositionRequest(width=5, height=3, background=NAVY)
    image = Compositor().compose(request)

    assert image.size == (5, 3)
    assert (image.pixels == np.array([30, 42, 69, 255], dtype=np.uint8)).all()
