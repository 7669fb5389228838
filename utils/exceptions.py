"""
Custom exceptions for Brand Image Generator
"""


class CompositionError(Exception):
    """Base class for all errors raised while building an image."""


class InvalidDimensionsError(CompositionError):
    """
    Raised when a canvas or raster size is not a positive integer.
    """

    def __init__(self, width, height, message: str = None):
        self.width = width
        self.height = height
        self.message = message or (
            f"Invalid dimensions: {width!r}x{height!r}. Must be positive integers"
        )
        super().__init__(self.message)


class UnknownColorError(CompositionError):
    """
    Raised when a color name is not part of the active palette
    (or a hex value in the palette cannot be parsed).
    """

    def __init__(self, name, available=None, message: str = None):
        self.name = name
        self.available = list(available or [])
        if message is None:
            message = f"Invalid color: {name!r}"
            if self.available:
                message += f". Must be one of: {', '.join(self.available)}"
        self.message = message
        super().__init__(self.message)


class NoShadowColorAvailableError(CompositionError):
    """
    Raised when the shadow color table has no candidate for a background.

    This is a configuration defect: every recognized background color
    must have at least one shadow color.
    """

    def __init__(self, background: str):
        self.background = background
        self.message = f"No shadow color configured for background {background!r}"
        super().__init__(self.message)


class EmptyVisibleRegionError(CompositionError):
    """
    Raised when a planned silhouette would not be visible on the canvas.

    Signals broken offset/size constants, never bad user input.
    """

    def __init__(self, canvas_size: int, crop):
        self.canvas_size = canvas_size
        self.crop = crop
        self.message = (
            f"Silhouette has no visible region on a {canvas_size}px canvas (crop={crop})"
        )
        super().__init__(self.message)


class UnsupportedFormatError(CompositionError):
    """Raised when an image format cannot be decoded or encoded."""

    def __init__(self, fmt, message: str = None):
        self.format = fmt
        self.message = message or f"Unsupported image format: {fmt!r}"
        super().__init__(self.message)


class CorruptImageError(CompositionError):
    """Raised when input bytes look like an image but fail to decode."""

    def __init__(self, reason: str):
        self.reason = reason
        self.message = f"Corrupt image: {reason}"
        super().__init__(self.message)


class UnknownImageTypeError(CompositionError):
    """Raised when a platform image type preset does not exist."""

    def __init__(self, image_type: str, available=None):
        self.image_type = image_type
        self.available = list(available or [])
        self.message = (
            f"Invalid type: {image_type!r}. Must be one of: {', '.join(self.available)}"
        )
        super().__init__(self.message)
