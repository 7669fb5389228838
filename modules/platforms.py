"""
Platform presets - LinkedIn image types, sizes and element placement
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from utils.exceptions import UnknownImageTypeError


@dataclass(frozen=True)
class ImageSpec:
    """Size requirements for one platform image type"""
    name: str
    min_size: Tuple[int, int]
    recommended_size: Tuple[int, int]
    description: str

    def dimensions(self, use_recommended: bool = True) -> Tuple[int, int]:
        return self.recommended_size if use_recommended else self.min_size

    @property
    def default_format(self) -> str:
        # Logos keep crisp edges, photos compress better as JPEG
        return "png" if self.name == "logo" else "jpeg"


LINKEDIN_SPECS: Dict[str, ImageSpec] = {
    "logo": ImageSpec("logo", (268, 268), (400, 400), "Logo image for company page"),
    "title": ImageSpec("title", (4200, 700), (4200, 700), "Title image for company page"),
    "culture-main": ImageSpec("culture-main", (1128, 376), (1128, 376), "Company culture main image"),
    "culture-module": ImageSpec("culture-module", (502, 282), (502, 282), "Company culture custom module image"),
    "photo": ImageSpec("photo", (264, 176), (900, 600), "Company photo"),
    "post": ImageSpec("post", (200, 105), (1200, 627), "Custom post image (1.91:1 ratio)"),
}


@dataclass
class LogoPlacement:
    size: int
    x: int
    y: int


@dataclass
class TextStyle:
    font_size: int
    x: int
    y: int


def get_image_spec(image_type: str) -> ImageSpec:
    """
    Look up a LinkedIn image type

    Args:
        image_type: One of LINKEDIN_SPECS keys

    Returns:
        ImageSpec
    """
    spec = LINKEDIN_SPECS.get(image_type)
    if spec is None:
        raise UnknownImageTypeError(image_type, LINKEDIN_SPECS.keys())
    return spec


def logo_placement(image_type: str, width: int, height: int) -> LogoPlacement:
    """
    Logo size and top-left position for an image type

    logo: 80% of the smaller side, centered
    title: 40% of height, left side, vertically centered
    others: 30% of the smaller side, top-left corner with 5% padding
    """
    if image_type == "logo":
        size = int(min(width, height) * 0.8)
        return LogoPlacement(size, (width - size) // 2, (height - size) // 2)
    if image_type == "title":
        size = int(height * 0.4)
        return LogoPlacement(size, int(width * 0.05), (height - size) // 2)

    size = int(min(width, height) * 0.3)
    return LogoPlacement(size, int(width * 0.05), int(height * 0.05))


def text_style(image_type: str, width: int, height: int) -> TextStyle:
    """Font size and anchor point (text middle) for an image type"""
    if image_type == "title":
        return TextStyle(int(height * 0.15), int(width * 0.6), height // 2)
    if image_type == "post":
        return TextStyle(int(height * 0.12), width // 2, height // 2)
    return TextStyle(int(min(width, height) * 0.08), width // 2, height // 2)
