"""
Palette Module - Resolve brand color names to RGB values
"""

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from loguru import logger

from config import settings
from utils.exceptions import UnknownColorError

# Brand colors used when colors.json is unavailable
BRAND_COLORS: Dict[str, str] = {
    "aqua": "#00FFDC",
    "navy": "#1E2A45",
    "fuchsia": "#FF008F",
}

_HEX_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


@dataclass(frozen=True)
class ColorSpec:
    """Named brand color resolved to RGB"""
    name: str
    rgb: Tuple[int, int, int]

    @property
    def hex(self) -> str:
        return "#{:02X}{:02X}{:02X}".format(*self.rgb)


def hex_to_rgb(hex_value: str) -> Tuple[int, int, int]:
    """
    Parse hex color to RGB

    Args:
        hex_value: Hex color string (e.g. "#00FFDC" or "00ffdc")

    Returns:
        (r, g, b) tuple with values 0-255
    """
    match = _HEX_RE.match(hex_value.strip()) if isinstance(hex_value, str) else None
    if match is None:
        raise UnknownColorError(hex_value, message=f"Invalid color hex: {hex_value!r}")
    return tuple(int(part, 16) for part in match.groups())


def load_brand_colors(colors_path: Optional[Path] = None) -> Dict[str, str]:
    """
    Load brand colors from colors.json

    The file is expected to look like
    ``{"selection": {"aqua": {"hex": "#00FFDC"}, ...}}``. Missing or broken
    files fall back to the built-in brand colors.

    Args:
        colors_path: Path to colors.json (default: settings.COLORS_FILE)

    Returns:
        Mapping of lower-case color name to hex string
    """
    colors_path = Path(colors_path or settings.COLORS_FILE)

    try:
        with open(colors_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        colors = {
            name.lower(): entry["hex"]
            for name, entry in data["selection"].items()
        }
        if not colors:
            raise ValueError("empty selection")
        logger.debug(f"Loaded {len(colors)} brand colors from {colors_path}")
        return colors

    except FileNotFoundError:
        logger.debug(f"{colors_path} not found, using default brand colors")
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        logger.warning(f"Could not load {colors_path}, using defaults: {e}")

    return dict(BRAND_COLORS)


class PaletteResolver:
    """
    Maps brand color names to ColorSpec values (case-insensitive)
    """

    def __init__(self, colors: Optional[Dict[str, str]] = None):
        """
        Initialize PaletteResolver

        Args:
            colors: Mapping of color name to hex (default: load_brand_colors())
        """
        source = colors if colors is not None else load_brand_colors()
        self._colors: Dict[str, ColorSpec] = {}
        for name, hex_value in source.items():
            key = name.lower()
            self._colors[key] = ColorSpec(name=key, rgb=hex_to_rgb(hex_value))

        logger.info(f"PaletteResolver initialized with colors: {self.names()}")

    def names(self) -> List[str]:
        return list(self._colors)

    def resolve(self, name: str) -> ColorSpec:
        """
        Resolve a color name

        Args:
            name: Brand color name (any case)

        Returns:
            Resolved ColorSpec
        """
        key = name.lower().strip() if isinstance(name, str) else None
        if key not in self._colors:
            raise UnknownColorError(name, self.names())
        return self._colors[key]

    def __contains__(self, name) -> bool:
        return isinstance(name, str) and name.lower().strip() in self._colors
