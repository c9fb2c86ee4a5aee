"""
Icon styles and the per-style keying parameters.
"""

from enum import Enum
from typing import Union

from .mask_color import select_mask_color
from .pixels import Color

# Monochrome styles (single color, outline) use the looser value
LOOSE_TOLERANCE = 50
DEFAULT_TOLERANCE = 25


class IconStyle(Enum):
    FLAT_SINGLE_COLOR = "Flat filled single color"
    FLAT_COLORED = "Flat colored"
    OUTLINE = "Outline"
    GRADIENT = "Gradient flat"
    ISOMETRIC = "Isometric"
    THREE_D = "3D render"

    @classmethod
    def parse(cls, value: Union['IconStyle', str]) -> 'IconStyle':
        """Accept a member, its display label, or its name (case-insensitive)."""
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for style in cls:
            if text.lower() in (style.value.lower(), style.name.lower()):
                return style
        raise ValueError(f"Unknown icon style: {value!r}")

    @property
    def is_monochrome(self) -> bool:
        """True for styles drawn in exactly the user's chosen color."""
        return self in (IconStyle.FLAT_SINGLE_COLOR, IconStyle.OUTLINE)


def tolerance_for_style(style: Union[IconStyle, str]) -> int:
    """Chroma-key tolerance to use for icons of this style."""
    if IconStyle.parse(style).is_monochrome:
        return LOOSE_TOLERANCE
    return DEFAULT_TOLERANCE


def foreground_for_style(style: Union[IconStyle, str], color: Union[Color, str, None]) -> Union[Color, str, None]:
    """
    The foreground color that constrains the mask choice.
    Multi-color styles pick their own palette, so only monochrome styles pass
    the user's color through.
    """
    if IconStyle.parse(style).is_monochrome:
        return color
    return None


def mask_color_for_style(style: Union[IconStyle, str], color: Union[Color, str, None] = None) -> Color:
    return select_mask_color(foreground_for_style(style, color))
