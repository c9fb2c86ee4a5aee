"""
Mask color selection.
Picks the chroma-key background the renderer is asked to paint, keeping it
well away from the icon's own foreground color.
"""

import math
from typing import Optional, Union

from .pixels import Color

PRIMARY_MASK_COLOR_HEX = '#00b140'
SECONDARY_MASK_COLOR_HEX = '#0000FF'

PRIMARY_MASK_COLOR = Color(0, 177, 64)
SECONDARY_MASK_COLOR = Color(0, 0, 255)

# Minimum RGB distance between the foreground and the primary mask
COLOR_DISTANCE_THRESHOLD = 120


def parse_hex_color(text: Optional[str]) -> Optional[Color]:
    """Parse a hex color string, returning None for anything unparseable."""
    if text is None:
        return None
    return Color.from_hex(text)


def color_distance(a: Color, b: Color) -> float:
    """Euclidean distance in RGB space."""
    return math.sqrt((a.r - b.r) ** 2 + (a.g - b.g) ** 2 + (a.b - b.b) ** 2)


def select_mask_color(foreground: Union[Color, str, None] = None) -> Color:
    """
    Choose the mask color for an icon with the given foreground color.

    Args:
        foreground: The icon's foreground color (Color or hex string), or None

    Returns:
        PRIMARY_MASK_COLOR, or SECONDARY_MASK_COLOR when the foreground sits
        within COLOR_DISTANCE_THRESHOLD of the primary. The secondary is not
        checked against the foreground.
    """
    if not isinstance(foreground, Color):
        foreground = parse_hex_color(foreground)
    if foreground is None:
        return PRIMARY_MASK_COLOR

    if color_distance(foreground, PRIMARY_MASK_COLOR) < COLOR_DISTANCE_THRESHOLD:
        return SECONDARY_MASK_COLOR
    return PRIMARY_MASK_COLOR


def select_mask_color_hex(foreground: Union[Color, str, None] = None) -> str:
    """Same as select_mask_color, as the canonical hex string used in prompts."""
    if select_mask_color(foreground) == SECONDARY_MASK_COLOR:
        return SECONDARY_MASK_COLOR_HEX
    return PRIMARY_MASK_COLOR_HEX
