"""
Core processing for ChromaForge.
"""

from .errors import PipelineError, ImageDecodeError, DecodeError, DimensionError
from .pixels import Color, PixelBuffer
from .mask_color import (
    PRIMARY_MASK_COLOR, SECONDARY_MASK_COLOR, COLOR_DISTANCE_THRESHOLD,
    color_distance, parse_hex_color, select_mask_color, select_mask_color_hex,
)
from .styles import IconStyle, tolerance_for_style, mask_color_for_style
from .chroma_key import ChromaKeyer, KeyingReport, remove_background
from .padding import PaddingCompositor, add_padding
from .pipeline import IconFinalizer, VariantResult, successful

__all__ = [
    'PipelineError', 'ImageDecodeError', 'DecodeError', 'DimensionError',
    'Color', 'PixelBuffer',
    'PRIMARY_MASK_COLOR', 'SECONDARY_MASK_COLOR', 'COLOR_DISTANCE_THRESHOLD',
    'color_distance', 'parse_hex_color', 'select_mask_color', 'select_mask_color_hex',
    'IconStyle', 'tolerance_for_style', 'mask_color_for_style',
    'ChromaKeyer', 'KeyingReport', 'remove_background',
    'PaddingCompositor', 'add_padding',
    'IconFinalizer', 'VariantResult', 'successful',
]
