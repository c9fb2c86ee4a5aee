"""
Chroma-key background removal.
Keys out a flat mask-color background sampled from the top-left pixel and
neutralizes mask-color spill on the anti-aliased fringe of the artwork.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
import structlog
from PIL import Image

from .errors import ImageDecodeError
from .pixels import PixelBuffer

logger = structlog.get_logger()

# Distance bands, as multiples of the tolerance
BACKGROUND_MULTIPLIER = 1
EDGE_BAND_MULTIPLIER = 3

GREEN = 1
BLUE = 2


@dataclass
class KeyingReport:
    """Pixel counts for one keying pass."""
    background: int
    edge: int
    foreground: int
    despilled: int
    reference: Tuple[int, int, int]
    spill_channel: Optional[int]

    @property
    def total(self) -> int:
        return self.background + self.edge + self.foreground


class ChromaKeyer:
    """Distance-based chroma keying on RGBA pixel buffers."""

    @staticmethod
    def spill_channel(reference: Tuple[int, int, int]) -> Optional[int]:
        """
        Channel index dominating the background color.

        Only green and blue are recognized (the two mask colors). Returns
        None when neither strictly exceeds the other two channels.
        """
        r, g, b = (int(c) for c in reference)
        if g > r and g > b:
            return GREEN
        if b > r and b > g:
            return BLUE
        return None

    @staticmethod
    def _bands(rgb: np.ndarray, reference: np.ndarray, tolerance: int):
        diff = rgb.astype(np.int32) - reference.astype(np.int32)
        distance = np.sqrt(np.sum(diff * diff, axis=-1, dtype=np.int64))

        background = distance < tolerance * BACKGROUND_MULTIPLIER
        edge = ~background & (distance < tolerance * EDGE_BAND_MULTIPLIER)
        return background, edge

    @staticmethod
    def _spill_mask(rgb: np.ndarray, edge: np.ndarray, channel: Optional[int]) -> np.ndarray:
        if channel is None:
            return np.zeros(edge.shape, dtype=bool)
        others = [c for c in (0, 1, 2) if c != channel]
        target = rgb[..., channel]
        return edge & (target > rgb[..., others[0]]) & (target > rgb[..., others[1]])

    @staticmethod
    def _prepare(buffer: PixelBuffer, tolerance: int) -> np.ndarray:
        if tolerance < 0:
            raise ValueError(f"Tolerance must be non-negative, got {tolerance}")
        if buffer.pixel_count == 0:
            raise ImageDecodeError("Image has no pixels")
        return buffer.ensure_alpha().to_array()

    @staticmethod
    def classify(buffer: PixelBuffer, tolerance: int) -> KeyingReport:
        """Count how a keying pass would classify each pixel, without changing anything."""
        pixels = ChromaKeyer._prepare(buffer, tolerance)
        rgb = pixels[..., :3]
        reference = rgb[0, 0]

        background, edge = ChromaKeyer._bands(rgb, reference, tolerance)
        channel = ChromaKeyer.spill_channel(tuple(reference))
        spill = ChromaKeyer._spill_mask(rgb, edge, channel)

        n_background = int(np.count_nonzero(background))
        n_edge = int(np.count_nonzero(edge))
        return KeyingReport(
            background=n_background,
            edge=n_edge,
            foreground=buffer.pixel_count - n_background - n_edge,
            despilled=int(np.count_nonzero(spill)),
            reference=tuple(int(c) for c in reference),
            spill_channel=channel,
        )

    @staticmethod
    def remove_background(buffer: PixelBuffer, tolerance: int) -> PixelBuffer:
        """
        Make the sampled background transparent and de-spill the fringe.

        Args:
            buffer: RGB or RGBA pixels; pixel (0, 0) must be background
            tolerance: Distance below which a pixel counts as background

        Returns:
            A new RGBA buffer of the same size. The input is not modified.

        Raises:
            ImageDecodeError: buffer has no pixels
        """
        pixels = ChromaKeyer._prepare(buffer, tolerance)
        rgb = pixels[..., :3]
        reference = rgb[0, 0].copy()

        # 1. Classify by distance to the corner color
        background, edge = ChromaKeyer._bands(rgb, reference, tolerance)

        # 2. De-spill the fringe before touching alpha
        channel = ChromaKeyer.spill_channel(tuple(reference))
        spill = ChromaKeyer._spill_mask(rgb, edge, channel)
        if channel is not None:
            others = [c for c in (0, 1, 2) if c != channel]
            clamp = np.maximum(rgb[..., others[0]], rgb[..., others[1]])
            pixels[..., channel][spill] = clamp[spill]

        # 3. Background goes fully transparent, RGB left as-is
        pixels[..., 3][background] = 0

        logger.debug(
            "chroma_key.removed_background",
            size=buffer.size,
            tolerance=tolerance,
            reference=tuple(int(c) for c in reference),
            background=int(np.count_nonzero(background)),
            edge=int(np.count_nonzero(edge)),
            despilled=int(np.count_nonzero(spill)),
        )
        return PixelBuffer.from_array(pixels)

    @staticmethod
    def key_image(image: Image.Image, tolerance: int) -> Image.Image:
        """Pillow convenience wrapper around remove_background."""
        keyed = ChromaKeyer.remove_background(PixelBuffer.from_image(image), tolerance)
        return keyed.to_image()


def remove_background(buffer: PixelBuffer, tolerance: int) -> PixelBuffer:
    return ChromaKeyer.remove_background(buffer, tolerance)
