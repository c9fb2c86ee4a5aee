"""
Transparent padding for keyed icons.
Shrinks the artwork and re-centers it so the canvas keeps its original size.
"""

import structlog
from PIL import Image

from .pixels import PixelBuffer

logger = structlog.get_logger()


class PaddingCompositor:
    """Adds a uniform transparent margin without changing canvas dimensions."""

    RESAMPLE = Image.Resampling.LANCZOS

    @staticmethod
    def inset_size(width: int, height: int, padding: int):
        """Size of the artwork area left inside the margin (may be <= 0)."""
        return width - padding * 2, height - padding * 2

    @staticmethod
    def add_padding(buffer: PixelBuffer, padding: int) -> PixelBuffer:
        """
        Scale the artwork into the inset region and center it on a clear canvas.

        Args:
            buffer: Keyed image (RGB input gets an opaque alpha channel)
            padding: Margin in pixels on every side; <= 0 means no padding

        Returns:
            The input buffer itself when padding <= 0, a fully transparent
            buffer when the margin leaves no room for artwork, otherwise a
            new RGBA buffer of the original size.
        """
        if padding <= 0:
            return buffer

        width, height = buffer.size
        new_width, new_height = PaddingCompositor.inset_size(width, height, padding)

        if new_width <= 0 or new_height <= 0:
            logger.debug("padding.no_room_for_artwork", size=buffer.size, padding=padding)
            return PixelBuffer.transparent(width, height)

        artwork = buffer.ensure_alpha().to_image()
        resized = artwork.resize((new_width, new_height), PaddingCompositor.RESAMPLE)

        # Plain paste: the canvas is empty, so the resized pixels are copied as-is
        canvas = Image.new('RGBA', (width, height), (0, 0, 0, 0))
        canvas.paste(resized, (padding, padding))

        return PixelBuffer.from_image(canvas)


def add_padding(buffer: PixelBuffer, padding: int) -> PixelBuffer:
    return PaddingCompositor.add_padding(buffer, padding)
