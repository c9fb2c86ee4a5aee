"""
Pixel containers for ChromaForge.
Handles color values, raw RGBA/RGB buffers, and PNG decode/encode.
"""

import re
from dataclasses import dataclass
from io import BytesIO
from typing import Optional, Tuple

import numpy as np
from PIL import Image, UnidentifiedImageError

from .errors import DimensionError, ImageDecodeError

_HEX_PATTERN = re.compile(r'^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$', re.IGNORECASE)

_MODES = {3: 'RGB', 4: 'RGBA'}


@dataclass(frozen=True)
class Color:
    """An 8-bit RGB color."""

    r: int
    g: int
    b: int

    def __post_init__(self):
        for name in ('r', 'g', 'b'):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"Channel {name}={value} outside 0-255")

    @classmethod
    def from_hex(cls, text: str) -> Optional['Color']:
        """Parse '#rrggbb' or 'rrggbb'. Returns None when the text is not a hex color."""
        if not isinstance(text, str):
            return None
        match = _HEX_PATTERN.match(text.strip())
        if not match:
            return None
        return cls(*(int(part, 16) for part in match.groups()))

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


@dataclass
class PixelBuffer:
    """
    A row-major raster of interleaved channel bytes.

    channels is 4 for RGBA (the pipeline's working format) or 3 for RGB
    input that still needs an alpha channel.
    """

    width: int
    height: int
    data: bytes
    channels: int = 4

    def __post_init__(self):
        if self.channels not in _MODES:
            raise DimensionError(f"Unsupported channel count: {self.channels}")
        if self.width < 0 or self.height < 0:
            raise DimensionError(f"Negative dimensions: {self.width}x{self.height}")

        expected = self.width * self.height * self.channels
        if len(self.data) != expected:
            raise DimensionError(
                f"Buffer holds {len(self.data)} bytes, expected {expected} "
                f"for {self.width}x{self.height}x{self.channels}"
            )

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    @property
    def mode(self) -> str:
        return _MODES[self.channels]

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    # --- Constructors ---

    @classmethod
    def transparent(cls, width: int, height: int) -> 'PixelBuffer':
        """Fully transparent RGBA buffer (all bytes zero)."""
        return cls(width, height, bytes(width * height * 4))

    @classmethod
    def from_image(cls, image: Image.Image) -> 'PixelBuffer':
        """Capture a Pillow image. Anything that isn't RGB is converted to RGBA."""
        if image.mode not in ('RGB', 'RGBA'):
            image = image.convert('RGBA')
        width, height = image.size
        return cls(width, height, image.tobytes(), channels=len(image.mode))

    @classmethod
    def from_array(cls, array: np.ndarray) -> 'PixelBuffer':
        """Build from an (H, W, 3|4) uint8 array."""
        if array.ndim != 3:
            raise DimensionError(f"Expected an (H, W, C) array, got shape {array.shape}")
        height, width, channels = array.shape
        return cls(width, height, np.ascontiguousarray(array, dtype=np.uint8).tobytes(), channels=channels)

    @classmethod
    def decode(cls, payload: bytes) -> 'PixelBuffer':
        """
        Decode PNG (or any Pillow-readable raster) bytes.

        Raises:
            ImageDecodeError: payload is empty or not a readable image
        """
        if not payload:
            raise ImageDecodeError("Image payload is empty")
        try:
            with Image.open(BytesIO(payload)) as image:
                image.load()
                return cls.from_image(image)
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
            raise ImageDecodeError(f"Could not decode image: {e}") from e

    # --- Conversions ---

    def to_array(self) -> np.ndarray:
        """Writable (H, W, C) uint8 copy of the pixel data."""
        flat = np.frombuffer(self.data, dtype=np.uint8)
        return flat.reshape((self.height, self.width, self.channels)).copy()

    def to_image(self) -> Image.Image:
        return Image.frombytes(self.mode, self.size, bytes(self.data))

    def encode(self) -> bytes:
        """Encode as PNG, keeping the alpha channel when present."""
        if self.pixel_count == 0:
            raise DimensionError("Cannot encode an empty image")
        out = BytesIO()
        self.to_image().save(out, format='PNG')
        return out.getvalue()

    def ensure_alpha(self) -> 'PixelBuffer':
        """Return an RGBA buffer, synthesizing fully opaque alpha for RGB input."""
        if self.channels == 4:
            return self
        rgb = self.to_array()
        alpha = np.full((self.height, self.width, 1), 255, dtype=np.uint8)
        return PixelBuffer.from_array(np.concatenate([rgb, alpha], axis=2))
