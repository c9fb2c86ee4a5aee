"""ChromaForge - Pytest Configuration.

Shared fixtures: synthetic mask-color renders built with numpy/Pillow.
"""

import struct
import zlib
from io import BytesIO

import numpy as np
import pytest
import structlog
from PIL import Image

from chromaforge.core import PixelBuffer

GREEN_MASK = (0, 177, 64)
BLUE_MASK = (0, 0, 255)


def solid(width, height, rgb, alpha=None):
    channels = 3 if alpha is None else 4
    fill = tuple(rgb) if alpha is None else tuple(rgb) + (alpha,)
    array = np.empty((height, width, channels), dtype=np.uint8)
    array[...] = fill
    return array


def to_png(array: np.ndarray) -> bytes:
    out = BytesIO()
    Image.fromarray(array).save(out, format="PNG")
    return out.getvalue()


def png_header_only(width, height):
    """A PNG declaring width x height RGB with no pixel data behind it."""
    def chunk(kind, body):
        crc = zlib.crc32(kind + body) & 0xFFFFFFFF
        return struct.pack(">I", len(body)) + kind + body + struct.pack(">I", crc)

    header = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    return b"\x89PNG\r\n\x1a\n" + chunk(b"IHDR", header) + chunk(b"IEND", b"")


@pytest.fixture
def green_render():
    """512x512 green-mask render with a black 200x200 square at (156, 156)."""
    array = solid(512, 512, GREEN_MASK)
    array[156:356, 156:356] = (0, 0, 0)
    return array


@pytest.fixture
def green_render_png(green_render):
    return to_png(green_render)


@pytest.fixture
def make_buffer():
    """Build an RGBA PixelBuffer from a background color plus pixel overrides."""
    def _make(width, height, background, pixels=None):
        array = solid(width, height, background, alpha=255)
        for (x, y), rgb in (pixels or {}).items():
            array[y, x, :3] = rgb
        return PixelBuffer.from_array(array)
    return _make


@pytest.fixture(autouse=True)
def reset_logging():
    """setup_logging binds the current sys.stderr; drop it once the test's capture closes."""
    yield
    structlog.reset_defaults()
