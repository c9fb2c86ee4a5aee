"""PixelBuffer tests."""

import pytest

from chromaforge.core import DecodeError, DimensionError, ImageDecodeError, PixelBuffer
from tests.conftest import png_header_only, solid, to_png


class TestPixelBuffer:

    def test_length_must_match_dimensions(self) -> None:
        with pytest.raises(DimensionError):
            PixelBuffer(2, 2, bytes(15))

    def test_rejects_unsupported_channel_count(self) -> None:
        with pytest.raises(DimensionError):
            PixelBuffer(1, 1, bytes(2), channels=2)

    def test_rejects_negative_dimensions(self) -> None:
        with pytest.raises(DimensionError):
            PixelBuffer(-1, 0, b"")

    def test_transparent_factory(self) -> None:
        buffer = PixelBuffer.transparent(3, 2)
        assert buffer.size == (3, 2)
        assert buffer.data == bytes(24)

    def test_ensure_alpha_adds_opaque_channel(self) -> None:
        buffer = PixelBuffer.from_array(solid(2, 3, (1, 2, 3)))
        rgba = buffer.ensure_alpha()

        assert buffer.channels == 3
        assert rgba.channels == 4
        assert rgba.data == bytes([1, 2, 3, 255]) * 6

    def test_decode_png_keeps_pixels(self) -> None:
        array = solid(5, 4, (9, 8, 7), alpha=128)
        decoded = PixelBuffer.decode(to_png(array))

        assert decoded.size == (5, 4)
        assert decoded.mode == "RGBA"
        assert decoded.data == array.tobytes()

    def test_encode_produces_png(self) -> None:
        png = PixelBuffer.transparent(4, 4).encode()
        assert png.startswith(b"\x89PNG\r\n\x1a\n")
        assert PixelBuffer.decode(png).data == bytes(64)

    def test_decode_garbage_raises(self) -> None:
        with pytest.raises(ImageDecodeError):
            PixelBuffer.decode(b"definitely not an image")

    def test_decode_empty_raises(self) -> None:
        with pytest.raises(DecodeError):
            PixelBuffer.decode(b"")

    def test_decode_error_is_pipeline_error(self) -> None:
        from chromaforge.core import PipelineError
        assert issubclass(ImageDecodeError, PipelineError)
        assert issubclass(DimensionError, PipelineError)

    def test_decode_oversized_header_raises_decode_error(self) -> None:
        with pytest.raises(ImageDecodeError):
            PixelBuffer.decode(png_header_only(20000, 20000))
