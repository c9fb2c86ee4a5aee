"""
Icon finalization pipeline.
Chains chroma keying and padding for a single rendered image, and runs
batches of variants on a bounded worker pool.
"""

import base64
import binascii
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

import structlog

from chromaforge.settings import get_settings

from .chroma_key import ChromaKeyer
from .errors import ImageDecodeError, PipelineError
from .padding import PaddingCompositor
from .pixels import PixelBuffer
from .styles import IconStyle, tolerance_for_style

logger = structlog.get_logger()

DATA_URL_PREFIX = "data:image/png;base64,"


def encode_base64(png: bytes) -> str:
    return base64.b64encode(png).decode("ascii")


def decode_base64(text: str) -> bytes:
    """
    Decode raw base64 or a data URL into bytes.

    Raises:
        ImageDecodeError: text is not valid base64
    """
    payload = text.strip()
    if payload.startswith("data:"):
        _, _, payload = payload.partition(",")
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageDecodeError(f"Invalid base64 image data: {e}") from e


@dataclass
class VariantResult:
    """Outcome for one image in a batch, keyed by its input position."""
    index: int
    png: Optional[bytes] = None
    error: Optional[PipelineError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.png is not None

    @property
    def base64(self) -> Optional[str]:
        return encode_base64(self.png) if self.png is not None else None

    @property
    def data_url(self) -> Optional[str]:
        return DATA_URL_PREFIX + self.base64 if self.png is not None else None


def successful(results: Sequence[VariantResult]) -> List[bytes]:
    """PNG bytes of the variants that succeeded, in input order."""
    return [r.png for r in sorted(results, key=lambda r: r.index) if r.ok]


class IconFinalizer:
    """Turns rendered mask-color images into transparent, padded icons."""

    def __init__(self, style: Union[IconStyle, str] = IconStyle.FLAT_SINGLE_COLOR,
                 padding: int = 0, tolerance: Optional[int] = None):
        self.style = IconStyle.parse(style)
        self.padding = padding
        self.tolerance = tolerance_for_style(self.style) if tolerance is None else tolerance

        if self.tolerance < 0:
            raise ValueError(f"Tolerance must be non-negative, got {self.tolerance}")

    def finalize_buffer(self, buffer: PixelBuffer) -> PixelBuffer:
        keyed = ChromaKeyer.remove_background(buffer, self.tolerance)
        return PaddingCompositor.add_padding(keyed, self.padding)

    def finalize(self, png: bytes) -> bytes:
        """Decode, key, pad and re-encode one image."""
        buffer = PixelBuffer.decode(png)
        return self.finalize_buffer(buffer).encode()

    def _finalize_variant(self, index: int, png: bytes) -> VariantResult:
        with structlog.contextvars.bound_contextvars(variant=index):
            try:
                return VariantResult(index, png=self.finalize(png))
            except PipelineError as e:
                logger.warning("pipeline.variant_failed", error=str(e), error_type=type(e).__name__)
                return VariantResult(index, error=e)

    def finalize_batch(self, images: Sequence[bytes], max_workers: Optional[int] = None) -> List[VariantResult]:
        """
        Finalize every image independently.

        Args:
            images: Encoded images, one per variant
            max_workers: Pool size; defaults to the configured max_workers

        Returns:
            One VariantResult per input, in input order. A failing variant
            carries its error; the others are unaffected.
        """
        if not images:
            return []

        if max_workers is None:
            max_workers = get_settings().max_workers
        max_workers = max(1, min(max_workers, len(images)))

        results: List[Optional[VariantResult]] = [None] * len(images)

        # Leaving the executor waits for started variants to finish
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = {executor.submit(self._finalize_variant, i, png): i for i, png in enumerate(images)}
            for future in as_completed(futures):
                results[futures[future]] = future.result()

        failed = sum(1 for r in results if not r.ok)
        logger.info(
            "pipeline.batch_finished",
            style=self.style.value,
            variants=len(images),
            failed=failed,
            tolerance=self.tolerance,
            padding=self.padding,
        )
        return results
