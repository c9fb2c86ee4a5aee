"""
Error types raised by the icon finalization pipeline.
Every error is scoped to a single image; callers processing a batch
catch PipelineError per variant and keep going.
"""


class PipelineError(Exception):
    """Base class for per-image processing failures."""


class ImageDecodeError(PipelineError):
    """Input bytes could not be parsed as a raster image, or the raster is empty."""


# Short name used by callers that only care about the failure category
DecodeError = ImageDecodeError


class DimensionError(PipelineError):
    """Pixel data length does not match width x height x channels."""
