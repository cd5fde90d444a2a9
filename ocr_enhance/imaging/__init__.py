"""
Image operation engine.

Executes enhancement plan steps (rotate, zoom, autocontrast, clahe,
denoise, binarize, brightness, gamma, sharpen, deskew) against images.
"""

from .base import ImageOperation, OperationKind, ParamBag, StepResult
from .codec import OUTPUT_EXTENSION, decode_image, encode_png
from .processor import ImageProcessor
from .registry import OperationRegistry

__all__ = [
    "ImageOperation",
    "OperationKind",
    "ParamBag",
    "StepResult",
    "OUTPUT_EXTENSION",
    "decode_image",
    "encode_png",
    "ImageProcessor",
    "OperationRegistry",
]
