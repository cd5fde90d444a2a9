"""
Individual plan operations.

Importing this package registers every operation with OperationRegistry.
"""

from .rotate import RotateOperation
from .zoom import ZoomOperation
from .autocontrast import AutoContrastOperation
from .clahe import ClaheOperation
from .denoise import DenoiseOperation
from .binarize import BinarizeOperation
from .brightness import BrightnessOperation
from .gamma import GammaOperation
from .sharpen import SharpenOperation
from .deskew import DeskewOperation

__all__ = [
    "RotateOperation",
    "ZoomOperation",
    "AutoContrastOperation",
    "ClaheOperation",
    "DenoiseOperation",
    "BinarizeOperation",
    "BrightnessOperation",
    "GammaOperation",
    "SharpenOperation",
    "DeskewOperation",
]
