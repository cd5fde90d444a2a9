"""
Noise removal step.
"""

from dataclasses import dataclass

import cv2
import numpy as np

from ..base import ImageOperation, OperationKind, ParamBag
from ..registry import OperationRegistry


@dataclass(frozen=True)
class DenoiseParams:
    strength: str = "light"
    """'light', 'medium' or 'strong'; anything else behaves like 'light'."""


@OperationRegistry.register
class DenoiseOperation(ImageOperation[DenoiseParams]):
    """
    Removes noise with filters chosen by strength.

    - 'light': 3x3 median filter
    - 'medium': 5x5 median filter
    - 'strong': bilateral filter (slower, keeps edges better)
    """

    @property
    def kind(self) -> OperationKind:
        return OperationKind.DENOISE

    def parse_params(self, bag: ParamBag) -> DenoiseParams:
        return DenoiseParams(strength=bag.get_str("strength", "light").strip().lower())

    def apply(self, image: np.ndarray, params: DenoiseParams) -> np.ndarray:
        if params.strength == "strong":
            return cv2.bilateralFilter(image, 9, 75, 75)
        elif params.strength == "medium":
            return cv2.medianBlur(image, 5)
        else:
            return cv2.medianBlur(image, 3)
