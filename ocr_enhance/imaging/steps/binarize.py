"""
Binarization/thresholding step.
"""

from dataclasses import dataclass

import cv2
import numpy as np

from ..base import ImageOperation, OperationKind, ParamBag
from ..registry import OperationRegistry


@dataclass(frozen=True)
class BinarizeParams:
    method: str = "otsu"
    """'otsu' (default) or 'adaptive'."""

    threshold: float | None = None
    """Fixed global threshold; only used when method is not 'adaptive'."""

    block_size: int = 21
    """Neighborhood size for adaptive thresholding (odd, at least 3)."""

    c: float = 5.0
    """Constant subtracted from the weighted local mean."""


@OperationRegistry.register
class BinarizeOperation(ImageOperation[BinarizeParams]):
    """
    Converts the image to black and white.

    Supports:
    - 'adaptive': Gaussian-weighted local threshold
    - explicit 'threshold': fixed global threshold
    - otherwise Otsu's automatic global threshold

    The result is converted back to 3 channels so later steps can assume BGR.
    """

    @property
    def kind(self) -> OperationKind:
        return OperationKind.BINARIZE

    def parse_params(self, bag: ParamBag) -> BinarizeParams:
        block_size = bag.get_int("blockSize", 21)
        if block_size < 3:
            block_size = 3
        if block_size % 2 == 0:
            block_size += 1

        threshold = bag.get_float("threshold", 128.0) if bag.has("threshold") else None

        return BinarizeParams(
            method=bag.get_str("method", "otsu").strip().lower(),
            threshold=threshold,
            block_size=block_size,
            c=bag.get_float("c", 5.0),
        )

    def apply(self, image: np.ndarray, params: BinarizeParams) -> np.ndarray:
        gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)

        if params.method == "adaptive":
            binary = cv2.adaptiveThreshold(
                gray,
                255,
                cv2.ADAPTIVE_THRESH_GAUSSIAN_C,
                cv2.THRESH_BINARY,
                params.block_size,
                params.c,
            )
        elif params.threshold is not None:
            _, binary = cv2.threshold(gray, params.threshold, 255, cv2.THRESH_BINARY)
        else:
            _, binary = cv2.threshold(gray, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)

        return cv2.cvtColor(binary, cv2.COLOR_GRAY2BGR)
