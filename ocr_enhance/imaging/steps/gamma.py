"""
Gamma correction step.
"""

from dataclasses import dataclass

import cv2
import numpy as np

from ..base import ImageOperation, OperationKind, ParamBag
from ..registry import OperationRegistry


@dataclass(frozen=True)
class GammaParams:
    value: float = 1.0
    """Gamma, clamped to [0.1, 10.0]. Values above 1 brighten midtones."""


def build_gamma_lut(gamma: float) -> np.ndarray:
    """
    Build the 256-entry lookup table for a gamma value.

    Entry i is round(255 * (i / 255) ** (1 / gamma)), clamped to [0, 255].
    """
    inverse = 1.0 / gamma
    table = np.empty(256, dtype=np.uint8)
    for i in range(256):
        value = ((i / 255.0) ** inverse) * 255.0
        table[i] = min(255, max(0, int(round(value))))
    return table


@OperationRegistry.register
class GammaOperation(ImageOperation[GammaParams]):
    """Applies gamma correction through a lookup table."""

    @property
    def kind(self) -> OperationKind:
        return OperationKind.GAMMA

    def parse_params(self, bag: ParamBag) -> GammaParams:
        value = bag.get_float("value", 1.0)
        return GammaParams(value=min(max(value, 0.1), 10.0))

    def apply(self, image: np.ndarray, params: GammaParams) -> np.ndarray | None:
        if abs(params.value - 1.0) < 1e-4:
            return None

        return cv2.LUT(image, build_gamma_lut(params.value))
