"""
Brightness shift step.
"""

from dataclasses import dataclass

import numpy as np

from ..base import ImageOperation, OperationKind, ParamBag
from ..registry import OperationRegistry


@dataclass(frozen=True)
class BrightnessParams:
    delta: float = 0.0
    """Value added to every channel of every pixel."""


@OperationRegistry.register
class BrightnessOperation(ImageOperation[BrightnessParams]):
    """Adds a constant to all channels, saturating at 0 and 255."""

    @property
    def kind(self) -> OperationKind:
        return OperationKind.BRIGHTNESS

    def parse_params(self, bag: ParamBag) -> BrightnessParams:
        return BrightnessParams(delta=bag.get_float("delta", 0.0))

    def apply(self, image: np.ndarray, params: BrightnessParams) -> np.ndarray | None:
        if abs(params.delta) < 1e-4:
            return None

        shifted = image.astype(np.float32) + params.delta
        return np.clip(np.rint(shifted), 0, 255).astype(np.uint8)
