"""
Unsharp-mask sharpening step.
"""

from dataclasses import dataclass

import cv2
import numpy as np

from ..base import ImageOperation, OperationKind, ParamBag
from ..registry import OperationRegistry


@dataclass(frozen=True)
class SharpenParams:
    amount: float = 1.2
    """Weight of the detail layer, clamped to [0, 5]."""

    sigma: float = 1.0
    """Gaussian blur sigma, clamped to [0.1, 10]."""


@OperationRegistry.register
class SharpenOperation(ImageOperation[SharpenParams]):
    """
    Sharpens with an unsharp mask:

        output = image * (1 + amount) - blurred * amount
    """

    @property
    def kind(self) -> OperationKind:
        return OperationKind.SHARPEN

    def parse_params(self, bag: ParamBag) -> SharpenParams:
        # 'strength' is accepted as an alias for 'amount'
        amount = bag.get_float("amount", bag.get_float("strength", 1.2))
        sigma = bag.get_float("sigma", 1.0)
        return SharpenParams(
            amount=min(max(amount, 0.0), 5.0),
            sigma=min(max(sigma, 0.1), 10.0),
        )

    def apply(self, image: np.ndarray, params: SharpenParams) -> np.ndarray | None:
        if params.amount <= 0:
            return None

        blurred = cv2.GaussianBlur(image, (0, 0), params.sigma)
        return cv2.addWeighted(image, 1.0 + params.amount, blurred, -params.amount, 0)
