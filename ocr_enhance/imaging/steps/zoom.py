"""
Zoom/resize step.
"""

from dataclasses import dataclass

import cv2
import numpy as np

from ..base import ImageOperation, OperationKind, ParamBag
from ..registry import OperationRegistry


@dataclass(frozen=True)
class ZoomParams:
    width: int | None = None
    """Explicit target width (None = keep current width when height is given)."""

    height: int | None = None
    """Explicit target height (None = keep current height when width is given)."""

    scale: float = 1.0
    """Uniform scale factor, used only when neither width nor height is given."""

    has_explicit_size: bool = False
    """A width or height key was present, even with an unusable value."""


@OperationRegistry.register
class ZoomOperation(ImageOperation[ZoomParams]):
    """
    Resizes the image either to an explicit size or by a scale factor.

    Uses bicubic interpolation, favoring quality over speed.
    """

    @property
    def kind(self) -> OperationKind:
        return OperationKind.ZOOM

    def parse_params(self, bag: ParamBag) -> ZoomParams:
        if bag.has("width") or bag.has("height"):
            # Unusable values keep the current dimension
            return ZoomParams(
                width=bag.get_int("width", None),
                height=bag.get_int("height", None),
                has_explicit_size=True,
            )

        scale = bag.get_float("scale", 1.0)
        if scale <= 0:
            scale = 1.0
        return ZoomParams(scale=scale)

    def target_size(self, width: int, height: int, params: ZoomParams) -> tuple[int, int]:
        """Compute (width, height) of the resized image."""
        if params.has_explicit_size:
            target_width = params.width if params.width is not None else width
            target_height = params.height if params.height is not None else height
            return max(1, target_width), max(1, target_height)

        return (
            max(1, int(round(width * params.scale))),
            max(1, int(round(height * params.scale))),
        )

    def apply(self, image: np.ndarray, params: ZoomParams) -> np.ndarray | None:
        height, width = image.shape[:2]
        target = self.target_size(width, height, params)

        if target == (width, height):
            return None

        return cv2.resize(image, target, interpolation=cv2.INTER_CUBIC)
