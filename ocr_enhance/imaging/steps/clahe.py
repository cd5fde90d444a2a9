"""
CLAHE (Contrast Limited Adaptive Histogram Equalization) step.
"""

from dataclasses import dataclass

import cv2
import numpy as np

from ..base import ImageOperation, OperationKind, ParamBag
from ..registry import OperationRegistry


@dataclass(frozen=True)
class ClaheParams:
    clip_limit: float = 2.0
    """Contrast limit, at least 0.1."""

    tile_grid_size: int = 8
    """Tiles per side of the square grid, at least 2."""


@OperationRegistry.register
class ClaheOperation(ImageOperation[ClaheParams]):
    """Equalizes the luminance channel locally, tile by tile."""

    @property
    def kind(self) -> OperationKind:
        return OperationKind.CLAHE

    def parse_params(self, bag: ParamBag) -> ClaheParams:
        return ClaheParams(
            clip_limit=max(0.1, bag.get_float("clipLimit", 2.0)),
            tile_grid_size=max(2, bag.get_int("tileGridSize", 8)),
        )

    def apply(self, image: np.ndarray, params: ClaheParams) -> np.ndarray:
        lab = cv2.cvtColor(image, cv2.COLOR_BGR2LAB)
        lightness, a, b = cv2.split(lab)

        clahe = cv2.createCLAHE(
            clipLimit=params.clip_limit,
            tileGridSize=(params.tile_grid_size, params.tile_grid_size),
        )
        equalized = clahe.apply(lightness)

        return cv2.cvtColor(cv2.merge([equalized, a, b]), cv2.COLOR_LAB2BGR)
