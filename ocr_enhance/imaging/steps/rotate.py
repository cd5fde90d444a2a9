"""
Rotation step.
"""

import logging
from dataclasses import dataclass

import cv2
import numpy as np

from ..base import ImageOperation, OperationKind, ParamBag
from ..registry import OperationRegistry

logger = logging.getLogger(__name__)

# Angles below this magnitude (degrees) leave the image untouched.
MIN_ANGLE = 1e-4


@dataclass(frozen=True)
class RotateParams:
    angle: float = 0.0
    """Rotation angle in degrees (positive = counter-clockwise)."""


def expanded_size(width: int, height: int, angle: float) -> tuple[int, int]:
    """
    Size of the smallest canvas that holds the image rotated by angle.

    Returns:
        (new_width, new_height), rounded to the nearest pixel.
    """
    radians = np.deg2rad(angle)
    cos_angle = abs(float(np.cos(radians)))
    sin_angle = abs(float(np.sin(radians)))

    new_width = int(round(height * sin_angle + width * cos_angle))
    new_height = int(round(height * cos_angle + width * sin_angle))
    return max(1, new_width), max(1, new_height)


@OperationRegistry.register
class RotateOperation(ImageOperation[RotateParams]):
    """
    Rotates the image about its center.

    The canvas grows to the bounding box of the rotated image so nothing
    is cropped; exposed areas are filled with white.
    """

    @property
    def kind(self) -> OperationKind:
        return OperationKind.ROTATE

    def parse_params(self, bag: ParamBag) -> RotateParams:
        return RotateParams(angle=bag.get_float("angle", 0.0))

    def apply(self, image: np.ndarray, params: RotateParams) -> np.ndarray | None:
        if abs(params.angle) < MIN_ANGLE:
            return None

        height, width = image.shape[:2]
        center = (width / 2.0, height / 2.0)

        rotation_matrix = cv2.getRotationMatrix2D(center, params.angle, 1.0)
        new_width, new_height = expanded_size(width, height, params.angle)

        # Shift so the rotated image is centered in the expanded canvas
        rotation_matrix[0, 2] += new_width / 2.0 - center[0]
        rotation_matrix[1, 2] += new_height / 2.0 - center[1]

        logger.debug(f"Rotating {width}x{height} by {params.angle} deg -> {new_width}x{new_height}")

        return cv2.warpAffine(
            image,
            rotation_matrix,
            (new_width, new_height),
            flags=cv2.INTER_LINEAR,
            borderMode=cv2.BORDER_CONSTANT,
            borderValue=(255, 255, 255),
        )
