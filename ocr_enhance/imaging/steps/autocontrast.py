"""
Percentile-clipped luminance stretch.
"""

from dataclasses import dataclass

import cv2
import numpy as np

from ..base import ImageOperation, OperationKind, ParamBag
from ..registry import OperationRegistry


@dataclass(frozen=True)
class AutoContrastParams:
    cutoff: float = 0.01
    """Fraction of pixels clipped at each end of the histogram, in [0, 0.49]."""


def find_clip_bounds(histogram: np.ndarray, cutoff: float) -> tuple[int, int]:
    """
    Locate the low/high histogram bins for a given clip fraction.

    The low bound is the first bin (from 0 upwards) where the cumulative
    count reaches cutoff * total; the high bound is the same from 255
    downwards.

    Args:
        histogram: 256-bin pixel count histogram.
        cutoff: Fraction of pixels to clip at each end.

    Returns:
        (low, high) bin indices.
    """
    counts = histogram.astype(np.float64).ravel()
    clip = counts.sum() * cutoff

    from_low = np.cumsum(counts)
    from_high = np.cumsum(counts[::-1])

    low = int(np.argmax(from_low >= clip))
    high = 255 - int(np.argmax(from_high >= clip))
    return low, high


@OperationRegistry.register
class AutoContrastOperation(ImageOperation[AutoContrastParams]):
    """
    Stretches luminance so the clipped histogram spans the full 0-255 range.

    Works on the L channel of LAB; the chroma channels are left untouched.
    """

    @property
    def kind(self) -> OperationKind:
        return OperationKind.AUTOCONTRAST

    def parse_params(self, bag: ParamBag) -> AutoContrastParams:
        cutoff = bag.get_float("cutoff", 0.01)
        return AutoContrastParams(cutoff=min(max(cutoff, 0.0), 0.49))

    def apply(self, image: np.ndarray, params: AutoContrastParams) -> np.ndarray | None:
        lab = cv2.cvtColor(image, cv2.COLOR_BGR2LAB)
        lightness, a, b = cv2.split(lab)

        histogram = cv2.calcHist([lightness], [0], None, [256], [0, 256])
        low, high = find_clip_bounds(histogram, params.cutoff)

        if high <= low:
            return None

        stretched = (lightness.astype(np.float32) - low) * (255.0 / (high - low))
        stretched = np.clip(np.rint(stretched), 0, 255).astype(np.uint8)

        merged = cv2.merge([stretched, a, b])
        return cv2.cvtColor(merged, cv2.COLOR_LAB2BGR)
