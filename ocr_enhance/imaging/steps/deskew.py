"""
Deskew step.
"""

import logging
from dataclasses import dataclass

import numpy as np

from ..base import ImageOperation, OperationKind, ParamBag
from ..registry import OperationRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeskewParams:
    pass


@OperationRegistry.register
class DeskewOperation(ImageOperation[DeskewParams]):
    """
    Accepted plan operation that currently passes the image through.

    Skew angle estimation is not implemented; plans that include 'deskew'
    still run, and an explicit 'rotate' step is the way to correct a known
    angle.
    """

    @property
    def kind(self) -> OperationKind:
        return OperationKind.DESKEW

    def parse_params(self, bag: ParamBag) -> DeskewParams:
        return DeskewParams()

    def apply(self, image: np.ndarray, params: DeskewParams) -> np.ndarray | None:
        logger.debug("deskew: skew estimation not implemented, image passed through unchanged")
        return None
