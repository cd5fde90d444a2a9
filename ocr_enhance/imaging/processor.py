"""
Plan step executor.

Interprets an ordered list of plan steps against one image and produces
a PNG-encoded result.
"""

import asyncio
import io
import logging
import time
from collections.abc import Sequence
from typing import BinaryIO, Union

import numpy as np

from ocr_enhance.exceptions import UnsupportedOperationError
from ocr_enhance.schemas.plan import PlanStep

from . import steps  # noqa: F401  (registers operations)
from .base import OperationKind, StepResult
from .codec import decode_image, encode_png
from .registry import OperationRegistry

logger = logging.getLogger(__name__)

ImageInput = Union[bytes, bytearray, BinaryIO]


def _read_all(source: ImageInput) -> bytes:
    """Read all bytes from a byte string or a binary stream."""
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    return source.read()


class ImageProcessor:
    """
    Applies plan steps to an image.

    Steps run strictly in order, each on the output of the previous one.
    An empty operation name is a no-op; any unknown operation aborts the
    whole run with UnsupportedOperationError.
    """

    def apply_step(self, image: np.ndarray, step: PlanStep) -> StepResult:
        """
        Apply a single plan step.

        Args:
            image: Current BGR image.
            step: Step to apply.

        Returns:
            StepResult for the step.

        Raises:
            UnsupportedOperationError: If the step names an unknown operation.
        """
        kind = OperationKind.parse(step.op)

        if kind == OperationKind.NOOP:
            return StepResult(image=image, applied=False, step_name="", metadata={"reason": "empty_op"})

        operation = OperationRegistry.create_operation(kind)
        if operation is None:
            raise UnsupportedOperationError(step.op)

        return operation.process(image, step.params)

    async def apply(self, source: ImageInput, plan_steps: Sequence[PlanStep]) -> io.BytesIO:
        """
        Decode, process and re-encode an image.

        Each step runs in a worker thread; cancelling the calling task is
        observed between steps.

        Args:
            source: Encoded image bytes or a binary stream positioned at the
                start of the image.
            plan_steps: Steps to apply in order.

        Returns:
            PNG-encoded result, positioned at the start.

        Raises:
            ImageDecodeError: If the input cannot be decoded.
            UnsupportedOperationError: If any step names an unknown operation.
        """
        data = _read_all(source)
        current = decode_image(data)
        started = time.perf_counter()

        for step in plan_steps or ():
            current = (await asyncio.to_thread(self._apply_logged, current, step)).image

        encoded = await asyncio.to_thread(encode_png, current)

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(
            f"Applied {len(plan_steps or ())} steps in {elapsed_ms:.0f}ms, "
            f"output {current.shape[1]}x{current.shape[0]} ({len(encoded)} bytes)"
        )

        output = io.BytesIO(encoded)
        output.seek(0)
        return output

    def _apply_logged(self, image: np.ndarray, step: PlanStep) -> StepResult:
        result = self.apply_step(image, step)
        if result.applied:
            logger.debug(f"Step '{result.step_name}' applied: {result.metadata.get('params')}")
        elif result.step_name:
            logger.debug(f"Step '{result.step_name}' skipped (no-op parameters)")
        return result
