"""
Base classes for plan-driven image operations.
"""

import math
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

import numpy as np


class OperationKind(str, Enum):
    """Closed set of operations a plan step may name."""

    NOOP = ""
    ROTATE = "rotate"
    ZOOM = "zoom"
    AUTOCONTRAST = "autocontrast"
    CLAHE = "clahe"
    DENOISE = "denoise"
    BINARIZE = "binarize"
    BRIGHTNESS = "brightness"
    GAMMA = "gamma"
    SHARPEN = "sharpen"
    DESKEW = "deskew"
    UNSUPPORTED = "<unsupported>"

    @classmethod
    def parse(cls, op: str | None) -> "OperationKind":
        """
        Map a raw step name to an operation kind.

        Names are trimmed and matched case-insensitively. Unknown names map
        to UNSUPPORTED rather than to a silent no-op.
        """
        name = (op or "").strip().lower()
        try:
            return cls(name)
        except ValueError:
            return cls.UNSUPPORTED

    @classmethod
    def names(cls) -> list[str]:
        """Operation identifiers that plans may use."""
        return [k.value for k in cls if k not in (cls.NOOP, cls.UNSUPPORTED)]


class ParamBag:
    """
    Read-only, case-insensitive view over a step's parameter mapping.

    Getters never raise: values that cannot be coerced fall back to the
    supplied default.
    """

    def __init__(self, params: Mapping[str, Any] | None = None):
        self._values: dict[str, Any] = {}
        for key, value in (params or {}).items():
            self._values[str(key).lower()] = value

    def has(self, key: str) -> bool:
        """Whether the key is present (even if its value is unusable)."""
        return key.lower() in self._values

    def _raw(self, key: str) -> Any:
        return self._values.get(key.lower())

    def get_float(self, key: str, default: float) -> float:
        value = self._raw(key)
        if value is None or isinstance(value, bool):
            return default
        if isinstance(value, (int, float)):
            result = float(value)
        else:
            try:
                result = float(str(value).strip())
            except ValueError:
                return default
        return result if math.isfinite(result) else default

    def get_int(self, key: str, default: int) -> int:
        value = self._raw(key)
        if value is None or isinstance(value, bool):
            return default
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            return int(round(value)) if math.isfinite(value) else default
        try:
            return int(str(value).strip())
        except ValueError:
            return default

    def get_str(self, key: str, default: str) -> str:
        value = self._raw(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def __repr__(self) -> str:
        return f"ParamBag({self._values!r})"


@dataclass
class StepResult:
    """Result of applying one plan step."""

    image: np.ndarray
    """Image after the step."""

    applied: bool
    """Whether the step changed anything (False for documented no-ops)."""

    step_name: str
    """Name of the operation."""

    metadata: dict = field(default_factory=dict)
    """Decoded parameters and other details, for logging."""


P = TypeVar("P")


class ImageOperation(ABC, Generic[P]):
    """
    Abstract base class for plan operations.

    Each operation owns a typed parameter dataclass with explicit defaults,
    decoded from the step's generic parameter bag. Images are 3-channel
    BGR uint8 arrays on input and output.
    """

    @property
    @abstractmethod
    def kind(self) -> OperationKind:
        """The operation this class implements."""
        pass

    @property
    def name(self) -> str:
        return self.kind.value

    @abstractmethod
    def parse_params(self, bag: ParamBag) -> P:
        """
        Decode typed parameters from a parameter bag.

        Args:
            bag: Case-insensitive parameters from the plan step.

        Returns:
            Parameter dataclass with defaults filled in and ranges clamped.
        """
        pass

    @abstractmethod
    def apply(self, image: np.ndarray, params: P) -> np.ndarray | None:
        """
        Apply the operation.

        Args:
            image: Input BGR image.
            params: Decoded parameters.

        Returns:
            Processed image, or None when the parameters make this a no-op.
        """
        pass

    def process(self, image: np.ndarray, params: Mapping[str, Any] | None = None) -> StepResult:
        """
        Decode parameters and apply the operation.

        Args:
            image: Input BGR image.
            params: Raw step parameters.

        Returns:
            StepResult with the processed image and metadata.
        """
        decoded = self.parse_params(ParamBag(params))
        processed = self.apply(image, decoded)

        if processed is None:
            return StepResult(
                image=image,
                applied=False,
                step_name=self.name,
                metadata={"params": decoded, "reason": "no_op"},
            )

        return StepResult(
            image=processed,
            applied=True,
            step_name=self.name,
            metadata={"params": decoded},
        )
