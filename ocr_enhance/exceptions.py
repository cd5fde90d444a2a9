"""
Error taxonomy for the OCR enhancement pipeline.

Cancellation is not modelled here: callers cancel the running task and
``asyncio.CancelledError`` propagates untouched through every service.
"""


class OcrEnhanceError(Exception):
    """Base class for all pipeline errors."""

    pass


class ImageNotFoundError(OcrEnhanceError, FileNotFoundError):
    """Raised when a referenced image is absent from storage."""

    def __init__(self, reference: str):
        super().__init__(f"Unknown image reference: {reference}")
        self.reference = reference


class ImageDecodeError(OcrEnhanceError):
    """Raised when image bytes are empty or cannot be decoded."""

    def __init__(self, byte_count: int, sample: bytes):
        hex_sample = sample.hex(" ") if sample else "<empty>"
        super().__init__(
            f"Could not decode input image ({byte_count} bytes, leading bytes: {hex_sample})"
        )
        self.byte_count = byte_count
        self.sample = sample


class UnsupportedOperationError(OcrEnhanceError):
    """Raised when a plan step names an operation the engine does not know."""

    def __init__(self, op: str):
        super().__init__(f"Unsupported op: '{op}'")
        self.op = op


class PlannerError(OcrEnhanceError):
    """Raised when the planning backend fails or returns an unusable response."""

    pass


class ConfigurationError(OcrEnhanceError):
    """Raised when required configuration is missing or invalid."""

    pass
