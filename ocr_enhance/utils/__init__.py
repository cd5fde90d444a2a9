"""Utility modules for the OCR enhancement service."""

from ocr_enhance.utils.file_validation import (
    ValidationError,
    reference_from_filename,
    validate_filename,
    validate_image,
)

__all__ = [
    "ValidationError",
    "reference_from_filename",
    "validate_filename",
    "validate_image",
]
