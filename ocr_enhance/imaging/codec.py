"""
Decoding and encoding between raw bytes and BGR arrays.
"""

import logging

import cv2
import numpy as np

from ocr_enhance.exceptions import ImageDecodeError

logger = logging.getLogger(__name__)

# Output format for processed images (lossless)
OUTPUT_EXTENSION = ".png"

# Number of leading bytes quoted in decode errors
DIAGNOSTIC_SAMPLE_SIZE = 16


def decode_image(data: bytes) -> np.ndarray:
    """
    Decode image bytes into a 3-channel BGR array.

    Args:
        data: Encoded image bytes (PNG, JPEG, ...).

    Returns:
        BGR uint8 array.

    Raises:
        ImageDecodeError: If the bytes are empty or not a decodable image.
    """
    if not data:
        raise ImageDecodeError(0, b"")

    buffer = np.frombuffer(data, dtype=np.uint8)
    image = cv2.imdecode(buffer, cv2.IMREAD_COLOR)

    if image is None or image.size == 0:
        raise ImageDecodeError(len(data), bytes(data[:DIAGNOSTIC_SAMPLE_SIZE]))

    logger.debug(f"Decoded image: {image.shape[1]}x{image.shape[0]} from {len(data)} bytes")
    return image


def encode_png(image: np.ndarray) -> bytes:
    """
    Encode an array as PNG bytes.

    Raises:
        RuntimeError: If encoding fails.
    """
    success, buffer = cv2.imencode(OUTPUT_EXTENSION, image)
    if not success:
        raise RuntimeError("Failed to encode processed image to PNG")
    return buffer.tobytes()
