"""
Upload validation for images.

Uploads are checked in layers before they reach storage:
1. Size limits
2. Magic byte detection (file signature)
3. Decoding with Pillow
"""

import logging
import re
from pathlib import Path
from typing import BinaryIO

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

# Magic byte signatures mapped to the extension images are stored under
IMAGE_SIGNATURES = {
    b"\xff\xd8\xff": ".jpg",
    b"\x89PNG\r\n\x1a\n": ".png",
    b"GIF87a": ".gif",
    b"GIF89a": ".gif",
    b"BM": ".bmp",
    b"II*\x00": ".tif",
    b"MM\x00*": ".tif",
    b"RIFF": ".webp",  # only when bytes 8-12 read WEBP
}

MAX_REFERENCE_LENGTH = 100

_UNSAFE_REFERENCE_CHARS = re.compile(r"[^A-Za-z0-9_-]+")


class ValidationError(Exception):
    """Raised when an upload fails validation."""

    pass


def detect_image_extension(header: bytes) -> str | None:
    """
    Detect the image format from its leading bytes.

    Args:
        header: First bytes of the file (at least 12 for WebP).

    Returns:
        Storage extension such as '.png', or None if unrecognized.
    """
    for signature, extension in IMAGE_SIGNATURES.items():
        if not header.startswith(signature):
            continue
        if signature == b"RIFF" and header[8:12] != b"WEBP":
            continue
        return extension
    return None


def validate_image(file_obj: BinaryIO, max_size_mb: int = 50) -> str:
    """
    Validate an uploaded image.

    Args:
        file_obj: Upload stream; left positioned at the start.
        max_size_mb: Maximum accepted size in MB.

    Returns:
        Extension matching the detected format.

    Raises:
        ValidationError: If the file is empty, too large, of an unknown
            type or not decodable.
    """
    file_obj.seek(0, 2)
    file_size = file_obj.tell()
    file_obj.seek(0)

    if file_size == 0:
        raise ValidationError("File is empty")

    max_size_bytes = max_size_mb * 1024 * 1024
    if file_size > max_size_bytes:
        raise ValidationError(
            f"File too large: {file_size / 1024 / 1024:.1f}MB (max {max_size_mb}MB)"
        )

    header = file_obj.read(32)
    file_obj.seek(0)

    extension = detect_image_extension(header)
    if extension is None:
        raise ValidationError("Unknown or unsupported image type")

    try:
        with Image.open(file_obj) as img:
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        logger.debug(f"Pillow rejected upload: {e}")
        raise ValidationError("File is not a valid image")
    finally:
        file_obj.seek(0)

    logger.info(f"Upload validated: {extension}, {file_size / 1024:.1f}KB")
    return extension


def validate_filename(filename: str) -> str:
    """
    Reduce an uploaded filename to its final component.

    Both '/' and '\\' separate components. Hidden names and names
    containing '..' are rejected.

    Raises:
        ValidationError: If nothing usable is left.
    """
    name = (filename or "").replace("\\", "/").rsplit("/", 1)[-1].strip()
    if not name:
        raise ValidationError("Filename is empty")

    if name.startswith(".") or ".." in name:
        raise ValidationError(f"Filename not allowed: {name!r}")

    if len(name) > 255:
        raise ValidationError("Filename longer than 255 characters")

    return name


def reference_from_filename(filename: str) -> str | None:
    """
    Derive a storage reference from an uploaded filename.

    'Scan 01 (final).png' becomes 'Scan_01_final'. Returns None when the
    stem has no usable characters.
    """
    stem = Path(filename).stem
    reference = _UNSAFE_REFERENCE_CHARS.sub("_", stem).strip("_-")
    return reference[:MAX_REFERENCE_LENGTH] or None
