"""Tests for upload validation."""

import io

import pytest

from conftest import make_png
from ocr_enhance.utils.file_validation import (
    ValidationError,
    detect_image_extension,
    reference_from_filename,
    validate_filename,
    validate_image,
)


class TestValidateImage:
    """validate_image."""

    def test_valid_png(self):
        stream = io.BytesIO(make_png())
        assert validate_image(stream) == ".png"
        assert stream.tell() == 0

    def test_empty(self):
        with pytest.raises(ValidationError, match="empty"):
            validate_image(io.BytesIO(b""))

    def test_too_large(self):
        with pytest.raises(ValidationError, match="too large"):
            validate_image(io.BytesIO(b"\x89PNG\r\n\x1a\n" + b"\x00" * (1024 * 1024)), max_size_mb=1)

    def test_unknown_type(self):
        with pytest.raises(ValidationError, match="Unknown"):
            validate_image(io.BytesIO(b"%PDF-1.7 not an image"))

    def test_spoofed_signature(self):
        with pytest.raises(ValidationError, match="not a valid image"):
            validate_image(io.BytesIO(b"\x89PNG\r\n\x1a\n garbage after the signature"))

    def test_detect_extension(self):
        assert detect_image_extension(b"\xff\xd8\xff\xe0") == ".jpg"
        assert detect_image_extension(b"RIFF\x00\x00\x00\x00WEBPVP8 ") == ".webp"
        assert detect_image_extension(b"RIFF\x00\x00\x00\x00WAVEfmt ") is None


class TestFilenames:
    """validate_filename and reference_from_filename."""

    def test_path_components_are_removed(self):
        assert validate_filename("/tmp/uploads/scan.png") == "scan.png"
        assert validate_filename("C:\\scans\\page 2.png") == "page 2.png"

    @pytest.mark.parametrize("filename", ["", ".hidden.png", "a..b.png"])
    def test_invalid(self, filename):
        with pytest.raises(ValidationError):
            validate_filename(filename)

    def test_reference(self):
        assert reference_from_filename("Scan 01 (final).png") == "Scan_01_final"
        assert reference_from_filename("___.png") is None
