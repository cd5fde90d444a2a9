"""Tests for the plan step executor."""

import asyncio
import io

import pytest

from conftest import decode_png, make_png
from ocr_enhance.exceptions import ImageDecodeError, UnsupportedOperationError
from ocr_enhance.imaging import ImageProcessor, decode_image
from ocr_enhance.schemas.plan import PlanStep


@pytest.fixture
def processor():
    return ImageProcessor()


class TestApply:
    """Decode, process, encode."""

    def test_output_is_png_at_start_of_stream(self, processor):
        output = asyncio.run(processor.apply(make_png(40, 30), [PlanStep(op="zoom", params={"scale": 2})]))

        assert output.tell() == 0
        data = output.read()
        assert data.startswith(b"\x89PNG")
        assert decode_png(data).shape[:2] == (60, 80)

    def test_accepts_streams(self, processor):
        stream = io.BytesIO(make_png(40, 30))
        output = asyncio.run(processor.apply(stream, []))
        assert decode_png(output.read()).shape[:2] == (30, 40)

    def test_steps_run_in_order(self, processor):
        steps = [
            PlanStep(op="zoom", params={"width": 100, "height": 20}),
            PlanStep(op="rotate", params={"angle": 90}),
        ]
        output = asyncio.run(processor.apply(make_png(40, 30), steps))
        assert decode_png(output.read()).shape[:2] == (100, 20)

    def test_unsupported_step_aborts(self, processor):
        steps = [PlanStep(op="gamma", params={"value": 2}), PlanStep(op="warp")]
        with pytest.raises(UnsupportedOperationError):
            asyncio.run(processor.apply(make_png(), steps))


class TestDecode:
    """Decode failures carry diagnostics."""

    def test_empty_input(self):
        with pytest.raises(ImageDecodeError, match="0 bytes"):
            decode_image(b"")

    def test_garbage_input_reports_leading_bytes(self):
        with pytest.raises(ImageDecodeError) as exc_info:
            decode_image(b"not an image at all")

        assert exc_info.value.byte_count == 19
        assert exc_info.value.sample == b"not an image at "
        assert "6e 6f 74" in str(exc_info.value)

    def test_apply_rejects_undecodable_input(self, processor):
        with pytest.raises(ImageDecodeError):
            asyncio.run(processor.apply(b"\x00\x01\x02", []))
