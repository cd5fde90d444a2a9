"""Tests for OCR engine adapters (Tesseract calls are stubbed)."""

import asyncio

import pytest
import pytesseract

from conftest import make_png
from ocr_enhance.exceptions import ImageDecodeError
from ocr_enhance.ocr import MockOCREngine, OCREngineRegistry, TesseractOCREngine
from ocr_enhance.ocr.tesseract import resolve_tessdata_path
from ocr_enhance.schemas.options import OcrEngineOptions

TESSERACT_DATA = {
    "level": [1, 5, 5, 5, 5],
    "text": ["", "Total", "  ", "12.50", "EUR"],
    "conf": ["-1", "96.5", "-1", "88", "bad"],
    "left": [0, 10, 0, 60, 110],
    "top": [0, 5, 0, 5, 5],
    "width": [200, 40, 0, 35, 30],
    "height": [50, 12, 0, 12, 12],
}


@pytest.fixture
def stub_tesseract(monkeypatch):
    calls = {}

    def image_to_string(image, lang=None, config=None):
        calls["string"] = (lang, config)
        return "Total 12.50 EUR\n"

    def image_to_data(image, lang=None, config=None, output_type=None):
        calls["data"] = (lang, config, output_type)
        return TESSERACT_DATA

    monkeypatch.setattr(pytesseract, "image_to_string", image_to_string)
    monkeypatch.setattr(pytesseract, "image_to_data", image_to_data)
    return calls


@pytest.fixture
def tesseract():
    engine = TesseractOCREngine(page_segmentation_mode=6, oem=1)
    engine._loaded = True
    return engine


class TestRegistry:
    """Engine registration."""

    def test_engines_are_registered(self):
        assert OCREngineRegistry.is_registered("tesseract")
        assert OCREngineRegistry.is_registered("mock")

    def test_create_engine(self):
        engine = OCREngineRegistry.create_engine("tesseract", oem=1)
        assert isinstance(engine, TesseractOCREngine)
        assert engine.engine_options == {"oem": 1}
        assert OCREngineRegistry.create_engine("nope") is None


class TestTesseractEngine:
    """TesseractOCREngine.read."""

    def test_words_and_confidence(self, tesseract, stub_tesseract):
        result = asyncio.run(tesseract.read(make_png(), OcrEngineOptions(language="eng+deu")))

        assert result.engine == "tesseract"
        assert result.text == "Total 12.50 EUR\n"
        assert [w.text for w in result.words] == ["Total", "12.50", "EUR"]
        assert [w.confidence for w in result.words] == [96.5, 88.0, None]
        assert (result.words[1].x, result.words[1].y, result.words[1].w, result.words[1].h) == (60, 5, 35, 12)
        assert result.mean_confidence == pytest.approx(92.25)

    def test_language_and_config_are_passed(self, tesseract, stub_tesseract):
        asyncio.run(tesseract.read(make_png(), OcrEngineOptions(language="fra")))

        lang, config = stub_tesseract["string"]
        assert lang == "fra"
        assert config == "--psm 6 --oem 1"
        assert stub_tesseract["data"][2] == pytesseract.Output.DICT

    def test_undecodable_bytes(self, tesseract, stub_tesseract):
        with pytest.raises(ImageDecodeError):
            asyncio.run(tesseract.read(b"plain text", OcrEngineOptions()))

    def test_not_loaded(self):
        with pytest.raises(RuntimeError, match="not loaded"):
            asyncio.run(TesseractOCREngine().read(make_png(), OcrEngineOptions()))

    def test_tessdata_parent_directory_is_accepted(self, tmp_path):
        tessdata = tmp_path / "tessdata"
        tessdata.mkdir()
        (tessdata / "eng.traineddata").write_bytes(b"")

        assert resolve_tessdata_path(tmp_path) == tessdata.resolve()
        assert resolve_tessdata_path(tessdata) == tessdata.resolve()


class TestMockEngine:
    """MockOCREngine."""

    def test_deterministic(self, ocr_engine):
        first = asyncio.run(ocr_engine.read(make_png(), OcrEngineOptions()))
        second = asyncio.run(ocr_engine.read(make_png(), OcrEngineOptions()))
        assert first == second
        assert first.engine == "mock"

    def test_empty_bytes(self, ocr_engine):
        with pytest.raises(ImageDecodeError):
            asyncio.run(ocr_engine.read(b"", OcrEngineOptions()))

    def test_load(self):
        engine = MockOCREngine()
        assert not engine.is_loaded
        asyncio.run(engine.load())
        assert engine.is_loaded
