# Import OCR engines to register them
from ocr_enhance.ocr.base import BaseOCREngine
from ocr_enhance.ocr.mock import MockOCREngine
from ocr_enhance.ocr.registry import OCREngineRegistry
from ocr_enhance.ocr.tesseract import TesseractOCREngine

__all__ = [
    "BaseOCREngine",
    "OCREngineRegistry",
    # OCR Engines
    "MockOCREngine",
    "TesseractOCREngine",
]
