import hashlib
import logging

from ocr_enhance.exceptions import ImageDecodeError
from ocr_enhance.ocr.base import BaseOCREngine
from ocr_enhance.ocr.registry import OCREngineRegistry
from ocr_enhance.schemas.ocr import OcrResult, OcrWord
from ocr_enhance.schemas.options import OcrEngineOptions

logger = logging.getLogger(__name__)


@OCREngineRegistry.register
class MockOCREngine(BaseOCREngine):
    """
    Mock OCR engine for testing.

    Returns placeholder text derived from the image bytes, so the API can
    be exercised without Tesseract installed.
    """

    engine_name = "mock"

    async def load(self) -> None:
        logger.info("Mock OCR engine loaded")
        self._loaded = True

    async def read(self, image_bytes: bytes, options: OcrEngineOptions) -> OcrResult:
        self._ensure_loaded()

        if not image_bytes:
            raise ImageDecodeError(0, b"")

        digest = hashlib.sha256(image_bytes).hexdigest()[:8]
        text = f"Mock OCR result {digest} ({options.language})"

        return OcrResult(
            text=text,
            mean_confidence=93.0,
            words=[
                OcrWord(text="Mock", confidence=95.0, x=10, y=10, w=60, h=20),
                OcrWord(text=digest, confidence=91.0, x=80, y=10, w=120, h=20),
            ],
            engine=self.name,
        )
