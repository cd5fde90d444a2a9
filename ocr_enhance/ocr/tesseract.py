import asyncio
import io
import logging
import shutil
from pathlib import Path

import pytesseract
from PIL import Image, UnidentifiedImageError

from ocr_enhance.exceptions import ConfigurationError, ImageDecodeError
from ocr_enhance.ocr.base import BaseOCREngine
from ocr_enhance.ocr.registry import OCREngineRegistry
from ocr_enhance.schemas.ocr import OcrResult, OcrWord
from ocr_enhance.schemas.options import OcrEngineOptions

logger = logging.getLogger(__name__)

# Tesseract's image_to_data level for single words
WORD_LEVEL = 5


def resolve_tessdata_path(configured: Path) -> Path:
    """
    Accept either a 'tessdata' directory or its parent.

    Returns the directory that contains 'eng.traineddata' when one of the
    two candidates does, otherwise the configured path unchanged.
    """
    full = configured.expanduser().resolve()
    if (full / "eng.traineddata").exists():
        return full

    child = full / "tessdata"
    if (child / "eng.traineddata").exists():
        return child

    return full


def _parse_confidence(raw) -> float | None:
    """Word confidence, or None when missing, negative or unparsable."""
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if value >= 0 else None


@OCREngineRegistry.register
class TesseractOCREngine(BaseOCREngine):
    """
    OCR engine backed by the Tesseract binary through pytesseract.

    Engine options:
        data_path: tessdata directory (or its parent); None uses Tesseract's default.
        page_segmentation_mode: --psm value (default 3).
        oem: --oem value (default 3).
    """

    engine_name = "tesseract"

    async def load(self) -> None:
        """Check the Tesseract binary and training data are available."""
        if shutil.which(pytesseract.pytesseract.tesseract_cmd) is None:
            raise ConfigurationError("Tesseract binary is not available on PATH")

        data_path = self.engine_options.get("data_path")
        if data_path is not None:
            resolved = resolve_tessdata_path(Path(data_path))
            if not resolved.is_dir():
                raise ConfigurationError(f"Tesseract tessdata directory not found: '{resolved}'")
            if not (resolved / "eng.traineddata").exists():
                raise ConfigurationError(
                    f"Missing training data file: '{resolved / 'eng.traineddata'}'. "
                    "Point the tessdata path at the folder that contains 'eng.traineddata'."
                )
            self.engine_options["data_path"] = resolved

        self._loaded = True
        logger.info(f"Tesseract engine ready (tessdata: {self.engine_options.get('data_path') or 'default'})")

    def _config(self) -> str:
        psm = int(self.engine_options.get("page_segmentation_mode", 3))
        oem = int(self.engine_options.get("oem", 3))
        config = f"--psm {psm} --oem {oem}"

        data_path = self.engine_options.get("data_path")
        if data_path is not None:
            config += f' --tessdata-dir "{data_path}"'
        return config

    async def read(self, image_bytes: bytes, options: OcrEngineOptions) -> OcrResult:
        self._ensure_loaded()
        return await asyncio.to_thread(self._read_sync, image_bytes, options.language)

    def _read_sync(self, image_bytes: bytes, language: str) -> OcrResult:
        try:
            image = Image.open(io.BytesIO(image_bytes))
            image.load()
        except (UnidentifiedImageError, OSError):
            raise ImageDecodeError(len(image_bytes), bytes(image_bytes[:16]))

        config = self._config()
        text = pytesseract.image_to_string(image, lang=language, config=config)
        data = pytesseract.image_to_data(
            image,
            lang=language,
            config=config,
            output_type=pytesseract.Output.DICT,
        )

        words = []
        for i, word_text in enumerate(data.get("text", [])):
            if int(data["level"][i]) != WORD_LEVEL:
                continue
            word_text = (word_text or "").strip()
            if not word_text:
                continue

            words.append(
                OcrWord(
                    text=word_text,
                    confidence=_parse_confidence(data["conf"][i]),
                    x=int(data["left"][i]),
                    y=int(data["top"][i]),
                    w=int(data["width"][i]),
                    h=int(data["height"][i]),
                )
            )

        confidences = [w.confidence for w in words if w.confidence is not None]
        mean_confidence = sum(confidences) / len(confidences) if confidences else None

        logger.debug(f"Tesseract produced {len(words)} words (lang={language})")

        return OcrResult(
            text=text or "",
            mean_confidence=mean_confidence,
            words=words,
            engine=self.name,
        )
