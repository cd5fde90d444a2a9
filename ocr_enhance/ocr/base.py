from abc import ABC, abstractmethod
from typing import Any, ClassVar

from ocr_enhance.schemas.ocr import OcrResult
from ocr_enhance.schemas.options import OcrEngineOptions


class BaseOCREngine(ABC):
    """
    Text recognizer consumed by the extraction service.

    Subclasses set `engine_name`, prepare themselves in `load()` and turn
    encoded image bytes into an OcrResult in `read()`. Reading before
    `load()` is an error.
    """

    engine_name: ClassVar[str] = ""

    def __init__(self, **engine_options: Any):
        self.engine_options = engine_options
        self._loaded = False

    @property
    def name(self) -> str:
        """Registry key, also recorded on every OcrResult."""
        return self.engine_name

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @abstractmethod
    async def load(self) -> None:
        """
        Check external requirements and mark the engine ready.

        Raises:
            ConfigurationError: If the engine cannot run with its options.
        """
        pass

    async def unload(self) -> None:
        self._loaded = False

    @abstractmethod
    async def read(self, image_bytes: bytes, options: OcrEngineOptions) -> OcrResult:
        """
        Recognize text in an encoded image.

        Args:
            image_bytes: PNG, JPEG or any format the engine can decode.
            options: Per-call options; currently the language code.

        Raises:
            RuntimeError: If called before load().
            ImageDecodeError: If the bytes are not a readable image.
        """
        pass

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            raise RuntimeError(f"{type(self).__name__} ('{self.name}') is not loaded; await load() before read()")
