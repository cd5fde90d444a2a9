from typing import Type

from ocr_enhance.ocr.base import BaseOCREngine


class OCREngineRegistry:
    """
    Engine classes keyed by their `engine_name`.

    Engines add themselves with the class decorator and the service factory
    builds the one named in settings:

        @OCREngineRegistry.register
        class TesseractOCREngine(BaseOCREngine):
            engine_name = "tesseract"
    """

    _engines: dict[str, Type[BaseOCREngine]] = {}

    @classmethod
    def register(cls, engine_class: Type[BaseOCREngine]) -> Type[BaseOCREngine]:
        key = engine_class.engine_name.strip().lower()
        if not key:
            raise ValueError(f"{engine_class.__name__} has no engine_name")

        current = cls._engines.get(key)
        if current is not None and current is not engine_class:
            raise ValueError(f"OCR engine '{key}' is already registered by {current.__name__}")

        cls._engines[key] = engine_class
        return engine_class

    @classmethod
    def create_engine(cls, name: str, **engine_options) -> BaseOCREngine | None:
        """
        Instantiate a registered engine (not loaded yet).

        Names are matched case-insensitively. Returns None for unknown names
        so callers can report the available ones.
        """
        engine_class = cls._engines.get((name or "").strip().lower())
        if engine_class is None:
            return None
        return engine_class(**engine_options)

    @classmethod
    def list_registered(cls) -> list[str]:
        return sorted(cls._engines)

    @classmethod
    def is_registered(cls, name: str) -> bool:
        return (name or "").strip().lower() in cls._engines
