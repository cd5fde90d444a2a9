"""
Service wiring.

Builds the store, OCR engine, planners and services from settings and
keeps one instance of each per process.
"""

import logging

from ocr_enhance.config import settings
from ocr_enhance.exceptions import ConfigurationError
from ocr_enhance.ocr.base import BaseOCREngine
from ocr_enhance.ocr.registry import OCREngineRegistry
from ocr_enhance.planning.base import PromptPlanner
from ocr_enhance.planning.openai import OpenAIPromptPlanner, OpenAIResponsesClient, OpenAIRunOptionsPlanner
from ocr_enhance.planning.options import RunOptionsResolver
from ocr_enhance.services.enhancement_service import EnhancementService
from ocr_enhance.services.extraction_service import ExtractionService
from ocr_enhance.services.pipeline import OcrPipeline
from ocr_enhance.storage.local import LocalImageStore

logger = logging.getLogger(__name__)

_image_store: LocalImageStore | None = None
_ocr_engine: BaseOCREngine | None = None
_responses_client: OpenAIResponsesClient | None = None
_options_resolver: RunOptionsResolver | None = None
_enhancement_service: EnhancementService | None = None
_extraction_service: ExtractionService | None = None
_pipeline: OcrPipeline | None = None


def get_image_store() -> LocalImageStore:
    """Get or create the image store singleton."""
    global _image_store
    if _image_store is None:
        _image_store = LocalImageStore(settings.storage_root)
    return _image_store


def get_ocr_engine() -> BaseOCREngine:
    """
    Get or create the configured OCR engine (not loaded).

    Raises:
        ConfigurationError: If the configured engine is not registered.
    """
    global _ocr_engine
    if _ocr_engine is None:
        engine_options = {}
        if settings.ocr_engine == "tesseract":
            engine_options = settings.tesseract.model_dump()

        engine = OCREngineRegistry.create_engine(settings.ocr_engine, **engine_options)
        if engine is None:
            raise ConfigurationError(
                f"OCR engine '{settings.ocr_engine}' is not registered. "
                f"Available: {OCREngineRegistry.list_registered()}"
            )
        _ocr_engine = engine
    return _ocr_engine


def get_responses_client() -> OpenAIResponsesClient:
    """Get or create the planner API client; the API key is read per request."""
    global _responses_client
    if _responses_client is None:
        _responses_client = OpenAIResponsesClient(config=settings.planner)
    return _responses_client


def get_prompt_planner() -> PromptPlanner:
    """Create the remote prompt planner."""
    return OpenAIPromptPlanner(get_responses_client())


def get_options_resolver() -> RunOptionsResolver:
    """Get or create the run options resolver; local rules only when no API key is set."""
    global _options_resolver
    if _options_resolver is None:
        remote = None
        if settings.planner_configured:
            remote = OpenAIRunOptionsPlanner(get_responses_client())
        else:
            logger.warning(
                f"Options planner disabled: '{settings.planner.api_key_env_var}' is not set, "
                "prompts are resolved with local rules only"
            )
        _options_resolver = RunOptionsResolver(remote)
    return _options_resolver


def get_enhancement_service() -> EnhancementService:
    """Get or create the enhancement service singleton."""
    global _enhancement_service
    if _enhancement_service is None:
        _enhancement_service = EnhancementService(get_image_store(), get_prompt_planner())
    return _enhancement_service


def get_extraction_service() -> ExtractionService:
    """Get or create the extraction service singleton."""
    global _extraction_service
    if _extraction_service is None:
        _extraction_service = ExtractionService(
            get_image_store(),
            get_enhancement_service(),
            get_ocr_engine(),
            settings.storage_root,
        )
    return _extraction_service


def get_pipeline() -> OcrPipeline:
    """Get or create the pipeline singleton."""
    global _pipeline
    if _pipeline is None:
        _pipeline = OcrPipeline(get_options_resolver(), get_extraction_service())
    return _pipeline
