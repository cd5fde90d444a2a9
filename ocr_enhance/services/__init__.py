from ocr_enhance.services.enhancement_service import EnhancementService, sanitize_variant_name
from ocr_enhance.services.extraction_service import ExtractionService
from ocr_enhance.services.pipeline import OcrPipeline

__all__ = [
    "EnhancementService",
    "ExtractionService",
    "OcrPipeline",
    "sanitize_variant_name",
]
