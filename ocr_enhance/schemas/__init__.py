"""Data models shared by the services and the HTTP API."""

from ocr_enhance.schemas.image import ImageAsset
from ocr_enhance.schemas.ocr import OCR_ONLY_PROMPT, ExtractionArtifact, OcrResult, OcrWord
from ocr_enhance.schemas.options import OcrEngineOptions, RunOptions
from ocr_enhance.schemas.plan import EnhancementPlan, PlanStep, PlanVariant

__all__ = [
    "ImageAsset",
    "OCR_ONLY_PROMPT",
    "ExtractionArtifact",
    "OcrResult",
    "OcrWord",
    "OcrEngineOptions",
    "RunOptions",
    "EnhancementPlan",
    "PlanStep",
    "PlanVariant",
]
