import logging
from contextlib import contextmanager

from fastapi import APIRouter, Depends, HTTPException, status

from ocr_enhance.config import settings
from ocr_enhance.exceptions import (
    ConfigurationError,
    ImageDecodeError,
    ImageNotFoundError,
    PlannerError,
    UnsupportedOperationError,
)
from ocr_enhance.ocr.base import BaseOCREngine
from ocr_enhance.planning.options import RunOptionsResolver
from ocr_enhance.planning.ranges import SweepPromptPlanner
from ocr_enhance.schemas.ocr import (
    EnhanceRequest,
    EnhanceResponse,
    ExtractionArtifact,
    ExtractRequest,
    OptionsRequest,
    RunRequest,
    SweepRequest,
)
from ocr_enhance.schemas.options import OcrEngineOptions, RunOptions
from ocr_enhance.services.enhancement_service import EnhancementService
from ocr_enhance.services.extraction_service import ExtractionService
from ocr_enhance.services.factory import (
    get_enhancement_service,
    get_extraction_service,
    get_image_store,
    get_options_resolver,
    get_pipeline,
)
from ocr_enhance.services.pipeline import OcrPipeline
from ocr_enhance.storage.base import ImageStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ocr", tags=["OCR"])


@contextmanager
def service_errors():
    """Translate pipeline errors into HTTP errors."""
    try:
        yield
    except ImageNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (ImageDecodeError, UnsupportedOperationError, ValueError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PlannerError as e:
        logger.error(f"Planner failed: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Planner failed: {e}")
    except ConfigurationError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


def _require_loaded(engine: BaseOCREngine) -> None:
    if not engine.is_loaded:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"OCR engine '{engine.name}' is not loaded",
        )


def enhancement_service() -> EnhancementService:
    """Enhancement service dependency."""
    with service_errors():
        return get_enhancement_service()


def extraction_service() -> ExtractionService:
    """Extraction service dependency; requires a loaded OCR engine."""
    with service_errors():
        service = get_extraction_service()
    _require_loaded(service.ocr)
    return service


def pipeline_service() -> OcrPipeline:
    """Pipeline dependency; requires a loaded OCR engine."""
    with service_errors():
        pipeline = get_pipeline()
    _require_loaded(pipeline.extraction.ocr)
    return pipeline


@router.post("/enhance", response_model=EnhanceResponse)
async def enhance(
    request: EnhanceRequest,
    service: EnhancementService = Depends(enhancement_service),
):
    """
    Generate enhanced variants of a stored image.

    The prompt is turned into a plan by the planner; every variant is
    stored as a new image. Returns the variant references in plan order.
    """
    with service_errors():
        references = await service.enhance(request.image_reference, request.prompt)
    return EnhanceResponse(references=references)


@router.post("/sweep", response_model=EnhanceResponse)
async def sweep(
    request: SweepRequest,
    store: ImageStore = Depends(get_image_store),
):
    """
    Generate one variant per value of an inclusive parameter range.

    For example op=rotate, param=angle, start=-2, end=2, step=1 stores
    five rotated variants. No planner is involved.
    """
    with service_errors():
        planner = SweepPromptPlanner(request.op, request.param, request.start, request.end, request.step)
        service = EnhancementService(store, planner)
        references = await service.enhance(request.image_reference, "")
    return EnhanceResponse(references=references)


@router.post("/run", response_model=list[ExtractionArtifact])
async def run(
    request: RunRequest,
    pipeline: OcrPipeline = Depends(pipeline_service),
):
    """
    Run the full prompt-driven pipeline.

    The prompt decides whether to enhance, whether to OCR the original
    too, and which files to write.
    """
    with service_errors():
        return await pipeline.run(request.image_reference, request.prompt)


@router.post("/extract", response_model=ExtractionArtifact)
async def extract(
    request: ExtractRequest,
    service: ExtractionService = Depends(extraction_service),
):
    """OCR a stored image without enhancement."""
    ocr_options = OcrEngineOptions(language=request.language or settings.default_language)

    with service_errors():
        return await service.extract_only(
            request.image_reference,
            ocr_options,
            save_txt=request.save_txt,
            save_json=request.save_json,
        )


@router.post("/options", response_model=RunOptions)
async def resolve_options(
    request: OptionsRequest,
    resolver: RunOptionsResolver = Depends(get_options_resolver),
):
    """Show the run options a prompt resolves to, without running anything."""
    return await resolver.resolve(request.prompt)
