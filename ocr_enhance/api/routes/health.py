import os

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ocr_enhance.ocr.base import BaseOCREngine
from ocr_enhance.services.factory import get_image_store, get_ocr_engine
from ocr_enhance.storage.local import LocalImageStore

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    storage: str
    ocr_engine: str
    ocr_engine_loaded: bool


@router.get("/health", response_model=HealthResponse)
async def health_check(
    store: LocalImageStore = Depends(get_image_store),
    engine: BaseOCREngine = Depends(get_ocr_engine),
):
    """
    Check API, storage and OCR engine health.

    Storage is healthy when the storage root is a writable directory.
    """
    writable = store.root.is_dir() and os.access(store.root, os.W_OK)

    return HealthResponse(
        status="healthy",
        storage="healthy" if writable else "unhealthy",
        ocr_engine=engine.name,
        ocr_engine_loaded=engine.is_loaded,
    )
