import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

# Import OCR engines to register them
import ocr_enhance.ocr  # noqa: F401

from ocr_enhance.api.routes import health, images, ocr
from ocr_enhance.config import settings
from ocr_enhance.exceptions import ConfigurationError
from ocr_enhance.imaging import OperationRegistry
from ocr_enhance.ocr.registry import OCREngineRegistry
from ocr_enhance.services.factory import get_ocr_engine

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info("Starting OCR Enhance API")
    settings.storage_root.mkdir(parents=True, exist_ok=True)
    logger.info(f"Storage root: {settings.storage_root}")
    logger.info(f"Registered OCR engines: {OCREngineRegistry.list_registered()}")
    logger.info(f"Registered image operations: {OperationRegistry.list_registered()}")

    engine = None
    try:
        engine = get_ocr_engine()
        await engine.load()
        logger.info(f"OCR engine: {engine.name}")
    except ConfigurationError as e:
        logger.error(f"OCR engine unavailable, OCR endpoints will return 503: {e}")

    if not settings.planner_configured:
        logger.warning(
            f"'{settings.planner.api_key_env_var}' is not set; enhancement planning is unavailable"
        )

    yield

    # Shutdown
    if engine is not None:
        await engine.unload()
    logger.info("Shutting down OCR Enhance API")


app = FastAPI(
    title="OCR Enhance API",
    description="Prompt-driven image enhancement and OCR extraction",
    version="1.0.0",
    lifespan=lifespan,
)

# Include routers
app.include_router(health.router)
app.include_router(images.router)
app.include_router(ocr.router)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "OCR Enhance API",
        "version": "1.0.0",
        "docs": "/docs",
    }
