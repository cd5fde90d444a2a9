import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from ocr_enhance.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class PlannerConfig(BaseModel):
    """Configuration for the remote planning backend."""

    endpoint: str = Field(
        default="https://api.openai.com/v1/responses",
        description="Responses API endpoint used for plan and options requests",
    )
    model: str = Field(default="gpt-4.1-mini", description="Model name sent with each planning request")
    api_key_env_var: str = Field(
        default="OPENAI_API_KEY",
        description="Environment variable holding the planner API key",
    )
    timeout: float = Field(default=60.0, gt=0, description="Request timeout in seconds")


class TesseractConfig(BaseModel):
    """Configuration for the Tesseract OCR engine."""

    data_path: Path | None = Field(
        default=None,
        description="Directory containing *.traineddata files (None = Tesseract default)",
    )
    page_segmentation_mode: int = Field(default=3, ge=0, le=13, description="Tesseract --psm value")
    oem: int = Field(default=3, ge=0, le=3, description="Tesseract --oem value")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    debug: bool = False

    # Storage (mounted volume)
    storage_root: Path = Path("/app/data/images")
    max_upload_mb: int = 50

    # OCR Settings
    ocr_engine: str = "tesseract"
    default_language: str = "eng"
    tesseract: TesseractConfig = TesseractConfig()

    # Planning backend
    planner: PlannerConfig = PlannerConfig()

    @property
    def planner_configured(self) -> bool:
        """Whether the planner API key environment variable is set."""
        return bool(os.environ.get(self.planner.api_key_env_var, "").strip())

    @property
    def planner_api_key(self) -> str:
        """Read the planner API key from the configured environment variable."""
        api_key = os.environ.get(self.planner.api_key_env_var, "").strip()
        if not api_key:
            raise ConfigurationError(
                f"Environment variable '{self.planner.api_key_env_var}' is not set"
            )
        return api_key

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_nested_delimiter = "__"


settings = Settings()
