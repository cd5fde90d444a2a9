from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ImageAsset(BaseModel):
    """Metadata describing a stored image."""

    model_config = ConfigDict(populate_by_name=True)

    reference: str
    file_name: str = Field(alias="fileName")
    content_type: str = Field(alias="contentType")
    size_bytes: int = Field(alias="sizeBytes", ge=0)
    width: int | None = None
    height: int | None = None
    created_utc: datetime = Field(alias="createdUtc")
