from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from ocr_enhance.config import settings
from ocr_enhance.exceptions import ImageNotFoundError
from ocr_enhance.schemas.image import ImageAsset
from ocr_enhance.services.factory import get_image_store
from ocr_enhance.storage.base import ImageStore
from ocr_enhance.utils.file_validation import (
    ValidationError,
    reference_from_filename,
    validate_filename,
    validate_image,
)

router = APIRouter(prefix="/images", tags=["Images"])


@router.post(
    "",
    response_model=ImageAsset,
    status_code=status.HTTP_201_CREATED,
)
async def upload_image(
    file: UploadFile = File(..., description="Image file to store"),
    store: ImageStore = Depends(get_image_store),
):
    """
    Store an uploaded image.

    The sanitized filename stem is used as the suggested reference; the
    store appends a numeric suffix if it is already taken.
    """
    try:
        safe_filename = validate_filename(file.filename or "image.png")
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid filename: {e}",
        )

    try:
        extension = validate_image(file.file, max_size_mb=settings.max_upload_mb)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid image file: {e}",
        )

    reference = await store.save(file.file, extension, reference_from_filename(safe_filename))
    return await store.describe(reference)


@router.get("/{reference}", response_model=ImageAsset)
async def get_image(reference: str, store: ImageStore = Depends(get_image_store)):
    """Get metadata for a stored image."""
    try:
        return await store.describe(reference)
    except ImageNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
