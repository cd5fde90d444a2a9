import glob
import logging
import mimetypes
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO

from PIL import Image, UnidentifiedImageError

from ocr_enhance.exceptions import ImageNotFoundError
from ocr_enhance.schemas.image import ImageAsset

from .base import ImageStore
from .references import RandomReferenceGenerator, ReferenceGenerator

logger = logging.getLogger(__name__)

# Files written next to images that must never resolve as images themselves
ARTIFACT_SUFFIXES = (".ocr.txt", ".ocr.json")

# Upper bound on numeric disambiguators tried for one suggested reference
MAX_DISAMBIGUATOR = 999


def normalize_extension(extension: str | None) -> str:
    """Return the extension with a leading dot, defaulting to '.png'."""
    extension = (extension or "").strip()
    if not extension:
        return ".png"
    if not extension.startswith("."):
        extension = "." + extension
    return extension


def _validate_reference(reference: str) -> str:
    """Reject references that could escape the storage root."""
    reference = (reference or "").strip()
    if not reference:
        raise ValueError("Image reference cannot be empty")
    if "/" in reference or "\\" in reference or ".." in reference:
        raise ValueError(f"Invalid image reference: {reference!r}")
    return reference


def _write(path: Path, image: bytes | BinaryIO) -> None:
    with open(path, "wb") as buffer:
        if isinstance(image, (bytes, bytearray)):
            buffer.write(image)
        else:
            shutil.copyfileobj(image, buffer)


class LocalImageStore(ImageStore):
    """
    Filesystem-backed image store.

    An image with reference 'ABC' is stored as '<root>/ABC.<ext>'; variants
    are stored as '<root>/ABC_<suffix>.<ext>'. OCR artifacts written next to
    images ('ABC.ocr.txt', 'ABC.ocr.json') are ignored by lookups.
    """

    def __init__(self, root: Path | str, reference_generator: ReferenceGenerator | None = None):
        """
        Initialize the store.

        Args:
            root: Storage root directory. Created if missing.
            reference_generator: Strategy for references when none is suggested.
        """
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        self.reference_generator = reference_generator or RandomReferenceGenerator()

    def _find(self, reference: str) -> Path | None:
        pattern = str(self.root / f"{glob.escape(reference)}.*")
        for candidate in sorted(glob.glob(pattern)):
            if candidate.lower().endswith(ARTIFACT_SUFFIXES):
                continue
            path = Path(candidate)
            # 'ABC.*' also matches 'ABC.v2.png'; only a single extension counts
            if path.is_file() and path.stem == reference:
                return path
        return None

    def path_for(self, reference: str) -> Path:
        """
        Resolve the file backing a reference.

        Raises:
            ImageNotFoundError: If nothing is stored under the reference.
        """
        path = self._find(_validate_reference(reference))
        if path is None:
            raise ImageNotFoundError(reference)
        return path

    def _free_reference(self, reference: str) -> str:
        if self._find(reference) is None:
            return reference

        for index in range(1, MAX_DISAMBIGUATOR + 1):
            candidate = f"{reference}_{index:03d}"
            if self._find(candidate) is None:
                return candidate

        raise FileExistsError(f"No free reference left for '{reference}'")

    async def save(
        self,
        image: bytes | BinaryIO,
        extension: str,
        suggested_reference: str | None = None,
    ) -> str:
        extension = normalize_extension(extension)

        if isinstance(image, (bytes, bytearray)):
            data = bytes(image)
        else:
            data = image.read()

        if suggested_reference and suggested_reference.strip():
            base = _validate_reference(suggested_reference)
        else:
            base = self.reference_generator.create_reference(data)

        reference = self._free_reference(base)
        path = self.root / f"{reference}{extension}"
        _write(path, data)

        logger.info(f"Stored image '{reference}' ({len(data)} bytes) at {path}")
        return reference

    async def exists(self, reference: str) -> bool:
        try:
            return self._find(_validate_reference(reference)) is not None
        except ValueError:
            return False

    async def open_read(self, reference: str) -> BinaryIO:
        return open(self.path_for(reference), "rb")

    async def save_variant(
        self,
        image: bytes | BinaryIO,
        base_reference: str,
        suffix: str,
        extension: str,
    ) -> str:
        extension = normalize_extension(extension)
        variant_reference = _validate_reference(f"{base_reference}_{suffix}")

        # Re-running a plan replaces earlier files for the same variant reference
        existing = self._find(variant_reference)
        if existing is not None and existing.suffix != extension:
            existing.unlink()

        path = self.root / f"{variant_reference}{extension}"
        _write(path, image)

        logger.debug(f"Stored variant '{variant_reference}' at {path}")
        return variant_reference

    async def describe(self, reference: str) -> ImageAsset:
        path = self.path_for(reference)
        stat = path.stat()

        width = height = None
        try:
            with Image.open(path) as img:
                width, height = img.size
        except (UnidentifiedImageError, OSError) as e:
            logger.warning(f"Could not read dimensions of '{reference}': {e}")

        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"

        return ImageAsset(
            reference=reference,
            file_name=path.name,
            content_type=content_type,
            size_bytes=stat.st_size,
            width=width,
            height=height,
            created_utc=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
        )
