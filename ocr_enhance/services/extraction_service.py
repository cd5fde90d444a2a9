import asyncio
import logging
import time
from pathlib import Path

from ocr_enhance.ocr.base import BaseOCREngine
from ocr_enhance.schemas.ocr import OCR_ONLY_PROMPT, ExtractionArtifact
from ocr_enhance.schemas.options import OcrEngineOptions
from ocr_enhance.services.enhancement_service import EnhancementService
from ocr_enhance.storage.base import ImageStore

logger = logging.getLogger(__name__)


class ExtractionService:
    """
    Runs OCR over stored images and writes the results next to them.

    For a reference R, text goes to `{storage_root}/R.ocr.txt` and the
    artifact record to `{storage_root}/R.ocr.json`.
    """

    def __init__(
        self,
        store: ImageStore,
        enhancement: EnhancementService,
        ocr: BaseOCREngine,
        storage_root: Path | str,
    ):
        self.store = store
        self.enhancement = enhancement
        self.ocr = ocr
        self.storage_root = Path(storage_root)

    async def extract_only(
        self,
        image_reference: str,
        ocr_options: OcrEngineOptions,
        save_txt: bool = True,
        save_json: bool = True,
    ) -> ExtractionArtifact:
        """
        OCR a single stored image without enhancement.

        Returns:
            The artifact, with the OCR-only sentinel as its prompt.

        Raises:
            ImageNotFoundError: If the image does not exist.
            ImageDecodeError: If the OCR engine cannot read the image.
        """
        return await self._extract(
            image_reference,
            base_reference=image_reference,
            prompt=OCR_ONLY_PROMPT,
            ocr_options=ocr_options,
            save_txt=save_txt,
            save_json=save_json,
        )

    async def enhance_and_extract(
        self,
        image_reference: str,
        prompt: str,
        ocr_options: OcrEngineOptions,
        include_original: bool = True,
        save_txt: bool = True,
        save_json: bool = True,
    ) -> list[ExtractionArtifact]:
        """
        Enhance an image, then OCR every variant (and optionally the original).

        The original comes first when included and not already among the
        variant references (compared case-insensitively). References are
        processed one at a time in that order.

        Returns:
            One artifact per processed reference, in processing order.
        """
        references = await self.enhancement.enhance(image_reference, prompt)

        if include_original and image_reference.lower() not in {r.lower() for r in references}:
            references.insert(0, image_reference)

        artifacts = []
        for reference in references:
            artifact = await self._extract(
                reference,
                base_reference=image_reference,
                prompt=prompt,
                ocr_options=ocr_options,
                save_txt=save_txt,
                save_json=save_json,
            )
            artifacts.append(artifact)

        return artifacts

    async def _extract(
        self,
        reference: str,
        base_reference: str,
        prompt: str,
        ocr_options: OcrEngineOptions,
        save_txt: bool,
        save_json: bool,
    ) -> ExtractionArtifact:
        stream = await self.store.open_read(reference)
        with stream:
            image_bytes = stream.read()

        started = time.perf_counter()
        result = await self.ocr.read(image_bytes, ocr_options)
        elapsed_ms = int((time.perf_counter() - started) * 1000)

        logger.info(f"OCR of {reference} finished in {elapsed_ms}ms ({len(result.words)} words)")

        artifact = ExtractionArtifact(
            image_reference=reference,
            base_reference=base_reference,
            prompt=prompt,
            ms=elapsed_ms,
            result=result,
        )

        if save_txt:
            txt_path = self.storage_root / f"{reference}.ocr.txt"
            artifact.txt_path = str(txt_path)
            await asyncio.to_thread(txt_path.write_text, result.text or "", encoding="utf-8")

        if save_json:
            json_path = self.storage_root / f"{reference}.ocr.json"
            artifact.json_path = str(json_path)
            await asyncio.to_thread(json_path.write_text, artifact.to_json(), encoding="utf-8")

        return artifact
