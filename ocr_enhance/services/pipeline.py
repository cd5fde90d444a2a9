import logging

from ocr_enhance.planning.options import RunOptionsResolver
from ocr_enhance.schemas.ocr import ExtractionArtifact
from ocr_enhance.schemas.options import OcrEngineOptions
from ocr_enhance.services.extraction_service import ExtractionService

logger = logging.getLogger(__name__)


class OcrPipeline:
    """Top-level prompt-driven run: decide options, then extract with or without enhancement."""

    def __init__(self, resolver: RunOptionsResolver, extraction: ExtractionService):
        self.resolver = resolver
        self.extraction = extraction

    async def run(self, image_reference: str, prompt: str) -> list[ExtractionArtifact]:
        """
        Run the pipeline for one stored image.

        Args:
            image_reference: Reference of the stored image.
            prompt: Free-form instructions.

        Returns:
            Artifacts in processing order (a single one for OCR-only runs).
        """
        options = await self.resolver.resolve(prompt)
        ocr_options = OcrEngineOptions(language=options.language)

        if not options.run_enhancement:
            logger.info(f"Running OCR only for {image_reference}")
            artifact = await self.extraction.extract_only(
                image_reference,
                ocr_options,
                save_txt=options.save_txt,
                save_json=options.save_json,
            )
            return [artifact]

        logger.info(f"Running enhancement and OCR for {image_reference}")
        return await self.extraction.enhance_and_extract(
            image_reference,
            prompt,
            ocr_options,
            include_original=options.include_original,
            save_txt=options.save_txt,
            save_json=options.save_json,
        )
