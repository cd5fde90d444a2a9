import logging

from ocr_enhance.exceptions import ImageNotFoundError, PlannerError
from ocr_enhance.imaging import OUTPUT_EXTENSION, ImageProcessor
from ocr_enhance.planning.base import PromptPlanner
from ocr_enhance.storage.base import ImageStore

logger = logging.getLogger(__name__)


def sanitize_variant_name(name: str | None) -> str:
    """
    Reduce a variant name to characters safe for a storage suffix.

    Keeps letters, digits, '_' and '-', trims leading/trailing '_' and '-',
    and falls back to 'variant' when nothing is left.
    """
    if name is None or not name.strip():
        return "variant"
    cleaned = "".join(ch for ch in name if ch.isalnum() or ch in "_-").strip("_-")
    return cleaned or "variant"


def variant_suffix(index: int, name: str | None) -> str:
    """Suffix for the index-th (1-based) variant of a plan, e.g. 'v001_high_contrast'."""
    return f"v{index:03d}_{sanitize_variant_name(name)}"


class EnhancementService:
    """
    Produces enhanced variants of a stored image from a prompt.

    The prompt planner supplies the plan; every variant is applied to the
    original image and saved as a variant of it, in plan order.
    """

    def __init__(self, store: ImageStore, planner: PromptPlanner, processor: ImageProcessor | None = None):
        self.store = store
        self.planner = planner
        self.processor = processor or ImageProcessor()

    async def enhance(self, image_reference: str, prompt: str) -> list[str]:
        """
        Generate and store all variants for a prompt.

        Args:
            image_reference: Reference of the stored base image.
            prompt: Enhancement instructions passed to the planner.

        Returns:
            References of the stored variants, in plan order.

        Raises:
            ImageNotFoundError: If the base image does not exist.
            PlannerError: If no plan could be obtained or it has no variants.
            ImageDecodeError: If the base image cannot be decoded.
            UnsupportedOperationError: If a step names an unknown operation.
        """
        if not await self.store.exists(image_reference):
            raise ImageNotFoundError(image_reference)

        plan = await self.planner.get_plan(prompt)
        if plan.is_empty:
            raise PlannerError(f"Planner returned no variants for prompt: {prompt!r}")
        logger.info(f"Plan for {image_reference} has {len(plan.variants)} variants")

        references = []
        base_stream = await self.store.open_read(image_reference)
        with base_stream:
            for index, variant in enumerate(plan.variants, start=1):
                base_stream.seek(0)
                output = await self.processor.apply(base_stream, variant.steps)

                suffix = variant_suffix(index, variant.name)
                saved = await self.store.save_variant(output, image_reference, suffix, OUTPUT_EXTENSION)
                logger.info(f"Saved variant {saved} ({len(variant.steps)} steps)")
                references.append(saved)

        return references
