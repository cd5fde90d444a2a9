from abc import ABC, abstractmethod

from ocr_enhance.schemas.options import RunOptions
from ocr_enhance.schemas.plan import EnhancementPlan


class PromptPlanner(ABC):
    """Turns a free-form enhancement prompt into an EnhancementPlan."""

    @abstractmethod
    async def get_plan(self, prompt: str) -> EnhancementPlan:
        """
        Build an enhancement plan for a prompt.

        Args:
            prompt: Natural language enhancement instructions.

        Returns:
            Plan with at least one variant.

        Raises:
            PlannerError: If no usable plan could be produced.
        """
        pass


class RunOptionsPlanner(ABC):
    """Turns a free-form prompt into RunOptions through a planning backend."""

    @abstractmethod
    async def get_options(self, prompt: str) -> RunOptions:
        """
        Ask the backend for run options.

        Raises:
            PlannerError: If the backend fails or returns an unusable document.
        """
        pass
