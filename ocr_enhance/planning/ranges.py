"""
Inclusive parameter sweeps.

Used to try one operation over a range of values, e.g. rotation angles
from -4 to 4, as one variant per value.
"""

from collections.abc import Sequence

from ocr_enhance.planning.base import PromptPlanner
from ocr_enhance.schemas.plan import EnhancementPlan, PlanStep, PlanVariant


def build_inclusive_range(start: int, end: int, step: int) -> list[int]:
    """
    Build an inclusive integer range from start towards end.

    Direction comes from comparing start and end, not from the sign of
    step. Values never pass beyond end.

        build_inclusive_range(0, 10, 5)   -> [0, 5, 10]
        build_inclusive_range(0, 10, 6)   -> [0, 6]
        build_inclusive_range(10, 0, -5)  -> [10, 5, 0]

    Raises:
        ValueError: If step is 0.
    """
    if step == 0:
        raise ValueError("Step cannot be 0.")
    step = abs(step)

    if start <= end:
        return list(range(start, end + 1, step))
    return list(range(start, end - 1, -step))


def sweep_plan(
    op: str,
    param: str,
    start: int,
    end: int,
    step: int = 1,
    base_steps: Sequence[PlanStep] = (),
) -> EnhancementPlan:
    """
    Build a plan with one variant per value of a swept parameter.

    Each variant runs base_steps first, then `op` with `param` set to the
    value. Variants are named `{op}_{param}_{value}`.
    """
    variants = [
        PlanVariant(
            name=f"{op}_{param}_{value}",
            steps=[*base_steps, PlanStep(op=op, params={param: value})],
        )
        for value in build_inclusive_range(start, end, step)
    ]
    return EnhancementPlan(variants=variants)


class SweepPromptPlanner(PromptPlanner):
    """Planner that ignores the prompt and returns a fixed sweep plan."""

    def __init__(
        self,
        op: str,
        param: str,
        start: int,
        end: int,
        step: int = 1,
        base_steps: Sequence[PlanStep] = (),
    ):
        self.plan = sweep_plan(op, param, start, end, step, base_steps)

    async def get_plan(self, prompt: str) -> EnhancementPlan:
        return self.plan
