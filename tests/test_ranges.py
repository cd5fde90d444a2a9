"""Tests for inclusive ranges and sweep plans."""

import asyncio

import pytest

from ocr_enhance.planning.ranges import SweepPromptPlanner, build_inclusive_range, sweep_plan
from ocr_enhance.schemas.plan import PlanStep


class TestBuildInclusiveRange:
    """build_inclusive_range."""

    @pytest.mark.parametrize(
        "start, end, step, expected",
        [
            (0, 10, 5, [0, 5, 10]),
            (0, 10, 6, [0, 6]),
            (10, 0, 5, [10, 5, 0]),
            (10, 0, -5, [10, 5, 0]),
            (-2, 2, 1, [-2, -1, 0, 1, 2]),
            (3, 3, 4, [3]),
        ],
    )
    def test_values(self, start, end, step, expected):
        assert build_inclusive_range(start, end, step) == expected

    def test_zero_step(self):
        with pytest.raises(ValueError, match="Step cannot be 0"):
            build_inclusive_range(0, 10, 0)


class TestSweepPlan:
    """sweep_plan and SweepPromptPlanner."""

    def test_one_variant_per_value(self):
        plan = sweep_plan("rotate", "angle", -2, 2, 2)

        assert [v.name for v in plan.variants] == ["rotate_angle_-2", "rotate_angle_0", "rotate_angle_2"]
        assert plan.variants[0].steps[0].op == "rotate"
        assert plan.variants[0].steps[0].params == {"angle": -2}

    def test_base_steps_come_first(self):
        base = [PlanStep(op="autocontrast")]
        plan = sweep_plan("gamma", "value", 1, 2, 1, base_steps=base)

        assert [s.op for s in plan.variants[1].steps] == ["autocontrast", "gamma"]

    def test_planner_ignores_prompt(self):
        planner = SweepPromptPlanner("zoom", "scale", 1, 3)
        plan = asyncio.run(planner.get_plan("anything"))
        assert len(plan.variants) == 3
