"""Prompt planning: enhancement plans and run options."""

from ocr_enhance.planning.base import PromptPlanner, RunOptionsPlanner
from ocr_enhance.planning.openai import OpenAIPromptPlanner, OpenAIResponsesClient, OpenAIRunOptionsPlanner
from ocr_enhance.planning.options import RunOptionsResolver
from ocr_enhance.planning.ranges import SweepPromptPlanner, build_inclusive_range, sweep_plan

__all__ = [
    "PromptPlanner",
    "RunOptionsPlanner",
    "OpenAIPromptPlanner",
    "OpenAIResponsesClient",
    "OpenAIRunOptionsPlanner",
    "RunOptionsResolver",
    "SweepPromptPlanner",
    "build_inclusive_range",
    "sweep_plan",
]
