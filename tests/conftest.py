"""Shared fixtures and test doubles."""

import asyncio

import cv2
import numpy as np
import pytest

from ocr_enhance.ocr.mock import MockOCREngine
from ocr_enhance.planning.base import PromptPlanner, RunOptionsPlanner
from ocr_enhance.schemas.options import RunOptions
from ocr_enhance.schemas.plan import EnhancementPlan
from ocr_enhance.services.enhancement_service import EnhancementService
from ocr_enhance.services.extraction_service import ExtractionService
from ocr_enhance.storage.local import LocalImageStore


def make_png(width: int = 40, height: int = 30, color=(200, 120, 40)) -> bytes:
    """Solid-color PNG of the given size."""
    image = np.full((height, width, 3), color, dtype=np.uint8)
    success, buffer = cv2.imencode(".png", image)
    assert success
    return buffer.tobytes()


def decode_png(data: bytes) -> np.ndarray:
    image = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_COLOR)
    assert image is not None
    return image


def make_plan(*variants) -> EnhancementPlan:
    """Plan from (name, [(op, params), ...]) tuples."""
    return EnhancementPlan.model_validate(
        {
            "variants": [
                {"name": name, "steps": [{"op": op, "params": params} for op, params in steps]}
                for name, steps in variants
            ]
        }
    )


class FakePromptPlanner(PromptPlanner):
    """Returns a canned plan (empty when none is given) and records the prompts."""

    def __init__(self, plan: EnhancementPlan | None = None, error: Exception | None = None):
        self.plan = plan
        self.error = error
        self.prompts = []

    async def get_plan(self, prompt: str) -> EnhancementPlan:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.plan if self.plan is not None else EnhancementPlan()


class RecordingOptionsPlanner(RunOptionsPlanner):
    """Returns canned options (or raises) and counts calls."""

    def __init__(self, options: RunOptions | None = None, error: Exception | None = None):
        self.options = options or RunOptions()
        self.error = error
        self.calls = 0

    async def get_options(self, prompt: str) -> RunOptions:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.options


@pytest.fixture
def storage_root(tmp_path):
    root = tmp_path / "images"
    root.mkdir()
    return root


@pytest.fixture
def store(storage_root):
    return LocalImageStore(storage_root)


@pytest.fixture
def base_reference(store):
    return asyncio.run(store.save(make_png(), ".png", "page"))


@pytest.fixture
def ocr_engine():
    engine = MockOCREngine()
    asyncio.run(engine.load())
    return engine


@pytest.fixture
def two_variant_plan():
    return make_plan(
        ("bright", [("brightness", {"delta": 20})]),
        ("big", [("zoom", {"scale": 2.0})]),
    )


@pytest.fixture
def extraction_factory(store, ocr_engine, storage_root):
    """Build an ExtractionService around a given plan."""

    def build(plan: EnhancementPlan | None = None, planner: PromptPlanner | None = None) -> ExtractionService:
        enhancement = EnhancementService(store, planner or FakePromptPlanner(plan))
        return ExtractionService(store, enhancement, ocr_engine, storage_root)

    return build
