"""HTTP API tests with in-memory collaborators."""

import pytest
from fastapi.testclient import TestClient

from conftest import FakePromptPlanner, RecordingOptionsPlanner, make_plan, make_png
from ocr_enhance.api.routes.ocr import enhancement_service, extraction_service, pipeline_service
from ocr_enhance.exceptions import PlannerError
from ocr_enhance.main import app
from ocr_enhance.ocr.mock import MockOCREngine
from ocr_enhance.planning.options import RunOptionsResolver
from ocr_enhance.services import factory
from ocr_enhance.services.enhancement_service import EnhancementService
from ocr_enhance.services.extraction_service import ExtractionService
from ocr_enhance.services.factory import get_image_store, get_ocr_engine, get_options_resolver
from ocr_enhance.services.pipeline import OcrPipeline


@pytest.fixture
def planner(two_variant_plan):
    return FakePromptPlanner(two_variant_plan)


@pytest.fixture
def client(store, ocr_engine, storage_root, planner):
    enhancement = EnhancementService(store, planner)
    extraction = ExtractionService(store, enhancement, ocr_engine, storage_root)
    resolver = RunOptionsResolver(RecordingOptionsPlanner())

    app.dependency_overrides[get_image_store] = lambda: store
    app.dependency_overrides[get_ocr_engine] = lambda: ocr_engine
    app.dependency_overrides[get_options_resolver] = lambda: resolver
    app.dependency_overrides[enhancement_service] = lambda: enhancement
    app.dependency_overrides[extraction_service] = lambda: extraction
    app.dependency_overrides[pipeline_service] = lambda: OcrPipeline(resolver, extraction)

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def uploaded(client):
    response = client.post("/images", files={"file": ("page.png", make_png(), "image/png")})
    assert response.status_code == 201
    return response.json()["reference"]


class TestHealth:
    """GET /health."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["storage"] == "healthy"
        assert body["ocr_engine"] == "mock"
        assert body["ocr_engine_loaded"] is True


class TestImages:
    """Upload and metadata endpoints."""

    def test_upload_and_describe(self, client):
        response = client.post("/images", files={"file": ("My Scan.png", make_png(40, 30), "image/png")})

        assert response.status_code == 201
        body = response.json()
        assert body["reference"] == "My_Scan"
        assert body["fileName"] == "My_Scan.png"
        assert body["contentType"] == "image/png"
        assert (body["width"], body["height"]) == (40, 30)

        assert client.get("/images/My_Scan").json()["sizeBytes"] == body["sizeBytes"]

    def test_rejects_non_images(self, client):
        response = client.post("/images", files={"file": ("notes.png", b"hello world", "image/png")})
        assert response.status_code == 400

    def test_unknown_image(self, client):
        assert client.get("/images/ghost").status_code == 404


class TestOcrEndpoints:
    """Enhancement and OCR endpoints."""

    def test_enhance(self, client, uploaded, planner):
        response = client.post("/ocr/enhance", json={"imageReference": uploaded, "prompt": "sharpen"})

        assert response.status_code == 200
        assert response.json()["references"] == ["page_v001_bright", "page_v002_big"]
        assert planner.prompts == ["sharpen"]

    def test_enhance_unknown_image(self, client):
        response = client.post("/ocr/enhance", json={"imageReference": "ghost", "prompt": "sharpen"})
        assert response.status_code == 404

    def test_enhance_planner_failure(self, client, uploaded, planner):
        planner.error = PlannerError("upstream 500")
        response = client.post("/ocr/enhance", json={"imageReference": uploaded, "prompt": "sharpen"})
        assert response.status_code == 502

    def test_enhance_unsupported_op(self, client, uploaded, planner):
        planner.plan = make_plan(("bad", [("melt", {})]))
        response = client.post("/ocr/enhance", json={"imageReference": uploaded, "prompt": "melt it"})

        assert response.status_code == 400
        assert "melt" in response.json()["detail"]

    def test_sweep(self, client, uploaded):
        response = client.post(
            "/ocr/sweep",
            json={"imageReference": uploaded, "op": "rotate", "param": "angle", "start": -1, "end": 1},
        )

        assert response.status_code == 200
        assert response.json()["references"] == [
            "page_v001_rotate_angle_-1",
            "page_v002_rotate_angle_0",
            "page_v003_rotate_angle_1",
        ]

    def test_sweep_zero_step(self, client, uploaded):
        response = client.post(
            "/ocr/sweep",
            json={"imageReference": uploaded, "op": "gamma", "param": "value", "start": 1, "end": 2, "step": 0},
        )
        assert response.status_code == 400

    def test_run(self, client, uploaded):
        response = client.post("/ocr/run", json={"imageReference": uploaded, "prompt": "create 3 variants"})

        assert response.status_code == 200
        artifacts = response.json()
        assert [a["imageReference"] for a in artifacts] == ["page", "page_v001_bright", "page_v002_big"]
        assert artifacts[0]["result"]["engine"] == "mock"

    def test_extract(self, client, uploaded):
        response = client.post(
            "/ocr/extract",
            json={"imageReference": uploaded, "language": "ita", "saveTxt": False},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["prompt"] == "OCR_ONLY"
        assert body["txtPath"] is None
        assert body["jsonPath"].endswith("page.ocr.json")
        assert "(ita)" in body["result"]["text"]

    def test_extract_requires_loaded_engine(self, client, store, storage_root, uploaded, monkeypatch):
        app.dependency_overrides.pop(extraction_service)
        monkeypatch.setattr(
            factory, "_extraction_service", ExtractionService(store, None, MockOCREngine(), storage_root)
        )

        response = client.post("/ocr/extract", json={"imageReference": uploaded})

        assert response.status_code == 503
        assert "not loaded" in response.json()["detail"]

    def test_options(self, client):
        response = client.post("/ocr/options", json={"prompt": "return only json"})

        assert response.status_code == 200
        assert response.json() == {
            "runEnhancement": False,
            "includeOriginal": True,
            "saveTxt": False,
            "saveJson": True,
            "language": "eng",
        }
