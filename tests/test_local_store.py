"""Tests for the filesystem image store."""

import asyncio
import io
import re

import pytest

from conftest import make_png
from ocr_enhance.exceptions import ImageNotFoundError
from ocr_enhance.storage import HashReferenceGenerator, LocalImageStore, RandomReferenceGenerator, normalize_extension


def save(store, data, extension=".png", reference=None):
    return asyncio.run(store.save(data, extension, reference))


class TestSave:
    """LocalImageStore.save."""

    def test_suggested_reference_is_used(self, store, storage_root):
        reference = save(store, make_png(), "png", "  scan  ")

        assert reference == "scan"
        assert (storage_root / "scan.png").exists()

    def test_taken_reference_gets_disambiguator(self, store):
        assert save(store, make_png(), ".png", "scan") == "scan"
        assert save(store, make_png(), ".jpg", "scan") == "scan_001"
        assert save(store, make_png(), ".png", "scan") == "scan_002"

    def test_generated_reference(self, store):
        reference = save(store, make_png())
        assert re.fullmatch(r"[0-9A-F]{8}", reference)

    def test_hash_references(self, storage_root):
        store = LocalImageStore(storage_root, HashReferenceGenerator())
        data = make_png()

        first = save(store, data)
        second = save(store, data)

        assert first.startswith("img_") and len(first) == 20
        assert second == f"{first}_001"

    def test_accepts_streams(self, store):
        reference = save(store, io.BytesIO(make_png()), ".png", "streamed")
        with asyncio.run(store.open_read(reference)) as f:
            assert f.read() == make_png()

    def test_rejects_path_traversal(self, store):
        with pytest.raises(ValueError):
            save(store, make_png(), ".png", "../evil")

    def test_extension_normalization(self):
        assert normalize_extension("jpg") == ".jpg"
        assert normalize_extension("") == ".png"
        assert normalize_extension(None) == ".png"


class TestLookup:
    """exists, open_read and describe."""

    def test_artifacts_are_not_images(self, store, storage_root):
        (storage_root / "notes.ocr.txt").write_text("hello")
        (storage_root / "notes.ocr.json").write_text("{}")

        assert not asyncio.run(store.exists("notes"))
        assert not asyncio.run(store.exists("notes.ocr"))

    def test_missing_reference(self, store):
        assert not asyncio.run(store.exists("nothing"))
        assert not asyncio.run(store.exists("../etc/passwd"))
        with pytest.raises(ImageNotFoundError, match="Unknown image reference: nothing"):
            asyncio.run(store.open_read("nothing"))

    def test_image_not_found_is_a_file_not_found_error(self, store):
        with pytest.raises(FileNotFoundError):
            asyncio.run(store.open_read("nothing"))

    def test_describe(self, store):
        reference = save(store, make_png(40, 30), ".png", "page")
        asset = asyncio.run(store.describe(reference))

        assert asset.reference == "page"
        assert asset.file_name == "page.png"
        assert asset.content_type == "image/png"
        assert asset.size_bytes > 0
        assert (asset.width, asset.height) == (40, 30)
        assert asset.created_utc.tzinfo is not None


class TestSaveVariant:
    """LocalImageStore.save_variant."""

    def test_variant_naming(self, store, storage_root):
        reference = asyncio.run(store.save_variant(make_png(), "page", "v001_clahe", ".png"))

        assert reference == "page_v001_clahe"
        assert (storage_root / "page_v001_clahe.png").exists()

    def test_rerun_overwrites(self, store, storage_root):
        asyncio.run(store.save_variant(make_png(10, 10), "page", "v001_a", ".jpg"))
        asyncio.run(store.save_variant(make_png(20, 20), "page", "v001_a", ".png"))

        assert sorted(p.name for p in storage_root.iterdir()) == ["page_v001_a.png"]
        assert asyncio.run(store.describe("page_v001_a")).width == 20


class TestReferenceGenerators:
    """Reference strategies."""

    def test_random_references_differ(self):
        generator = RandomReferenceGenerator()
        assert generator.create_reference(b"x") != generator.create_reference(b"x")

    def test_hash_is_deterministic(self):
        generator = HashReferenceGenerator(prefix="", length=8)
        assert generator.create_reference(b"abc") == "ba7816bf"

    def test_hash_length_bounds(self):
        with pytest.raises(ValueError):
            HashReferenceGenerator(length=0)
