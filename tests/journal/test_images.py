"""Tests for photojournal.journal.images."""

import io
import uuid

import pytest
from PIL import Image

from photojournal.core.exceptions import ImageStoreError
from photojournal.journal.images import ImageStore
from photojournal.journal.models import JournalEntry


class TestWrite:
    def test_write_returns_uuid_name_and_jpeg_file(self, image_store, make_image):
        name = image_store.write(make_image())
        assert name is not None
        uuid.UUID(name)
        assert "." not in name

        path = image_store.resolve(name)
        assert path == image_store.images_dir.resolve() / name
        with Image.open(path) as img:
            assert img.format == "JPEG"
            assert img.size == (8, 6)

    def test_write_names_are_unique(self, image_store, make_image):
        names = {image_store.write(make_image()) for _ in range(10)}
        assert len(names) == 10

    def test_write_accepts_pil_image_with_alpha(self, image_store):
        name = image_store.write(Image.new("RGBA", (4, 4), (255, 0, 0, 128)))
        with Image.open(image_store.resolve(name)) as img:
            assert img.mode == "RGB"

    def test_quality_affects_size(self, tmp_path):
        noisy = Image.effect_noise((64, 64), 80).convert("RGB")
        low = ImageStore(tmp_path / "low", jpeg_quality=10)
        high = ImageStore(tmp_path / "high", jpeg_quality=95)
        low_size = len(low.read(low.write(noisy)))
        high_size = len(high.read(high.write(noisy)))
        assert low_size < high_size

    def test_undecodable_bytes_yield_no_name(self, image_store):
        assert image_store.write(b"definitely not an image") is None
        result = image_store.write_result(b"definitely not an image")
        assert isinstance(result.error, ImageStoreError)
        assert image_store.names() == []

    def test_unsupported_input_type(self, image_store):
        result = image_store.write_result(12345)
        assert not result.ok
        assert "Unsupported" in str(result.error)

    def test_write_failure_yields_no_name(self, tmp_path, make_image):
        blocker = tmp_path / "images"
        blocker.write_text("a file where the directory should be")
        store = ImageStore(blocker)
        assert store.write(make_image()) is None
        result = store.write_result(make_image())
        assert isinstance(result.error, ImageStoreError)
        assert "Cannot create" in str(result.error)

    def test_failed_cleanup_does_not_raise(self, image_store, make_image, monkeypatch):
        fixed = uuid.UUID("12345678-1234-4234-8234-123456789abc")
        (image_store.images_dir / str(fixed)).mkdir(parents=True)
        monkeypatch.setattr(uuid, "uuid4", lambda: fixed)

        result = image_store.write_result(make_image())

        assert isinstance(result.error, ImageStoreError)
        assert "Cannot write" in str(result.error)
        assert image_store.write(make_image()) is None


class TestRead:
    def test_read_roundtrip_bytes(self, image_store, make_image):
        name = image_store.write(make_image())
        data = image_store.read(name)
        assert data == image_store.resolve(name).read_bytes()

    def test_missing_is_absent(self, image_store):
        assert image_store.read("no-such-file") is None
        assert image_store.resolve("no-such-file") is None
        assert image_store.open("no-such-file") is None
        assert not image_store.exists("no-such-file")

    @pytest.mark.parametrize("name", ["", ".", "..", "../secret", "a/b", "a\\b", "x\x00y"])
    def test_unsafe_names_are_absent(self, image_store, name):
        assert image_store.resolve(name) is None
        assert image_store.read(name) is None

    def test_open_decodes(self, image_store, make_image):
        name = image_store.write(make_image("blue"))
        img = image_store.open(name)
        assert img.size == (8, 6)

    def test_open_corrupt_file_is_absent(self, image_store):
        image_store.images_dir.mkdir(parents=True)
        (image_store.images_dir / "broken").write_bytes(b"\xff\xd8 truncated")
        assert image_store.read("broken") is not None
        assert image_store.open("broken") is None


class TestDelete:
    def test_delete_existing(self, image_store, make_image):
        name = image_store.write(make_image())
        assert image_store.delete(name)
        assert not image_store.exists(name)

    def test_delete_missing_is_false(self, image_store):
        assert image_store.delete("already-gone") is False
        result = image_store.delete_result("already-gone")
        assert result.ok and result.value is False

    def test_delete_unsafe_name(self, image_store):
        result = image_store.delete_result("../x")
        assert isinstance(result.error, ImageStoreError)
        assert image_store.delete("../x") is False

    def test_delete_many_reports_removed(self, image_store, make_image):
        a = image_store.write(make_image())
        assert image_store.delete_many([a, "ghost"]) == [a]


class TestMaintenance:
    def test_names_sorted_and_skip_hidden(self, image_store, make_image):
        names = [image_store.write(make_image()) for _ in range(3)]
        (image_store.images_dir / ".DS_Store").write_bytes(b"")
        assert image_store.names() == sorted(names)

    def test_names_without_directory(self, image_store):
        assert image_store.names() == []

    def test_orphans_and_prune(self, image_store, make_image):
        used = image_store.write(make_image())
        orphan = image_store.write(make_image())
        entries = [JournalEntry(image_names=[used, "dangling-ref"])]

        assert image_store.orphans(entries) == [orphan]
        assert image_store.prune(entries) == [orphan]
        assert image_store.names() == [used]


def test_make_image_fixture_is_png(make_image):
    with Image.open(io.BytesIO(make_image())) as img:
        assert img.format == "PNG"
