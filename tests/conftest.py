"""Shared test fixtures for photojournal."""

import io
import os
import tempfile
from datetime import datetime

import pytest
from PIL import Image

from photojournal.app.settings import AppearanceSetting
from photojournal.app.state import AppState
from photojournal.core.storage import PreferenceStore
from photojournal.journal.images import ImageStore
from photojournal.journal.models import JournalEntry
from photojournal.journal.store import EntryStore


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file."""
    import yaml

    config_data = {
        "paths": {"data_dir": os.path.join(tmp_dir, "data")},
        "images": {"jpeg_quality": 70},
        "tags": {"keep_empty": True},
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture
def make_image():
    """Factory for small in-memory PNG photos."""

    def _make(color: str = "red", size: tuple[int, int] = (8, 6), mode: str = "RGB") -> bytes:
        buffer = io.BytesIO()
        Image.new(mode, size, color).save(buffer, format="PNG")
        return buffer.getvalue()

    return _make


@pytest.fixture
def preferences(tmp_path):
    return PreferenceStore(tmp_path / "preferences.json")


@pytest.fixture
def entry_store(preferences):
    return EntryStore(preferences)


@pytest.fixture
def image_store(tmp_path):
    return ImageStore(tmp_path / "images")


@pytest.fixture
def make_entry():
    """Factory for entries with a fixed date."""

    def _make(title: str = "Entry", **kwargs) -> JournalEntry:
        kwargs.setdefault("date", datetime(2024, 5, 17, 9, 30, 15, 123456))
        return JournalEntry(title=title, **kwargs)

    return _make


@pytest.fixture
def app_state(entry_store, image_store, preferences):
    return AppState(entry_store, image_store, AppearanceSetting(preferences))
