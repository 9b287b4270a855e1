"""Shared test fixtures for chatlog."""

from __future__ import annotations

from pathlib import Path

import pytest
import pytest_asyncio

from chatlog.config import Settings, reset_settings
from chatlog.core.models import Document

SAMPLE_TRANSCRIPT = (
    "# you asked\n"
    "What is X?\n"
    "# assistant response\n"
    "X is Y.\n"
    "---\n"
    "Just a note."
)


@pytest.fixture
def sample_transcript() -> str:
    """Two exchanges: a headed question/answer and a free-form note."""
    return SAMPLE_TRANSCRIPT


@pytest.fixture
def test_storage_dir(tmp_path: Path) -> Path:
    """Create a temporary storage directory."""
    storage = tmp_path / ".chatlog"
    storage.mkdir(parents=True)
    return storage


@pytest.fixture
def test_settings(test_storage_dir: Path) -> Settings:
    """Settings pointing at temporary storage."""
    reset_settings()
    yield Settings(storage_dir=test_storage_dir)
    reset_settings()


@pytest_asyncio.fixture
async def store(test_settings: Settings):
    """An open DocumentStore at the current schema version."""
    from chatlog.services.documents import DocumentStore

    store = await DocumentStore.open(test_settings.db_path)
    yield store
    await store.close()


@pytest.fixture
def prefs(test_settings: Settings):
    from chatlog.services.preferences import Preferences

    return Preferences.load(test_settings.prefs_path)


@pytest_asyncio.fixture
async def library(test_settings: Settings):
    """An open Library over temporary storage."""
    from chatlog.library import Library

    library = await Library.open(test_settings)
    yield library
    await library.close()


@pytest.fixture
def make_document():
    """Factory for documents with predictable ids and timestamps."""
    counter = {"n": 0}

    def _make(
        name: str = "doc",
        content: str = "",
        folder: str = "",
        added_at: int | None = None,
        id: str | None = None,
    ) -> Document:
        counter["n"] += 1
        n = counter["n"]
        return Document(
            id=id or f"doc-{n}",
            name=name,
            content=content,
            added_at=added_at if added_at is not None else 1_700_000_000_000 + n,
            folder=folder,
        )

    return _make


@pytest.fixture
def transcript_file(tmp_path: Path) -> Path:
    """A markdown transcript on disk."""
    path = tmp_path / "Session Notes.md"
    path.write_text(SAMPLE_TRANSCRIPT, encoding="utf-8")
    return path
