"""
Pytest configuration and fixtures for ebook-studio tests.
"""

from pathlib import Path

import pytest

from ebook_studio.core.store import EbookStore
from ebook_studio.models import Chapter, ChapterType, EbookSettings


@pytest.fixture
def store() -> EbookStore:
    """Empty store with factory settings."""
    return EbookStore()


@pytest.fixture
def settings() -> EbookSettings:
    """Factory settings (A4, 2.54 cm margins, 12pt paragraphs)."""
    return EbookSettings()


@pytest.fixture
def make_chapter():
    """Factory for chapters with predictable ids."""
    counter = {"n": 0}

    def _make(chapter_type: ChapterType = ChapterType.CHAPTER, **fields) -> Chapter:
        counter["n"] += 1
        fields.setdefault("title", f"{chapter_type.value} {counter['n']}")
        return Chapter(id=f"ch-{counter['n']}", type=chapter_type, **fields)

    return _make


@pytest.fixture
def project_path(tmp_path: Path) -> Path:
    """Location of a project file inside a temporary directory."""
    return tmp_path / "ebook.json"
