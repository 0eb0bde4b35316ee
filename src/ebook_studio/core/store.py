"""Chapter and settings state container."""

import logging
from typing import Any
from uuid import uuid4

from ebook_studio.core.ordering import (
    find_insert_index,
    order_by_segment,
    renumber_chapters,
)
from ebook_studio.core.pagination import calculate_page_numbers
from ebook_studio.models.document import Chapter, ChapterType, SubChapter
from ebook_studio.models.settings import EbookSettings, default_settings

log = logging.getLogger(__name__)

# Defaults for fields left unset (or falsy) when adding a chapter
CHAPTER_DEFAULTS: dict[str, Any] = {
    "title": "New Chapter",
    "content": "",
    "images": [],
    "type": ChapterType.CHAPTER,
    "indentation": 0,
    "line_spacing": 1.5,
    "sub_chapters": [],
}


def new_id() -> str:
    """Generate a fresh identifier for a chapter or subchapter."""
    return uuid4().hex


class EbookStore:
    """Holds the ordered chapter list and the ebook settings.

    Mutations are applied in place and followed by a full renumbering of
    chapter-typed entries; reordering and subchapter changes also rerun
    the page estimate. Unknown identifiers are ignored.
    """

    def __init__(
        self,
        chapters: list[Chapter] | None = None,
        settings: EbookSettings | None = None,
    ):
        self.chapters: list[Chapter] = list(chapters or [])
        self.settings: EbookSettings = settings or default_settings()

    # -------------------------------------------------------------------------
    # Chapters
    # -------------------------------------------------------------------------

    def get_chapter(self, chapter_id: str) -> Chapter | None:
        """Find a chapter by id."""
        for chapter in self.chapters:
            if chapter.id == chapter_id:
                return chapter
        return None

    def add_chapter(self, **fields: Any) -> Chapter:
        """Add a chapter in the segment matching its type."""
        values = {
            key: fields.get(key) or default for key, default in CHAPTER_DEFAULTS.items()
        }
        chapter = Chapter(id=new_id(), **values)

        chapters = list(self.chapters)
        chapters.insert(find_insert_index(chapters, chapter.type), chapter)
        self.chapters = renumber_chapters(chapters)

        log.debug(f"Added {chapter.type.value} '{chapter.title}' ({chapter.id})")
        # Return the renumbered instance
        return self.get_chapter(chapter.id) or chapter

    def update_chapter(self, chapter_id: str, **fields: Any) -> None:
        """Shallow-merge fields into a chapter."""
        chapters = []
        for chapter in self.chapters:
            if chapter.id == chapter_id:
                data = chapter.model_dump()
                data.update(fields)
                chapter = Chapter.model_validate(data)
            chapters.append(chapter)
        self.chapters = renumber_chapters(chapters)

    def remove_chapter(self, chapter_id: str) -> None:
        """Remove a chapter."""
        chapters = [ch for ch in self.chapters if ch.id != chapter_id]
        self.chapters = renumber_chapters(chapters)

    def reorder_chapters(self, chapters: list[Chapter]) -> None:
        """Replace the chapter order, keeping segments in canonical order."""
        self.chapters = renumber_chapters(order_by_segment(chapters))
        self.calculate_page_numbers()

    # -------------------------------------------------------------------------
    # Subchapters
    # -------------------------------------------------------------------------

    def add_sub_chapter(self, chapter_id: str, title: str) -> SubChapter | None:
        """Append a subchapter to a chapter."""
        chapter = self.get_chapter(chapter_id)
        sub_chapter: SubChapter | None = None
        if chapter is not None:
            sub_chapter = SubChapter(id=new_id(), title=title, content="")
            self._replace_sub_chapters(
                chapter_id, [*chapter.sub_chapters, sub_chapter]
            )

        self.calculate_page_numbers()

        if sub_chapter is None:
            return None
        return self._find_sub_chapter(chapter_id, sub_chapter.id)

    def update_sub_chapter(
        self, chapter_id: str, sub_chapter_id: str, **fields: Any
    ) -> None:
        """Shallow-merge fields into a subchapter."""
        chapter = self.get_chapter(chapter_id)
        if chapter is not None:
            sub_chapters = []
            for sub in chapter.sub_chapters:
                if sub.id == sub_chapter_id:
                    data = sub.model_dump()
                    data.update(fields)
                    sub = SubChapter.model_validate(data)
                sub_chapters.append(sub)
            self._replace_sub_chapters(chapter_id, sub_chapters)

        self.calculate_page_numbers()

    def remove_sub_chapter(self, chapter_id: str, sub_chapter_id: str) -> None:
        """Remove a subchapter from a chapter."""
        chapter = self.get_chapter(chapter_id)
        if chapter is not None:
            self._replace_sub_chapters(
                chapter_id,
                [sub for sub in chapter.sub_chapters if sub.id != sub_chapter_id],
            )

        self.calculate_page_numbers()

    def _replace_sub_chapters(
        self, chapter_id: str, sub_chapters: list[SubChapter]
    ) -> None:
        self.chapters = [
            ch.model_copy(update={"sub_chapters": sub_chapters})
            if ch.id == chapter_id
            else ch
            for ch in self.chapters
        ]

    def _find_sub_chapter(
        self, chapter_id: str, sub_chapter_id: str
    ) -> SubChapter | None:
        chapter = self.get_chapter(chapter_id)
        if chapter is None:
            return None
        for sub in chapter.sub_chapters:
            if sub.id == sub_chapter_id:
                return sub
        return None

    # -------------------------------------------------------------------------
    # Settings & pagination
    # -------------------------------------------------------------------------

    def update_settings(self, **fields: Any) -> None:
        """Shallow-merge top-level settings fields."""
        data = self.settings.model_dump()
        data.update(fields)
        self.settings = EbookSettings.model_validate(data)

    def calculate_page_numbers(self) -> None:
        """Recompute estimated page numbers for every chapter and subchapter."""
        self.chapters = calculate_page_numbers(self.chapters, self.settings)

    def reset(self) -> None:
        """Restore the empty initial state with factory settings."""
        self.chapters = []
        self.settings = default_settings()
