"""Data models for the document structure (chapters, subchapters, images)."""

from enum import Enum

from pydantic import BaseModel, Field


class ChapterType(str, Enum):
    """Segment a chapter belongs to."""

    FRONTMATTER = "frontmatter"
    TOC = "toc"
    CHAPTER = "chapter"
    BACKMATTER = "backmatter"

    @property
    def is_pre_content(self) -> bool:
        """Front matter and TOC pages are numbered with roman numerals."""
        return self in (ChapterType.FRONTMATTER, ChapterType.TOC)


# Canonical segment order of the chapter list
SEGMENT_ORDER: list[ChapterType] = [
    ChapterType.FRONTMATTER,
    ChapterType.TOC,
    ChapterType.CHAPTER,
    ChapterType.BACKMATTER,
]


class Image(BaseModel):
    """Image placed inside a chapter."""

    width: float = Field(default=100.0, ge=0, le=100)  # Percent of page width
    src: str | None = None
    caption: str = ""


class SubChapter(BaseModel):
    """Subchapter inside a chapter."""

    id: str
    title: str
    content: str = ""
    page_number: int | None = None


class Chapter(BaseModel):
    """Chapter content, formatting and derived page number."""

    id: str
    title: str = "New Chapter"
    content: str = ""
    images: list[Image] = Field(default_factory=list)
    type: ChapterType = ChapterType.CHAPTER
    indentation: int = Field(default=0, ge=0)
    line_spacing: float = Field(default=1.5, gt=0)
    # Chapter index after renumbering, estimated printed page after pagination
    page_number: int | None = None
    sub_chapters: list[SubChapter] = Field(default_factory=list)
