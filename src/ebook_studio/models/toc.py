"""Data models for extracted table of contents."""

from enum import Enum

from pydantic import BaseModel


class TOCEntryType(str, Enum):
    """Kind of heading found in the document."""

    FRONTMATTER = "frontmatter"
    CHAPTER = "chapter"
    SUBCHAPTER = "subchapter"


class TOCEntry(BaseModel):
    """Single row of an extracted table of contents."""

    type: TOCEntryType
    title: str
    content: str  # Formatted label, e.g. "BAB 1 : Pendahuluan"
    page_number: str | int  # Roman numeral for front matter
