"""Data models."""

from ebook_studio.models.document import (
    SEGMENT_ORDER,
    Chapter,
    ChapterType,
    Image,
    SubChapter,
)
from ebook_studio.models.project import EbookProject
from ebook_studio.models.settings import (
    EbookSettings,
    FontSettings,
    FontSpec,
    HeaderFooter,
    Margins,
    PageNumbering,
    PaperSize,
    default_settings,
)
from ebook_studio.models.toc import TOCEntry, TOCEntryType

__all__ = [
    # Document models
    "ChapterType",
    "SEGMENT_ORDER",
    "Image",
    "SubChapter",
    "Chapter",
    # Settings models
    "PaperSize",
    "Margins",
    "FontSpec",
    "FontSettings",
    "PageNumbering",
    "HeaderFooter",
    "EbookSettings",
    "default_settings",
    # TOC models
    "TOCEntryType",
    "TOCEntry",
    # Project file
    "EbookProject",
]
