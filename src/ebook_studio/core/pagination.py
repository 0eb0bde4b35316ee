"""Heuristic printed-page estimation.

There is no layout engine behind these numbers: page counts are derived
from character counts and image widths and are meant for previews only.
"""

import math
from dataclasses import dataclass

from ebook_studio.models.document import Chapter, Image
from ebook_studio.models.settings import EbookSettings, PaperSize

# Paper dimensions in millimeters (width, height)
PAPER_DIMENSIONS_MM: dict[PaperSize, tuple[float, float]] = {
    PaperSize.A4: (210, 297),
    PaperSize.LETTER: (216, 279),
}

# One typographic point in millimeters
POINT_TO_MM = 0.352778

# Images wider than this (percent of page width) take a full page
FULL_PAGE_IMAGE_WIDTH = 50


@dataclass
class PageMetrics:
    """Estimated text capacity of one page."""

    content_width: float  # mm
    content_height: float  # mm
    chars_per_line: int
    lines_per_page: int

    @property
    def chars_per_page(self) -> int:
        # Never zero, even for margins that leave no room
        return max(1, self.chars_per_line * self.lines_per_page)


def estimate_page_metrics(settings: EbookSettings) -> PageMetrics:
    """Estimate characters per page from paper size, margins and font."""
    page_width, page_height = PAPER_DIMENSIONS_MM[settings.paper_size]
    margins = settings.margins
    font = settings.fonts.paragraph

    # Margins are in cm
    content_width = page_width - (margins.left + margins.right) * 10
    content_height = page_height - (margins.top + margins.bottom) * 10

    chars_per_line = math.floor(content_width / (font.size * POINT_TO_MM))
    lines_per_page = math.floor(
        content_height / (font.size * font.line_height * POINT_TO_MM)
    )

    return PageMetrics(
        content_width=content_width,
        content_height=content_height,
        chars_per_line=max(0, chars_per_line),
        lines_per_page=max(0, lines_per_page),
    )


def count_content_pages(content: str, chars_per_page: int) -> int:
    """Pages needed for a block of text (0 for empty text)."""
    return math.ceil(len(content) / chars_per_page)


def count_image_pages(images: list[Image]) -> int:
    """Pages needed for images: wide ones one per page, narrow ones two."""
    total = 0.0
    for image in images:
        if image.width > FULL_PAGE_IMAGE_WIDTH:
            total += 1
        else:
            total += 0.5
    return math.ceil(total)


def calculate_page_numbers(
    chapters: list[Chapter], settings: EbookSettings
) -> list[Chapter]:
    """Assign estimated printed page numbers to chapters and subchapters.

    Front matter and TOC entries share a roman-numbered counter; chapters
    and back matter share an arabic one that skips the cover and title
    pages. Every chapter starts on a new page. Returns new chapter objects;
    the input list is left untouched.
    """
    chars_per_page = estimate_page_metrics(settings).chars_per_page

    roman_page = 1
    arabic_page = 1

    if settings.cover_image:
        arabic_page += 1

    # Title page
    arabic_page += 1

    updated: list[Chapter] = []
    for chapter in chapters:
        is_pre_content = chapter.type.is_pre_content
        chapter_page = roman_page if is_pre_content else arabic_page

        # Chapter opening page
        page = chapter_page + 1

        content_pages = count_content_pages(chapter.content, chars_per_page)
        image_pages = count_image_pages(chapter.images)
        page += max(1, content_pages + image_pages)

        sub_chapters = []
        for sub in chapter.sub_chapters:
            sub_pages = max(1, count_content_pages(sub.content, chars_per_page))
            sub_chapters.append(sub.model_copy(update={"page_number": page}))
            page += sub_pages

        if is_pre_content:
            roman_page = page
        else:
            arabic_page = page

        updated.append(
            chapter.model_copy(
                update={"page_number": chapter_page, "sub_chapters": sub_chapters}
            )
        )

    return updated
