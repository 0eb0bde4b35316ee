"""Segment ordering and chapter numbering for the chapter list."""

from ebook_studio.models.document import SEGMENT_ORDER, Chapter, ChapterType


def find_insert_index(chapters: list[Chapter], chapter_type: ChapterType) -> int:
    """Find where a new chapter of the given type goes in the list.

    Front matter and TOC entries go after the leading front matter/TOC run,
    chapters after the chapter run that follows it, back matter at the end.
    """
    if chapter_type == ChapterType.BACKMATTER:
        return len(chapters)

    index = 0
    # Skip front matter and TOC
    while index < len(chapters) and chapters[index].type.is_pre_content:
        index += 1

    if chapter_type == ChapterType.CHAPTER:
        # Skip existing chapters
        while index < len(chapters) and chapters[index].type == ChapterType.CHAPTER:
            index += 1

    return index


def renumber_chapters(chapters: list[Chapter]) -> list[Chapter]:
    """Number chapter-typed entries 1..N in list order."""
    numbered: list[Chapter] = []
    chapter_number = 1
    for chapter in chapters:
        if chapter.type == ChapterType.CHAPTER:
            chapter = chapter.model_copy(update={"page_number": chapter_number})
            chapter_number += 1
        numbered.append(chapter)
    return numbered


def order_by_segment(chapters: list[Chapter]) -> list[Chapter]:
    """Partition chapters into front matter, TOC, chapter, back matter.

    Relative order inside each segment is kept.
    """
    ordered: list[Chapter] = []
    for segment in SEGMENT_ORDER:
        ordered.extend(ch for ch in chapters if ch.type == segment)
    return ordered
