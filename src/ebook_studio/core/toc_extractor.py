"""Table of contents extraction from PDF page text."""

import io
import logging
import re
from pathlib import Path
from typing import Iterable, Iterator, Literal

# Suppress warnings about malformed PDF object references from PDF libraries
logging.getLogger("pdfminer").setLevel(logging.ERROR)
logging.getLogger("pypdf").setLevel(logging.ERROR)

import pdfplumber
import pypdf

from ebook_studio.models.toc import TOCEntry, TOCEntryType

log = logging.getLogger(__name__)

PdfBackend = Literal["pypdf", "pdfplumber"]

EXTRACTION_FAILED_MESSAGE = "Failed to extract table of contents from PDF"


class TocExtractionError(Exception):
    """Raised when a table of contents cannot be extracted from a PDF."""

    def __init__(self, message: str = EXTRACTION_FAILED_MESSAGE):
        self.message = message
        super().__init__(message)


# =============================================================================
# Heading Patterns
# =============================================================================

MAIN_CONTENT_PATTERN = re.compile(r"Bab 1", re.IGNORECASE)
FRONTMATTER_PATTERN = re.compile(r"(Kata Pengantar|Daftar Isi)", re.IGNORECASE)
CHAPTER_PATTERN = re.compile(r"Bab \d+[:\s]?.*", re.IGNORECASE)
SUBCHAPTER_PATTERN = re.compile(r"\d+\.\d+[:\s]?.*", re.IGNORECASE)

ROMAN_NUMERALS = ["i", "ii", "iii", "iv", "v", "vi", "vii", "viii", "ix", "x"]


def roman_page_label(index: int) -> str:
    """Page label for the front matter heading at ``index``.

    Falls back to a decimal string once the numeral table is exhausted.
    """
    if index < len(ROMAN_NUMERALS):
        return ROMAN_NUMERALS[index]
    return str(index + 1)


# =============================================================================
# Page Text Loading
# =============================================================================


def _iter_pypdf_pages(pdf_bytes: bytes) -> Iterator[str]:
    reader = pypdf.PdfReader(io.BytesIO(pdf_bytes))
    for page in reader.pages:
        yield page.extract_text() or ""


def _iter_pdfplumber_pages(pdf_bytes: bytes) -> Iterator[str]:
    with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
        for page in pdf.pages:
            yield page.extract_text() or ""


PAGE_LOADERS = {
    "pypdf": _iter_pypdf_pages,
    "pdfplumber": _iter_pdfplumber_pages,
}


def iter_page_texts(pdf_bytes: bytes, backend: PdfBackend = "pypdf") -> Iterator[str]:
    """
    Yield the text of each page in reading order.
    Pages are decoded lazily, one per iteration step.
    """
    if backend not in PAGE_LOADERS:
        supported = ", ".join(PAGE_LOADERS)
        raise ValueError(f"Unsupported PDF backend: {backend}. Supported: {supported}")

    return PAGE_LOADERS[backend](pdf_bytes)


# =============================================================================
# Heading Scan
# =============================================================================


def process_table_of_contents(pages_text: Iterable[str]) -> list[TOCEntry]:
    """
    Scan page texts for front matter, chapter ("Bab N") and subchapter ("N.N")
    headings and build the table of contents.

    Chapter and subchapter headings only count once a page mentioning
    "Bab 1" has been seen. Page numbers are a running count of pages scanned
    since then, not PDF page indices.
    """
    entries: list[TOCEntry] = []
    seen_headings: set[str] = set()
    page_counter = 0
    main_content_started = False
    frontmatter_index = 0
    chapter_count = 0

    for page_index, text in enumerate(pages_text):
        if not main_content_started and MAIN_CONTENT_PATTERN.search(text):
            main_content_started = True
            page_counter = 1
            log.debug(f"Main content starts at PDF page {page_index + 1}")

        lines = text.split("\n")
        for line_index, line in enumerate(lines):
            frontmatter_match = FRONTMATTER_PATTERN.search(line)
            if frontmatter_match:
                heading = frontmatter_match.group(0).strip()
                if heading not in seen_headings:
                    page_label = roman_page_label(frontmatter_index)
                    entries.append(
                        TOCEntry(
                            type=TOCEntryType.FRONTMATTER,
                            title=heading,
                            content=f"{heading} - Halaman {page_label}",
                            page_number=page_label,
                        )
                    )
                    seen_headings.add(heading)
                    frontmatter_index += 1

            chapter_match = CHAPTER_PATTERN.search(line)
            if chapter_match and main_content_started:
                heading = chapter_match.group(0).strip()
                if heading not in seen_headings:
                    next_line = lines[line_index + 1] if line_index + 1 < len(lines) else ""
                    title = next_line.strip()
                    chapter_count += 1
                    entries.append(
                        TOCEntry(
                            type=TOCEntryType.CHAPTER,
                            title=title,
                            content=f"BAB {chapter_count} : {title}",
                            page_number=page_counter,
                        )
                    )
                    seen_headings.add(heading)

            subchapter_match = SUBCHAPTER_PATTERN.search(line)
            if subchapter_match and main_content_started:
                heading = subchapter_match.group(0).strip()
                if heading not in seen_headings:
                    entries.append(
                        TOCEntry(
                            type=TOCEntryType.SUBCHAPTER,
                            title=heading,
                            content=f"{heading} - Halaman {page_counter}",
                            page_number=page_counter,
                        )
                    )
                    seen_headings.add(heading)

        if main_content_started:
            page_counter += 1

    for entry in entries:
        log.debug(f"  {entry.type.value}: {entry.content}")

    return entries


# =============================================================================
# Entry Points
# =============================================================================


def extract_table_of_contents(
    pdf_bytes: bytes, backend: PdfBackend = "pypdf"
) -> list[TOCEntry]:
    """Extract the table of contents from raw PDF content.

    Args:
        pdf_bytes: Raw content of the PDF file
        backend: PDF library used for text extraction

    Returns:
        Ordered list of TOC entries

    Raises:
        TocExtractionError: On any failure while loading or reading the PDF
    """
    try:
        entries = process_table_of_contents(iter_page_texts(pdf_bytes, backend))
    except Exception as e:
        log.exception(f"Error extracting table of contents: {e}")
        raise TocExtractionError() from e

    log.info(f"Extracted {len(entries)} table of contents entries")
    return entries


def extract_table_of_contents_from_file(
    pdf_path: Path, backend: PdfBackend = "pypdf"
) -> list[TOCEntry]:
    """Extract the table of contents from a PDF file on disk."""
    if not pdf_path.exists():
        raise FileNotFoundError(f"File not found: {pdf_path}")

    return extract_table_of_contents(pdf_path.read_bytes(), backend=backend)
