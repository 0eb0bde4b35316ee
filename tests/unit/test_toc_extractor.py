"""
Unit tests for table of contents extraction.

PDF libraries are replaced with small fakes; only the invalid-input tests
go through the real pypdf reader.
"""

import logging

import pytest
from pypdf.errors import PdfReadError

from ebook_studio.core import toc_extractor
from ebook_studio.core.toc_extractor import (
    EXTRACTION_FAILED_MESSAGE,
    TocExtractionError,
    extract_table_of_contents,
    extract_table_of_contents_from_file,
    iter_page_texts,
    process_table_of_contents,
    roman_page_label,
)
from ebook_studio.models import TOCEntryType


class FakePage:
    def __init__(self, text: str | None):
        self.text = text

    def extract_text(self) -> str | None:
        return self.text


class FakeReader:
    """Stands in for pypdf.PdfReader."""

    pages_text: list[str | None] = []

    def __init__(self, stream):
        self.stream = stream
        self.pages = [FakePage(text) for text in self.pages_text]


class FakePlumberPdf:
    """Stands in for the object returned by pdfplumber.open()."""

    def __init__(self, pages_text: list[str]):
        self.pages = [FakePage(text) for text in pages_text]
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False


@pytest.fixture
def fake_pypdf(monkeypatch):
    """Patch pypdf so any bytes decode to the configured page texts."""

    def _install(pages_text: list[str | None]):
        reader_cls = type("ConfiguredReader", (FakeReader,), {"pages_text": pages_text})
        monkeypatch.setattr(toc_extractor.pypdf, "PdfReader", reader_cls)
        return reader_cls

    return _install


SAMPLE_PAGES = [
    "Kata Pengantar\nhello",
    "Bab 1\nIntroduction",
    "1.1 Overview\nbody",
    "Bab 2\nNext",
]


class TestProcessTableOfContents:
    """Test heading detection over page texts."""

    def test_sample_document(self):
        """Front matter, chapters and subchapters are detected in order."""
        entries = process_table_of_contents(SAMPLE_PAGES)

        assert [e.type for e in entries] == [
            TOCEntryType.FRONTMATTER,
            TOCEntryType.CHAPTER,
            TOCEntryType.SUBCHAPTER,
            TOCEntryType.CHAPTER,
        ]
        assert entries[0].title == "Kata Pengantar"
        assert entries[0].page_number == "i"
        assert entries[0].content == "Kata Pengantar - Halaman i"
        assert entries[1].title == "Introduction"
        assert entries[1].content == "BAB 1 : Introduction"
        assert entries[3].content == "BAB 2 : Next"

    def test_page_counter_runs_from_bab_1_page(self):
        """Page numbers count pages scanned since the "Bab 1" page."""
        entries = process_table_of_contents(SAMPLE_PAGES)

        assert entries[1].page_number == 1
        assert entries[2].page_number == 2
        assert entries[2].content == "1.1 Overview - Halaman 2"
        assert entries[3].page_number == 3

    def test_chapter_label_uses_running_count(self):
        """BAB label counts emitted chapters, not the parsed chapter number."""
        pages = ["Bab 1\nAwal", "Bab 5\nLompat"]
        entries = process_table_of_contents(pages)

        assert [e.content for e in entries] == ["BAB 1 : Awal", "BAB 2 : Lompat"]

    def test_duplicate_heading_across_pages(self):
        """A heading repeated on two pages yields one entry."""
        pages = ["Bab 1\nAwal\n2.1 Dasar", "2.1 Dasar\nisi", "Daftar Isi", "Daftar Isi"]
        entries = process_table_of_contents(pages)

        titles = [e.title for e in entries]
        assert titles.count("2.1 Dasar") == 1
        assert titles.count("Daftar Isi") == 1

    def test_chapters_before_main_content_suppressed(self):
        """Chapter and subchapter headings before "Bab 1" are ignored."""
        pages = ["Daftar Isi\nBab 2 Metode\n2.1 Data", "Bab 1\nPendahuluan", "Bab 2 Metode\nJudul"]
        entries = process_table_of_contents(pages)

        assert [e.type for e in entries] == [
            TOCEntryType.FRONTMATTER,
            TOCEntryType.CHAPTER,
            TOCEntryType.CHAPTER,
        ]
        # The early "Bab 2" match did not mark the heading as seen
        assert entries[2].content == "BAB 2 : Judul"
        assert entries[2].page_number == 2

    def test_front_matter_collected_after_main_content(self):
        """Front matter headings count regardless of the main content flag."""
        entries = process_table_of_contents(["Bab 1\nA", "Kata Pengantar"])

        assert entries[-1].type == TOCEntryType.FRONTMATTER
        assert entries[-1].page_number == "i"

    def test_bab_1_mid_sentence_starts_main_content(self):
        """Any case-insensitive "Bab 1" substring flips the flag."""
        entries = process_table_of_contents(["Lihat bab 1 di bawah", "3.2 Hasil"])

        sub = [e for e in entries if e.type == TOCEntryType.SUBCHAPTER]
        assert len(sub) == 1
        assert sub[0].page_number == 2

    def test_bab_10_also_starts_main_content(self):
        """"Bab 10" contains "Bab 1" and starts main content."""
        entries = process_table_of_contents(["Bab 10\nAkhir"])

        assert entries[0].type == TOCEntryType.CHAPTER
        assert entries[0].page_number == 1

    def test_multiple_chapters_on_one_page(self):
        """Several chapter headings on one page share its page number."""
        entries = process_table_of_contents(["Bab 1\nAwal\nBab 2\nLanjut"])

        assert [e.content for e in entries] == ["BAB 1 : Awal", "BAB 2 : Lanjut"]
        assert {e.page_number for e in entries} == {1}

    def test_chapter_title_from_next_line(self):
        """Title is the trimmed next line, empty when the heading ends the page."""
        entries = process_table_of_contents(["Bab 1\n   Pendahuluan  ", "Bab 2"])

        assert entries[0].title == "Pendahuluan"
        assert entries[1].title == ""
        assert entries[1].content == "BAB 2 : "

    def test_title_is_line_after_each_heading(self):
        """Each chapter title comes from the line after its own heading."""
        entries = process_table_of_contents(["Catatan\nBab 1\nPertama\nBab 3\nKetiga"])

        assert entries[1].title == "Ketiga"

    def test_roman_numerals_exhausted(self):
        """The 11th distinct front matter heading gets a decimal label."""
        headings = [
            "Daftar Isi",
            "daftar isi",
            "DAFTAR ISI",
            "Daftar isi",
            "daftar Isi",
            "DAFTAR isi",
            "daftar ISI",
            "Kata Pengantar",
            "kata pengantar",
            "KATA PENGANTAR",
            "Kata pengantar",
        ]
        entries = process_table_of_contents(["\n".join(headings)])

        assert len(entries) == 11
        assert entries[9].page_number == "x"
        assert entries[10].page_number == "11"

    def test_empty_input(self):
        """No pages yields no entries."""
        assert process_table_of_contents([]) == []

    def test_accepts_generator(self):
        """Pages may be supplied lazily."""
        entries = process_table_of_contents(page for page in SAMPLE_PAGES)
        assert len(entries) == 4


class TestRomanPageLabel:
    """Test front matter page labels."""

    @pytest.mark.parametrize(
        "index,expected", [(0, "i"), (3, "iv"), (8, "ix"), (9, "x"), (10, "11"), (14, "15")]
    )
    def test_labels(self, index, expected):
        assert roman_page_label(index) == expected


class TestIterPageTexts:
    """Test page text loading backends."""

    def test_pypdf_pages_in_order(self, fake_pypdf):
        """pypdf backend yields one string per page."""
        fake_pypdf(["satu", None, "tiga"])
        assert list(iter_page_texts(b"%PDF")) == ["satu", "", "tiga"]

    def test_pdfplumber_pages_in_order(self, monkeypatch):
        """pdfplumber backend yields one string per page and closes the file."""
        opened = FakePlumberPdf(["satu", "dua"])
        monkeypatch.setattr(toc_extractor.pdfplumber, "open", lambda stream: opened)

        assert list(iter_page_texts(b"%PDF", backend="pdfplumber")) == ["satu", "dua"]
        assert opened.closed

    def test_unknown_backend(self):
        """Unknown backends are rejected."""
        with pytest.raises(ValueError, match="Unsupported PDF backend"):
            iter_page_texts(b"%PDF", backend="fitz")  # type: ignore[arg-type]


class TestExtractTableOfContents:
    """Test the PDF entry points and their failure handling."""

    def test_extracts_from_pdf_bytes(self, fake_pypdf):
        """Entries are built from the decoded pages."""
        fake_pypdf(SAMPLE_PAGES)
        entries = extract_table_of_contents(b"%PDF-1.4")

        assert [e.content for e in entries][1] == "BAB 1 : Introduction"

    def test_reader_error_becomes_generic_error(self, monkeypatch, caplog):
        """Library errors are logged and surfaced as one generic error."""

        def broken_reader(stream):
            raise PdfReadError("xref table corrupted")

        monkeypatch.setattr(toc_extractor.pypdf, "PdfReader", broken_reader)

        with caplog.at_level(logging.ERROR, logger=toc_extractor.__name__):
            with pytest.raises(TocExtractionError) as exc_info:
                extract_table_of_contents(b"%PDF-1.4")

        assert str(exc_info.value) == EXTRACTION_FAILED_MESSAGE
        assert "xref" not in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, PdfReadError)
        assert "xref table corrupted" in caplog.text

    def test_page_error_becomes_generic_error(self, monkeypatch):
        """A failure on a later page also aborts with the generic error."""

        class BrokenPage:
            def extract_text(self):
                raise KeyError("/Contents")

        class Reader:
            def __init__(self, stream):
                self.pages = [FakePage("Bab 1\nA"), BrokenPage()]

        monkeypatch.setattr(toc_extractor.pypdf, "PdfReader", Reader)

        with pytest.raises(TocExtractionError):
            extract_table_of_contents(b"%PDF-1.4")

    def test_unknown_backend_becomes_generic_error(self):
        """Bad backends are reported like any other extraction failure."""
        with pytest.raises(TocExtractionError):
            extract_table_of_contents(b"%PDF", backend="fitz")  # type: ignore[arg-type]

    @pytest.mark.parametrize("data", [b"", b"this is not a pdf"])
    def test_invalid_pdf_with_real_reader(self, data):
        """Empty or garbage input fails with the generic error."""
        with pytest.raises(TocExtractionError):
            extract_table_of_contents(data)

    def test_from_file(self, fake_pypdf, tmp_path):
        """File entry point reads the bytes and delegates."""
        fake_pypdf(["Daftar Isi"])
        pdf_path = tmp_path / "buku.pdf"
        pdf_path.write_bytes(b"%PDF-1.4")

        entries = extract_table_of_contents_from_file(pdf_path)
        assert entries[0].title == "Daftar Isi"

    def test_from_missing_file(self, tmp_path):
        """Missing files are reported before extraction starts."""
        with pytest.raises(FileNotFoundError):
            extract_table_of_contents_from_file(tmp_path / "missing.pdf")
