"""TOC command implementations."""

import json
from pathlib import Path

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from ebook_studio.config import AppConfig
from ebook_studio.core.store import EbookStore
from ebook_studio.core.toc_extractor import extract_table_of_contents_from_file
from ebook_studio.models.document import ChapterType
from ebook_studio.models.toc import TOCEntry, TOCEntryType
from ebook_studio.project import ProjectStore

TYPE_STYLES = {
    TOCEntryType.FRONTMATTER: "magenta",
    TOCEntryType.CHAPTER: "bold white",
    TOCEntryType.SUBCHAPTER: "white",
}


def display_toc(entries: list[TOCEntry], console: Console) -> None:
    """Display extracted table of contents."""
    table = Table(title="Table of Contents", show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Type", style="dim")
    table.add_column("Entry")
    table.add_column("Page", justify="right", style="green")

    for i, entry in enumerate(entries):
        label = entry.content
        if entry.type == TOCEntryType.SUBCHAPTER:
            label = f"  {entry.title}"
        table.add_row(
            str(i + 1),
            entry.type.value,
            f"[{TYPE_STYLES[entry.type]}]{label}[/]",
            str(entry.page_number),
        )

    console.print(table)


def _extract_with_progress(
    pdf_path: Path, config: AppConfig, console: Console, quiet: bool
) -> list[TOCEntry]:
    if quiet:
        return extract_table_of_contents_from_file(pdf_path, backend=config.pdf_backend)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task(f"Reading {pdf_path.name}...", total=None)
        return extract_table_of_contents_from_file(pdf_path, backend=config.pdf_backend)


def execute_toc(
    pdf_path: Path,
    config: AppConfig,
    as_json: bool,
    console: Console,
) -> None:
    """Execute the toc command."""
    entries = _extract_with_progress(pdf_path, config, console, quiet=as_json)

    if as_json:
        console.print_json(
            json.dumps([e.model_dump(mode="json") for e in entries]), highlight=False
        )
        return

    if not entries:
        console.print("[yellow]No headings found.[/]")
        return

    display_toc(entries, console)


def import_toc_entries(store: EbookStore, entries: list[TOCEntry]) -> int:
    """Add extracted TOC entries to the store as chapters and subchapters.

    Subchapter entries attach to the most recently imported chapter and are
    skipped when there is none. Returns the number of entries imported.
    """
    imported = 0
    current_chapter_id: str | None = None

    for entry in entries:
        if entry.type == TOCEntryType.FRONTMATTER:
            store.add_chapter(title=entry.title, type=ChapterType.FRONTMATTER)
            imported += 1
        elif entry.type == TOCEntryType.CHAPTER:
            chapter = store.add_chapter(
                title=entry.title or entry.content, type=ChapterType.CHAPTER
            )
            current_chapter_id = chapter.id
            imported += 1
        elif current_chapter_id is not None:
            store.add_sub_chapter(current_chapter_id, entry.title)
            imported += 1

    store.calculate_page_numbers()
    return imported


def execute_import_toc(pdf_path: Path, config: AppConfig, console: Console) -> None:
    """Execute the import-toc command."""
    project = ProjectStore(config.project_path)
    store = project.load()

    entries = _extract_with_progress(pdf_path, config, console, quiet=False)
    imported = import_toc_entries(store, entries)
    project.save(store)

    skipped = len(entries) - imported
    console.print(f"[green]Imported {imported} of {len(entries)} entries[/]")
    if skipped:
        console.print(
            f"[dim]{skipped} subchapter(s) skipped: no chapter to attach to[/]"
        )
