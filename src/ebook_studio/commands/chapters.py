"""Chapter command implementations."""

from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

from ebook_studio.config import AppConfig
from ebook_studio.core.store import EbookStore
from ebook_studio.models.document import ChapterType
from ebook_studio.project import ProjectStore


def display_chapters(store: EbookStore, console: Console) -> None:
    """Display chapters and subchapters with their page numbers."""
    if not store.chapters:
        console.print("[dim]No chapters[/]")
        return

    table = Table(title="Chapters", show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim", width=8)
    table.add_column("Type", style="dim")
    table.add_column("Title", style="white")
    table.add_column("Chars", justify="right", style="green")
    table.add_column("Images", justify="right", style="green")
    table.add_column("Page", justify="right")

    for chapter in store.chapters:
        page = "-" if chapter.page_number is None else str(chapter.page_number)
        table.add_row(
            chapter.id[:8],
            chapter.type.value,
            chapter.title,
            f"{len(chapter.content):,}",
            str(len(chapter.images)),
            page,
        )
        for sub in chapter.sub_chapters:
            sub_page = "-" if sub.page_number is None else str(sub.page_number)
            table.add_row(
                sub.id[:8],
                "",
                f"  [dim]└[/] {sub.title}",
                f"{len(sub.content):,}",
                "",
                sub_page,
            )

    console.print(table)


def resolve_chapter_id(store: EbookStore, prefix: str) -> str:
    """Resolve a full chapter id from an unambiguous prefix.

    Unknown prefixes are returned as-is, which the store treats as a no-op.
    """
    matches = [ch.id for ch in store.chapters if ch.id.startswith(prefix)]
    if len(matches) > 1:
        raise ValueError(f"Ambiguous chapter id: {prefix}")
    return matches[0] if matches else prefix


def resolve_sub_chapter_id(store: EbookStore, chapter_id: str, prefix: str) -> str:
    """Resolve a full subchapter id from an unambiguous prefix."""
    chapter = store.get_chapter(chapter_id)
    if chapter is None:
        return prefix
    matches = [sub.id for sub in chapter.sub_chapters if sub.id.startswith(prefix)]
    if len(matches) > 1:
        raise ValueError(f"Ambiguous subchapter id: {prefix}")
    return matches[0] if matches else prefix


def move_chapter(store: EbookStore, chapter_id: str, position: int) -> None:
    """Move a chapter to a 1-based position, then let reordering fix segments."""
    chapter = store.get_chapter(chapter_id)
    if chapter is None:
        return

    chapters = [ch for ch in store.chapters if ch.id != chapter_id]
    index = min(max(position - 1, 0), len(chapters))
    chapters.insert(index, chapter)
    store.reorder_chapters(chapters)


def execute_add_chapter(
    config: AppConfig,
    title: str,
    chapter_type: ChapterType,
    content_file: Path | None,
    console: Console,
) -> None:
    """Execute the add-chapter command."""
    project = ProjectStore(config.project_path)
    store = project.load()

    content = content_file.read_text() if content_file else ""
    chapter = store.add_chapter(title=title, type=chapter_type, content=content)
    store.calculate_page_numbers()
    project.save(store)

    console.print(f"[green]Added {chapter.type.value}:[/] {chapter.title} [dim]({chapter.id[:8]})[/]")


def execute_update_chapter(
    config: AppConfig,
    chapter_id: str,
    fields: dict[str, Any],
    console: Console,
) -> None:
    """Execute the update-chapter command."""
    project = ProjectStore(config.project_path)
    store = project.load()

    full_id = resolve_chapter_id(store, chapter_id)
    if store.get_chapter(full_id) is None:
        console.print(f"[yellow]No chapter with id {chapter_id}[/]")
        return

    store.update_chapter(full_id, **fields)
    if "type" in fields:
        # Move the chapter into the segment of its new type
        store.reorder_chapters(store.chapters)
    else:
        store.calculate_page_numbers()
    project.save(store)
    console.print(f"[green]Updated chapter {full_id[:8]}[/]")


def execute_remove_chapter(config: AppConfig, chapter_id: str, console: Console) -> None:
    """Execute the remove-chapter command."""
    project = ProjectStore(config.project_path)
    store = project.load()

    full_id = resolve_chapter_id(store, chapter_id)
    before = len(store.chapters)
    store.remove_chapter(full_id)
    store.calculate_page_numbers()
    project.save(store)

    if len(store.chapters) < before:
        console.print(f"[green]Removed chapter {full_id[:8]}[/]")
    else:
        console.print(f"[yellow]No chapter with id {chapter_id}[/]")


def execute_move_chapter(
    config: AppConfig, chapter_id: str, position: int, console: Console
) -> None:
    """Execute the move-chapter command."""
    project = ProjectStore(config.project_path)
    store = project.load()

    move_chapter(store, resolve_chapter_id(store, chapter_id), position)
    project.save(store)
    display_chapters(store, console)


def execute_add_sub_chapter(
    config: AppConfig, chapter_id: str, title: str, console: Console
) -> None:
    """Execute the add-subchapter command."""
    project = ProjectStore(config.project_path)
    store = project.load()

    full_id = resolve_chapter_id(store, chapter_id)
    sub_chapter = store.add_sub_chapter(full_id, title)
    project.save(store)

    if sub_chapter is None:
        console.print(f"[yellow]No chapter with id {chapter_id}[/]")
    else:
        console.print(
            f"[green]Added subchapter:[/] {sub_chapter.title} [dim]({sub_chapter.id[:8]})[/]"
        )


def execute_remove_sub_chapter(
    config: AppConfig, chapter_id: str, sub_chapter_id: str, console: Console
) -> None:
    """Execute the remove-subchapter command."""
    project = ProjectStore(config.project_path)
    store = project.load()

    full_id = resolve_chapter_id(store, chapter_id)
    chapter = store.get_chapter(full_id)
    if chapter is None:
        console.print(f"[yellow]No chapter with id {chapter_id}[/]")
        return

    before = len(chapter.sub_chapters)
    store.remove_sub_chapter(
        full_id, resolve_sub_chapter_id(store, full_id, sub_chapter_id)
    )
    project.save(store)

    if len(store.get_chapter(full_id).sub_chapters) < before:
        console.print(f"[green]Removed subchapter {sub_chapter_id}[/]")
    else:
        console.print(f"[yellow]No subchapter with id {sub_chapter_id}[/]")


def execute_paginate(config: AppConfig, console: Console) -> None:
    """Execute the paginate command."""
    project = ProjectStore(config.project_path)
    store = project.load()

    store.calculate_page_numbers()
    project.save(store)
    display_chapters(store, console)
