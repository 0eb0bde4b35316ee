"""Main CLI application."""

from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from rich.console import Console

from ebook_studio.config import DEFAULT_PROJECT_FILE, AppConfig, configure_logging
from ebook_studio.core.toc_extractor import PAGE_LOADERS
from ebook_studio.models.document import ChapterType
from ebook_studio.models.settings import PaperSize

app = typer.Typer(
    name="ebook-studio",
    help="Author ebooks: manage chapters, estimate pagination, import PDF tables of contents.",
    add_completion=False,
)

console = Console()

ChapterIdArg = Annotated[
    str,
    typer.Argument(help="Chapter id (a unique prefix is enough)"),
]

PdfPathArg = Annotated[
    Path,
    typer.Argument(
        help="Path to the PDF file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
]

ContentFileOption = Annotated[
    Optional[Path],
    typer.Option(
        "--content-file",
        "-c",
        help="Read chapter content from a text file",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
]


def _config(ctx: typer.Context) -> AppConfig:
    return ctx.obj if isinstance(ctx.obj, AppConfig) else AppConfig()


@app.callback()
def main(
    ctx: typer.Context,
    project: Annotated[
        Path,
        typer.Option(
            "--project",
            "-p",
            help=f"Project file (default: ./{DEFAULT_PROJECT_FILE})",
        ),
    ] = Path(DEFAULT_PROJECT_FILE),
    backend: Annotated[
        str,
        typer.Option(
            "--backend",
            help="PDF text extraction library: pypdf or pdfplumber",
        ),
    ] = "pypdf",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show debug logging",
        ),
    ] = False,
) -> None:
    """Author ebooks: manage chapters, estimate pagination, import PDF tables of contents."""
    if backend not in PAGE_LOADERS:
        supported = ", ".join(PAGE_LOADERS)
        console.print(f"[red]Invalid backend: {backend}. Use {supported}.[/]")
        raise typer.Exit(1)

    configure_logging(verbose, console)
    ctx.obj = AppConfig(project_path=project, pdf_backend=backend, verbose=verbose)  # type: ignore


@app.command()
def init(
    ctx: typer.Context,
    title: Annotated[str, typer.Option("--title", "-t", help="Book title")] = "",
    author: Annotated[str, typer.Option("--author", "-a", help="Book author")] = "",
    paper_size: Annotated[
        PaperSize, typer.Option("--paper-size", help="Paper size")
    ] = PaperSize.A4,
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Overwrite an existing project")
    ] = False,
) -> None:
    """Create a new project file with factory settings."""
    try:
        from ebook_studio.commands.settings import execute_init

        execute_init(_config(ctx), title, author, paper_size, force, console)
    except Exception as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)


@app.command()
def toc(
    ctx: typer.Context,
    pdf_path: PdfPathArg,
    as_json: Annotated[
        bool, typer.Option("--json", help="Print entries as JSON")
    ] = False,
) -> None:
    """Extract the table of contents from a PDF."""
    try:
        from ebook_studio.commands.toc import execute_toc

        execute_toc(pdf_path, _config(ctx), as_json, console)
    except Exception as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)


@app.command("import-toc")
def import_toc(ctx: typer.Context, pdf_path: PdfPathArg) -> None:
    """Extract a PDF table of contents and add it to the project."""
    try:
        from ebook_studio.commands.toc import execute_import_toc

        execute_import_toc(pdf_path, _config(ctx), console)
    except Exception as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)


@app.command()
def chapters(ctx: typer.Context) -> None:
    """List chapters and subchapters with their page numbers."""
    try:
        from ebook_studio.commands.chapters import display_chapters
        from ebook_studio.project import ProjectStore

        store = ProjectStore(_config(ctx).project_path).load()
        display_chapters(store, console)
    except Exception as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)


@app.command("add-chapter")
def add_chapter(
    ctx: typer.Context,
    title: Annotated[str, typer.Argument(help="Chapter title")],
    chapter_type: Annotated[
        ChapterType, typer.Option("--type", help="Segment of the book")
    ] = ChapterType.CHAPTER,
    content_file: ContentFileOption = None,
) -> None:
    """Add a chapter to the project."""
    try:
        from ebook_studio.commands.chapters import execute_add_chapter

        execute_add_chapter(_config(ctx), title, chapter_type, content_file, console)
    except Exception as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)


@app.command("update-chapter")
def update_chapter(
    ctx: typer.Context,
    chapter_id: ChapterIdArg,
    title: Annotated[Optional[str], typer.Option("--title", "-t")] = None,
    chapter_type: Annotated[Optional[ChapterType], typer.Option("--type")] = None,
    content_file: ContentFileOption = None,
    indentation: Annotated[Optional[int], typer.Option("--indentation", min=0)] = None,
    line_spacing: Annotated[
        Optional[float], typer.Option("--line-spacing", min=0.1)
    ] = None,
) -> None:
    """Update fields of a chapter."""
    fields: dict[str, Any] = {}
    if title is not None:
        fields["title"] = title
    if chapter_type is not None:
        fields["type"] = chapter_type
    if content_file is not None:
        fields["content"] = content_file.read_text()
    if indentation is not None:
        fields["indentation"] = indentation
    if line_spacing is not None:
        fields["line_spacing"] = line_spacing

    try:
        from ebook_studio.commands.chapters import execute_update_chapter

        execute_update_chapter(_config(ctx), chapter_id, fields, console)
    except Exception as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)


@app.command("remove-chapter")
def remove_chapter(ctx: typer.Context, chapter_id: ChapterIdArg) -> None:
    """Remove a chapter from the project."""
    try:
        from ebook_studio.commands.chapters import execute_remove_chapter

        execute_remove_chapter(_config(ctx), chapter_id, console)
    except Exception as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)


@app.command("move-chapter")
def move_chapter(
    ctx: typer.Context,
    chapter_id: ChapterIdArg,
    position: Annotated[
        int, typer.Argument(help="New 1-based position (kept within its segment)", min=1)
    ],
) -> None:
    """Move a chapter; segments always stay in canonical order."""
    try:
        from ebook_studio.commands.chapters import execute_move_chapter

        execute_move_chapter(_config(ctx), chapter_id, position, console)
    except Exception as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)


@app.command("add-subchapter")
def add_subchapter(
    ctx: typer.Context,
    chapter_id: ChapterIdArg,
    title: Annotated[str, typer.Argument(help="Subchapter title")],
) -> None:
    """Append a subchapter to a chapter."""
    try:
        from ebook_studio.commands.chapters import execute_add_sub_chapter

        execute_add_sub_chapter(_config(ctx), chapter_id, title, console)
    except Exception as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)


@app.command("remove-subchapter")
def remove_subchapter(
    ctx: typer.Context,
    chapter_id: ChapterIdArg,
    sub_chapter_id: Annotated[
        str, typer.Argument(help="Subchapter id (a unique prefix is enough)")
    ],
) -> None:
    """Remove a subchapter from a chapter."""
    try:
        from ebook_studio.commands.chapters import execute_remove_sub_chapter

        execute_remove_sub_chapter(_config(ctx), chapter_id, sub_chapter_id, console)
    except Exception as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)


@app.command()
def settings(
    ctx: typer.Context,
    paper_size: Annotated[
        Optional[PaperSize], typer.Option("--paper-size", help="Paper size")
    ] = None,
    title: Annotated[Optional[str], typer.Option("--title", "-t")] = None,
    author: Annotated[Optional[str], typer.Option("--author", "-a")] = None,
    description: Annotated[Optional[str], typer.Option("--description")] = None,
    cover_image: Annotated[
        Optional[str],
        typer.Option("--cover-image", help="Cover image reference ('' to clear)"),
    ] = None,
    margin: Annotated[
        Optional[float],
        typer.Option("--margin", help="Margin in cm for all sides", min=0.01),
    ] = None,
    font_size: Annotated[
        Optional[float],
        typer.Option("--font-size", help="Paragraph font size in points", min=1),
    ] = None,
    line_height: Annotated[
        Optional[float],
        typer.Option("--line-height", help="Paragraph line height", min=0.1),
    ] = None,
) -> None:
    """Show or update ebook settings."""
    try:
        from ebook_studio.commands.settings import build_settings_patch, execute_settings
        from ebook_studio.project import ProjectStore

        config = _config(ctx)
        current = ProjectStore(config.project_path).load().settings
        patch = build_settings_patch(
            current,
            paper_size=paper_size,
            title=title,
            author=author,
            description=description,
            cover_image=cover_image,
            margin=margin,
            font_size=font_size,
            line_height=line_height,
        )
        execute_settings(config, patch, console)
    except Exception as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)


@app.command()
def paginate(ctx: typer.Context) -> None:
    """Recompute estimated page numbers."""
    try:
        from ebook_studio.commands.chapters import execute_paginate

        execute_paginate(_config(ctx), console)
    except Exception as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)


@app.command()
def reset(ctx: typer.Context) -> None:
    """Reset the project to no chapters and factory settings."""
    try:
        from ebook_studio.commands.settings import execute_reset

        execute_reset(_config(ctx), console)
    except Exception as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
