"""Settings command implementations."""

from typing import Any

from rich.console import Console
from rich.panel import Panel

from ebook_studio.config import AppConfig
from ebook_studio.core.pagination import estimate_page_metrics
from ebook_studio.core.store import EbookStore
from ebook_studio.models.settings import EbookSettings, PaperSize
from ebook_studio.project import ProjectStore


def display_settings(settings: EbookSettings, console: Console) -> None:
    """Display settings and the resulting page capacity estimate."""
    metrics = estimate_page_metrics(settings)
    margins = settings.margins
    paragraph = settings.fonts.paragraph
    numbering = settings.page_numbering

    info_lines = [
        f"[bold]{settings.title or 'Untitled'}[/]",
        f"[dim]Author:[/] {settings.author or 'Unknown'}",
        "",
        f"[dim]Paper:[/] {settings.paper_size.value}",
        f"[dim]Margins (cm):[/] top {margins.top}, bottom {margins.bottom}, "
        f"left {margins.left}, right {margins.right}",
        f"[dim]Paragraph font:[/] {paragraph.family} {paragraph.size}pt, "
        f"line height {paragraph.line_height}",
        f"[dim]Cover image:[/] {settings.cover_image or 'None'}",
        f"[dim]Page numbers:[/] "
        + (
            f"{numbering.style} from {numbering.start_from}, "
            f"{numbering.position} {numbering.alignment}"
            if numbering.enabled
            else "off"
        ),
        "",
        f"[dim]Estimated capacity:[/] {metrics.chars_per_line} chars/line, "
        f"{metrics.lines_per_page} lines/page, {metrics.chars_per_page:,} chars/page",
    ]

    console.print(Panel("\n".join(info_lines), title="Settings", border_style="green"))


def build_settings_patch(
    current: EbookSettings,
    paper_size: PaperSize | None = None,
    title: str | None = None,
    author: str | None = None,
    description: str | None = None,
    cover_image: str | None = None,
    margin: float | None = None,
    font_size: float | None = None,
    line_height: float | None = None,
) -> dict[str, Any]:
    """Build a shallow settings patch from CLI options.

    Nested values (margins, fonts) are rebuilt whole from the current ones.
    """
    patch: dict[str, Any] = {}
    if paper_size is not None:
        patch["paper_size"] = paper_size
    if title is not None:
        patch["title"] = title
    if author is not None:
        patch["author"] = author
    if description is not None:
        patch["description"] = description
    if cover_image is not None:
        # Empty string clears the cover
        patch["cover_image"] = cover_image or None
    if margin is not None:
        patch["margins"] = current.margins.model_copy(
            update={"top": margin, "bottom": margin, "left": margin, "right": margin}
        )
    if font_size is not None or line_height is not None:
        paragraph_update: dict[str, Any] = {}
        if font_size is not None:
            paragraph_update["size"] = font_size
        if line_height is not None:
            paragraph_update["line_height"] = line_height
        patch["fonts"] = current.fonts.model_copy(
            update={"paragraph": current.fonts.paragraph.model_copy(update=paragraph_update)}
        )
    return patch


def execute_settings(
    config: AppConfig, patch: dict[str, Any], console: Console
) -> None:
    """Execute the settings command."""
    project = ProjectStore(config.project_path)
    store = project.load()

    if patch:
        store.update_settings(**patch)
        store.calculate_page_numbers()
        project.save(store)

    display_settings(store.settings, console)


def execute_init(
    config: AppConfig,
    title: str,
    author: str,
    paper_size: PaperSize,
    force: bool,
    console: Console,
) -> None:
    """Execute the init command."""
    project = ProjectStore(config.project_path)
    if project.exists() and not force:
        console.print(f"[yellow]Project already exists: {config.project_path}[/]")
        console.print("[dim]Use --force to overwrite[/]")
        return

    store = EbookStore()
    store.update_settings(title=title, author=author, paper_size=paper_size)
    path = project.save(store)
    console.print(f"[green]Created project {path}[/]")


def execute_reset(config: AppConfig, console: Console) -> None:
    """Execute the reset command."""
    project = ProjectStore(config.project_path)
    store = project.load()
    store.reset()
    project.save(store)
    console.print("[green]Project reset to factory settings[/]")
