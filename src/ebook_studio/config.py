"""Application configuration."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from ebook_studio.core.toc_extractor import PdfBackend

DEFAULT_PROJECT_FILE = "ebook.json"


@dataclass
class AppConfig:
    """Configuration shared by CLI commands."""

    project_path: Path = field(default_factory=lambda: Path(DEFAULT_PROJECT_FILE))
    pdf_backend: PdfBackend = "pypdf"
    verbose: bool = False


def configure_logging(verbose: bool, console: Console | None = None) -> None:
    """Route log records through rich."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=verbose)],
        force=True,
    )
