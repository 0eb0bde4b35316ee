"""Saving and loading ebook projects as JSON."""

import logging
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError

from ebook_studio.core.store import EbookStore
from ebook_studio.models.project import EbookProject

log = logging.getLogger(__name__)


class ProjectStore:
    """Persists an EbookStore to a project file."""

    PROJECT_VERSION = "1.0"

    def __init__(self, path: Path):
        self.path = path

    def exists(self) -> bool:
        """Check if the project file exists."""
        return self.path.exists()

    def load(self) -> EbookStore:
        """Load the project file into a store.

        Raises:
            FileNotFoundError: If the project file does not exist
            ValueError: If the project file cannot be parsed
        """
        if not self.path.exists():
            raise FileNotFoundError(f"Project file not found: {self.path}")

        try:
            project = EbookProject.model_validate_json(self.path.read_text())
        except ValidationError as e:
            raise ValueError(f"Invalid project file {self.path}: {e}") from e

        log.debug(f"Loaded {len(project.chapters)} chapters from {self.path}")
        return EbookStore(chapters=project.chapters, settings=project.settings)

    def save(self, store: EbookStore) -> Path:
        """Write the store to the project file."""
        project = EbookProject(
            version=self.PROJECT_VERSION,
            saved_at=datetime.now(),
            chapters=store.chapters,
            settings=store.settings,
        )

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(project.model_dump_json(indent=2))
        log.debug(f"Saved {len(store.chapters)} chapters to {self.path}")
        return self.path
