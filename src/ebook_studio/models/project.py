"""Project file model."""

from datetime import datetime

from pydantic import BaseModel, Field

from ebook_studio.models.document import Chapter
from ebook_studio.models.settings import EbookSettings


class EbookProject(BaseModel):
    """Saved state of an ebook project."""

    version: str = "1.0"
    saved_at: datetime = Field(default_factory=datetime.now)
    chapters: list[Chapter] = Field(default_factory=list)
    settings: EbookSettings = Field(default_factory=EbookSettings)
