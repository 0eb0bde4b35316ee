"""Data models for ebook formatting settings."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class PaperSize(str, Enum):
    """Supported paper sizes."""

    A4 = "A4"
    LETTER = "Letter"


Alignment = Literal["left", "center", "right", "justify"]


class Margins(BaseModel):
    """Page margins in centimeters."""

    top: float = Field(default=2.54, gt=0)
    bottom: float = Field(default=2.54, gt=0)
    left: float = Field(default=2.54, gt=0)
    right: float = Field(default=2.54, gt=0)


class FontSpec(BaseModel):
    """Font used for one content role."""

    family: str = "Helvetica"
    size: float = Field(default=12, gt=0)  # Points
    alignment: Alignment = "justify"
    line_height: float = Field(default=1.5, gt=0)


class FontSettings(BaseModel):
    """Fonts for every content role."""

    title: FontSpec = Field(
        default_factory=lambda: FontSpec(size=24, alignment="center")
    )
    subtitle: FontSpec = Field(
        default_factory=lambda: FontSpec(size=18, alignment="left")
    )
    paragraph: FontSpec = Field(default_factory=FontSpec)
    header: FontSpec = Field(
        default_factory=lambda: FontSpec(size=10, alignment="center", line_height=1.2)
    )
    footer: FontSpec = Field(
        default_factory=lambda: FontSpec(size=10, alignment="center", line_height=1.2)
    )
    frontmatter_content: FontSpec = Field(default_factory=FontSpec)
    chapter_content: FontSpec = Field(default_factory=FontSpec)
    subchapter_content: FontSpec = Field(default_factory=FontSpec)
    backmatter_content: FontSpec = Field(default_factory=FontSpec)


class PageNumbering(BaseModel):
    """Printed page number configuration."""

    enabled: bool = True
    start_from: int = 1
    position: Literal["top", "bottom"] = "bottom"
    alignment: Literal["left", "center", "right"] = "center"
    style: Literal["decimal", "roman"] = "decimal"


class HeaderFooter(BaseModel):
    """Running header or footer."""

    enabled: bool = False
    text: str = ""
    alternate_even_odd: bool = False


class EbookSettings(BaseModel):
    """Book-level metadata and formatting settings."""

    title: str = ""
    author: str = ""
    description: str = ""
    cover_image: str | None = None
    back_cover_image: str | None = None
    paper_size: PaperSize = PaperSize.A4
    margins: Margins = Field(default_factory=Margins)
    fonts: FontSettings = Field(default_factory=FontSettings)
    page_numbering: PageNumbering = Field(default_factory=PageNumbering)
    header: HeaderFooter = Field(default_factory=HeaderFooter)
    footer: HeaderFooter = Field(default_factory=HeaderFooter)


def default_settings() -> EbookSettings:
    """Factory defaults for a new ebook."""
    return EbookSettings()
