"""Data models for notebooks, pages, sections and cells."""

from oliva.models.notebook import (
    Author,
    BodyFontFamily,
    HeaderFont,
    NotebookMetadata,
    OliDocument,
    Orientation,
    PageLayout,
    Paper,
    PaperDimensions,
    SectionLayout,
)
from oliva.models.page import (
    SECTION_DISPLAY_NAMES,
    CellMetadata,
    MarkdownCell,
    Page,
    Section,
    SectionKind,
)

__all__ = [
    "Author",
    "BodyFontFamily",
    "CellMetadata",
    "HeaderFont",
    "MarkdownCell",
    "NotebookMetadata",
    "OliDocument",
    "Orientation",
    "Page",
    "PageLayout",
    "Paper",
    "PaperDimensions",
    "Section",
    "SECTION_DISPLAY_NAMES",
    "SectionKind",
    "SectionLayout",
]
