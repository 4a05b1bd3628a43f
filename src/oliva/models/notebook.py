"""Notebook metadata and the persisted document shape."""

from enum import Enum

from pydantic import BaseModel, Field, PositiveFloat, PositiveInt

from oliva.models.page import Page


class Orientation(str, Enum):
    """Paper orientation."""

    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class Author(BaseModel):
    name: str
    id: str = ""


class PaperDimensions(BaseModel):
    """Named paper size in millimetres."""

    name: str
    width: PositiveInt | PositiveFloat  # Integral values are kept as written
    height: PositiveInt | PositiveFloat


class Paper(BaseModel):
    dimensions: PaperDimensions
    orientation: Orientation = Orientation.PORTRAIT


class HeaderFont(BaseModel):
    family: str
    url: str | None = None
    generic_family: str | None = None


class BodyFontFamily(BaseModel):
    name: str
    url: str | None = None
    generic_family: str | None = None


class SectionLayout(BaseModel):
    """Grid footprint of one section, in page columns and rows."""

    columns: int
    rows: int


class PageLayout(BaseModel):
    """Grid of the whole page plus the footprint of each section.

    Cue and summary rows are complementary: cue rows = page rows - summary rows.
    """

    columns: int
    rows: int = Field(gt=0)
    cue_section: SectionLayout
    summary_section: SectionLayout
    content_section: SectionLayout


class NotebookMetadata(BaseModel):
    """Everything about a notebook except its pages."""

    title: str
    author: Author
    paper: Paper
    base_font_size: int | float
    headerfont: HeaderFont
    body_font_family: BodyFontFamily
    id: str
    created: str  # ISO-8601, UTC, millisecond precision
    modified: str
    page_layout: PageLayout


class OliDocument(BaseModel):
    """The complete persisted notebook file."""

    metadata: NotebookMetadata
    pages: list[Page] = Field(min_length=1)
    nbformat: int
    nbformat_minor: int
