"""Page, section and cell models."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, PositiveFloat, PositiveInt

from oliva.errors import InvalidSectionError


class SectionKind(str, Enum):
    """The three regions of a Cornell page."""

    CONTENT = "content"
    CUE = "cue"
    SUMMARY = "summary"

    @classmethod
    def parse(cls, value: "SectionKind | str") -> "SectionKind":
        """Coerce a section name to a SectionKind, raising InvalidSectionError."""
        try:
            return cls(value)
        except ValueError:
            raise InvalidSectionError(
                f"Invalid section {value!r}: expected one of "
                f"{', '.join(kind.value for kind in cls)}"
            ) from None


# Display names written into new sections
SECTION_DISPLAY_NAMES: dict[SectionKind, str] = {
    SectionKind.CONTENT: "Contenido",
    SectionKind.CUE: "Cue",
    SectionKind.SUMMARY: "Resumen",
}


class CellMetadata(BaseModel):
    """Free-form cell metadata. Only ``name`` is defined by the format."""

    name: str = ""


class MarkdownCell(BaseModel):
    """A sized block of markdown occupying vertical space in a section."""

    cell_type: Literal["markdown"] = "markdown"
    id: str
    metadata: CellMetadata = Field(default_factory=CellMetadata)
    source: str = ""  # Opaque markdown payload
    size: PositiveInt | PositiveFloat  # Vertical extent in mm


class Section(BaseModel):
    """A named region of a page holding cells top-to-bottom."""

    name: str
    cells: list[MarkdownCell] = []


class Page(BaseModel):
    """One physical sheet with its three sections."""

    id: str
    content: Section
    cue: Section
    summary: Section
