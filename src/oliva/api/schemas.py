"""Request bodies for the notebook HTTP API."""

from pydantic import BaseModel, PositiveFloat, PositiveInt, model_validator

from oliva.models.notebook import Orientation
from oliva.models.page import SectionKind


class CreateNotebookRequest(BaseModel):
    author_name: str
    id: str | None = None
    title: str | None = None
    author_id: str = ""
    paper: str | None = None  # Preset name, e.g. "A4"
    orientation: Orientation = Orientation.PORTRAIT
    page_columns: int | None = None
    page_rows: int | None = None
    cue_columns: int | None = None
    summary_rows: int | None = None


class MovePageRequest(BaseModel):
    old_index: int
    new_index: int


class ReorderCellRequest(BaseModel):
    old_index: int
    new_index: int


class UpdateCellRequest(BaseModel):
    source: str | None = None
    name: str | None = None


class ResizeCellRequest(BaseModel):
    size: int | float


class CellRef(BaseModel):
    page_index: int
    section: SectionKind
    cell_index: int


class SectionRef(BaseModel):
    page_index: int
    section: SectionKind


class RelocateCellRequest(BaseModel):
    """Move a cell to the end of another section (same or different page)."""

    source: CellRef
    destination: SectionRef


class ChangePaperRequest(BaseModel):
    """Either a named preset or explicit width/height in mm."""

    preset: str | None = None
    width: PositiveInt | PositiveFloat | None = None
    height: PositiveInt | PositiveFloat | None = None
    name: str | None = None
    orientation: Orientation | None = None

    @model_validator(mode="after")
    def _preset_or_dimensions(self) -> "ChangePaperRequest":
        has_dimensions = self.width is not None and self.height is not None
        if self.preset is None and not has_dimensions:
            raise ValueError("Provide either a paper preset or both width and height")
        return self
