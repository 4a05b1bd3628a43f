"""In-memory notebook aggregate and its low-level mutation primitives.

The Notebook owns its pages exclusively. It validates indices and structure
but does not enforce capacity: that is the job of the edit operations (for
local edits) and the reflow engine (for document-wide changes).
"""

from datetime import datetime, timezone

from oliva.config import get_settings
from oliva.errors import InvalidDimensionsError, InvalidIndexError, StructuralIntegrityError
from oliva.models.notebook import (
    Author,
    BodyFontFamily,
    HeaderFont,
    NotebookMetadata,
    Orientation,
    Paper,
    PaperDimensions,
)
from oliva.models.page import MarkdownCell, Page, Section, SectionKind
from oliva.notebook.factory import new_blank_page
from oliva.notebook.layout import build_page_layout, section_capacity, total_size
from oliva.paper import get_paper_size

DEFAULT_TITLE = "Libreta sin título"
NBFORMAT = 0
NBFORMAT_MINOR = 1

DEFAULT_BODY_FONT = BodyFontFamily(
    name="Inter",
    url="https://fonts.googleapis.com/css2?family=Inter&display=swap",
    generic_family="sans-serif",
)
DEFAULT_HEADER_FONT = HeaderFont(
    family="Work Sans",
    url="https://fonts.googleapis.com/css2?family=Work+Sans&display=swap",
    generic_family="sans-serif",
)


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_orientation(value: Orientation | str) -> Orientation:
    try:
        return Orientation(value)
    except ValueError:
        raise InvalidDimensionsError(f"Invalid orientation: {value!r}") from None


def section_of(page: Page, kind: SectionKind) -> Section:
    """Return the page's section of the given kind.

    Raises StructuralIntegrityError if the page has lost that section.
    """
    section = getattr(page, kind.value, None)
    if section is None:
        raise StructuralIntegrityError(f"Section {kind.value} does not exist on page {page.id}.")
    return section


class Notebook:
    """A Cornell-style notebook: metadata plus a non-empty ordered list of pages."""

    def __init__(
        self,
        metadata: NotebookMetadata,
        pages: list[Page] | None = None,
        nbformat: int = NBFORMAT,
        nbformat_minor: int = NBFORMAT_MINOR,
        min_cell_size: float | None = None,
    ) -> None:
        if min_cell_size is None:
            min_cell_size = get_settings().min_cell_size_mm
        if min_cell_size <= 0:
            raise InvalidDimensionsError(f"Minimum cell size must be positive, got {min_cell_size}")
        self.metadata = metadata
        self.min_cell_size = min_cell_size
        self.pages: list[Page] = pages if pages else [new_blank_page("page-0", min_cell_size)]
        self.nbformat = nbformat
        self.nbformat_minor = nbformat_minor

    @classmethod
    def create(
        cls,
        notebook_id: str,
        author_name: str,
        title: str = DEFAULT_TITLE,
        author_id: str = "",
        paper: PaperDimensions | str | None = None,
        orientation: Orientation | str = Orientation.PORTRAIT,
        base_font_size: float = 12,
        body_font_family: BodyFontFamily | None = None,
        header_font: HeaderFont | None = None,
        page_columns: int | None = None,
        page_rows: int | None = None,
        cue_columns: int | None = None,
        summary_rows: int | None = None,
        min_cell_size: float | None = None,
    ) -> "Notebook":
        """Build a new single-page notebook, filling unset options from settings.

        ``paper`` may be a PaperDimensions or the name of a preset ("A4").
        """
        settings = get_settings()
        if paper is None:
            paper = settings.default_paper
        if isinstance(paper, str):
            paper = get_paper_size(paper)
        layout = build_page_layout(
            page_columns=settings.default_page_columns if page_columns is None else page_columns,
            page_rows=settings.default_page_rows if page_rows is None else page_rows,
            cue_columns=settings.default_cue_columns if cue_columns is None else cue_columns,
            summary_rows=settings.default_summary_rows if summary_rows is None else summary_rows,
        )
        now = utc_timestamp()
        metadata = NotebookMetadata(
            title=title,
            author=Author(name=author_name, id=author_id),
            paper=Paper(dimensions=paper.model_copy(), orientation=parse_orientation(orientation)),
            base_font_size=base_font_size,
            headerfont=(header_font or DEFAULT_HEADER_FONT).model_copy(),
            body_font_family=(body_font_family or DEFAULT_BODY_FONT).model_copy(),
            id=notebook_id,
            created=now,
            modified=now,
            page_layout=layout,
        )
        return cls(metadata, min_cell_size=min_cell_size)

    def __repr__(self) -> str:
        return f"Notebook(id={self.id!r}, pages={self.page_count})"

    @property
    def id(self) -> str:
        return self.metadata.id

    @property
    def page_count(self) -> int:
        return len(self.pages)

    # -- Read access --

    def page_at(self, page_index: int) -> Page:
        if not 0 <= page_index < len(self.pages):
            raise InvalidIndexError(f"Page at index {page_index} does not exist.")
        return self.pages[page_index]

    def section_at(self, page_index: int, kind: SectionKind | str) -> Section:
        return section_of(self.page_at(page_index), SectionKind.parse(kind))

    def cell_at(self, page_index: int, kind: SectionKind | str, cell_index: int) -> MarkdownCell:
        section = self.section_at(page_index, kind)
        self._check_cell_index(section, cell_index)
        return section.cells[cell_index]

    def section_capacity(self, kind: SectionKind | str) -> float:
        return section_capacity(self.metadata, SectionKind.parse(kind))

    def section_size(self, page_index: int, kind: SectionKind | str) -> float:
        return total_size(self.section_at(page_index, kind).cells)

    def cell_count(self, kind: SectionKind | str) -> int:
        """Total number of cells of one section kind across the whole document."""
        kind = SectionKind.parse(kind)
        return sum(len(section_of(page, kind).cells) for page in self.pages)

    def validate_structure(self) -> None:
        """Raise StructuralIntegrityError unless every page has all three sections."""
        if not self.pages:
            raise StructuralIntegrityError(f"Notebook {self.id} has no pages.")
        for page in self.pages:
            for kind in SectionKind:
                section_of(page, kind)

    # -- Mutation primitives --

    def append_page(self, page: Page) -> None:
        self.pages.append(page)

    def insert_page(self, page_index: int, page: Page) -> None:
        if not 0 <= page_index <= len(self.pages):
            raise InvalidIndexError(f"Cannot insert page at index {page_index}.")
        self.pages.insert(page_index, page)

    def remove_page(self, page_index: int) -> Page:
        self.page_at(page_index)
        return self.pages.pop(page_index)

    def append_cell(self, page_index: int, kind: SectionKind | str, cell: MarkdownCell) -> None:
        self.section_at(page_index, kind).cells.append(cell)

    def insert_cell(
        self, page_index: int, kind: SectionKind | str, cell_index: int, cell: MarkdownCell
    ) -> None:
        section = self.section_at(page_index, kind)
        if not 0 <= cell_index <= len(section.cells):
            raise InvalidIndexError(f"Cannot insert cell at index {cell_index}.")
        section.cells.insert(cell_index, cell)

    def remove_cell(self, page_index: int, kind: SectionKind | str, cell_index: int) -> MarkdownCell:
        section = self.section_at(page_index, kind)
        self._check_cell_index(section, cell_index)
        return section.cells.pop(cell_index)

    def touch(self) -> None:
        """Mark the notebook as modified now."""
        self.metadata.modified = utc_timestamp()

    @staticmethod
    def _check_cell_index(section: Section, cell_index: int) -> None:
        if not 0 <= cell_index < len(section.cells):
            raise InvalidIndexError(
                f"Cell at index {cell_index} does not exist in section {section.name}."
            )
