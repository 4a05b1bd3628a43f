"""Factories for fresh pages and cells.

Every call deep-constructs new model instances; nothing is shared between
pages or cells, so mutating one section can never leak into another.
"""

from collections.abc import Iterable

from oliva.models.page import SECTION_DISPLAY_NAMES, MarkdownCell, Page, Section, SectionKind


def new_blank_cell(cell_id: str, size: float) -> MarkdownCell:
    """Create an empty markdown cell of the given size (mm)."""
    return MarkdownCell(id=cell_id, size=size)


def new_blank_section(kind: SectionKind, placeholder_size: float | None = None) -> Section:
    """Create a section, optionally seeded with a single placeholder cell."""
    cells = []
    if placeholder_size is not None:
        cells.append(new_blank_cell(f"{kind.value}-cell-0", placeholder_size))
    return Section(name=SECTION_DISPLAY_NAMES[kind], cells=cells)


def new_blank_page(page_id: str, placeholder_size: float | None = None) -> Page:
    """Create a page with all three sections.

    With ``placeholder_size`` each section starts with one empty cell of that
    size (what a user-added page looks like). Without it the sections are
    empty, which is what reflow needs when it grows the document.
    """
    return Page(
        id=page_id,
        content=new_blank_section(SectionKind.CONTENT, placeholder_size),
        cue=new_blank_section(SectionKind.CUE, placeholder_size),
        summary=new_blank_section(SectionKind.SUMMARY, placeholder_size),
    )


def _next_free(prefix: str, start: int, taken: set[str]) -> str:
    n = start
    while f"{prefix}{n}" in taken:
        n += 1
    return f"{prefix}{n}"


def next_page_id(pages: Iterable[Page]) -> str:
    """Return ``page-<n>`` where n is the page count, bumped past existing ids."""
    ids = [page.id for page in pages]
    return _next_free("page-", len(ids), set(ids))


def next_cell_id(kind: SectionKind, cells: Iterable[MarkdownCell]) -> str:
    """Return ``<kind>-cell-<n>`` where n is the cell count, bumped past ids in the section."""
    ids = [cell.id for cell in cells]
    return _next_free(f"{kind.value}-cell-", len(ids), set(ids))
