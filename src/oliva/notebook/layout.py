"""Page layout construction and derived section capacity.

Capacity is never stored: it is recomputed from the paper height and the
layout grid every time it is needed, so a dimension change immediately
changes the capacity of every section in the document.
"""

from collections.abc import Iterable

from oliva.errors import InvalidDimensionsError
from oliva.models.notebook import NotebookMetadata, PageLayout, SectionLayout
from oliva.models.page import MarkdownCell, SectionKind


def build_page_layout(
    page_columns: int,
    page_rows: int,
    cue_columns: int,
    summary_rows: int,
) -> PageLayout:
    """Derive the three section footprints from the page grid.

    The cue column sits beside the content area above the summary band, so
    cue and content share the rows the summary does not take.
    """
    if page_columns < 1 or page_rows < 1:
        raise InvalidDimensionsError(
            f"Page grid must have at least one column and row, got {page_columns}x{page_rows}"
        )
    layout = PageLayout(
        columns=page_columns,
        rows=page_rows,
        cue_section=SectionLayout(columns=cue_columns, rows=page_rows - summary_rows),
        summary_section=SectionLayout(columns=page_columns, rows=summary_rows),
        content_section=SectionLayout(
            columns=page_columns - cue_columns, rows=page_rows - summary_rows
        ),
    )
    for kind in SectionKind:
        footprint = section_layout(layout, kind)
        if footprint.columns < 1 or footprint.rows < 1:
            raise InvalidDimensionsError(
                f"Layout {page_columns}x{page_rows} with {cue_columns} cue column(s) and "
                f"{summary_rows} summary row(s) leaves no room for the {kind.value} section"
            )
    return layout


def section_layout(layout: PageLayout, kind: SectionKind) -> SectionLayout:
    """Return the grid footprint configured for a section kind."""
    if kind is SectionKind.CUE:
        return layout.cue_section
    if kind is SectionKind.SUMMARY:
        return layout.summary_section
    return layout.content_section


def section_capacity(metadata: NotebookMetadata, kind: SectionKind) -> float:
    """Vertical capacity of a section in mm: (paper height / page rows) * section rows."""
    row_height = metadata.paper.dimensions.height / metadata.page_layout.rows
    return row_height * section_layout(metadata.page_layout, kind).rows


def total_size(cells: Iterable[MarkdownCell]) -> float:
    """Sum of cell sizes in mm."""
    return sum(cell.size for cell in cells)
