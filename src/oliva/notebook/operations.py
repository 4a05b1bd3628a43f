"""Edit operations on a Notebook.

Every operation validates its indices before mutating, so a rejected call
leaves the document exactly as it was. Local edits (adding or moving one
cell) check only the destination section and reject on overflow; they never
cascade. Geometry changes affect every section in the document and run the
reflow engine instead.
"""

import logging
from dataclasses import dataclass

from oliva.errors import CapacityError, InvalidDimensionsError, InvalidIndexError
from oliva.models.notebook import Orientation, PaperDimensions
from oliva.models.page import MarkdownCell, Page, Section, SectionKind
from oliva.notebook.document import Notebook, parse_orientation
from oliva.notebook.factory import new_blank_cell, new_blank_page, next_cell_id, next_page_id
from oliva.notebook.layout import total_size
from oliva.notebook.reflow import ReflowReport, check_reflowable, reflow, reflow_all
from oliva.paper import get_paper_size

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SectionLocation:
    """A section on a page."""

    page_index: int
    section: SectionKind | str


@dataclass(frozen=True)
class CellLocation:
    """A cell by position within a section on a page."""

    page_index: int
    section: SectionKind | str
    cell_index: int


def _ensure_fits(
    notebook: Notebook, page: Page, kind: SectionKind, section: Section, extra_mm: float
) -> None:
    """Raise CapacityError if adding ``extra_mm`` to the section would overflow it."""
    capacity = notebook.section_capacity(kind)
    required = total_size(section.cells) + extra_mm
    if required > capacity:
        logger.info(
            "Section capacity exceeded",
            extra={
                "notebook_id": notebook.id,
                "page_id": page.id,
                "section": kind.value,
                "capacity_mm": capacity,
                "required_mm": required,
            },
        )
        raise CapacityError(
            f"Cannot place cell in {kind.value} section on page {page.id}: "
            f"exceeds maximum section size of {capacity} mm.",
            section=kind.value,
            page_id=page.id,
            capacity_mm=capacity,
            required_mm=required,
        )


# -- Pages --


def add_page(notebook: Notebook) -> Page:
    """Append a page whose sections each hold one placeholder cell."""
    page = new_blank_page(next_page_id(notebook.pages), notebook.min_cell_size)
    notebook.append_page(page)
    notebook.touch()
    logger.info("Page added", extra={"notebook_id": notebook.id, "page_id": page.id})
    return page


def move_page(notebook: Notebook, old_index: int, new_index: int) -> None:
    notebook.page_at(old_index)
    notebook.page_at(new_index)
    page = notebook.remove_page(old_index)
    notebook.insert_page(new_index, page)
    notebook.touch()


def delete_page(notebook: Notebook, page_index: int) -> Page:
    """Remove a page. The last remaining page cannot be deleted."""
    notebook.page_at(page_index)
    if notebook.page_count == 1:
        raise InvalidIndexError("Cannot delete the only page of a notebook.")
    page = notebook.remove_page(page_index)
    notebook.touch()
    logger.info("Page deleted", extra={"notebook_id": notebook.id, "page_id": page.id})
    return page


# -- Cells --


def add_cell(notebook: Notebook, page_index: int, section: SectionKind | str) -> MarkdownCell:
    """Append a minimum-size cell to one section, rejecting it if the section would overflow."""
    kind = SectionKind.parse(section)
    page = notebook.page_at(page_index)
    target = notebook.section_at(page_index, kind)
    cell = new_blank_cell(next_cell_id(kind, target.cells), notebook.min_cell_size)
    _ensure_fits(notebook, page, kind, target, cell.size)
    target.cells.append(cell)
    notebook.touch()
    logger.debug(
        "Cell added",
        extra={"notebook_id": notebook.id, "page_id": page.id, "cell_id": cell.id},
    )
    return cell


def move_cell_in_section(
    notebook: Notebook,
    page_index: int,
    section: SectionKind | str,
    old_index: int,
    new_index: int,
) -> None:
    """Reorder a cell within its section. Total size is unchanged, so no capacity check."""
    notebook.cell_at(page_index, section, old_index)
    notebook.cell_at(page_index, section, new_index)
    cell = notebook.remove_cell(page_index, section, old_index)
    notebook.insert_cell(page_index, section, new_index, cell)
    notebook.touch()


def relocate_cell(
    notebook: Notebook, source: CellLocation, destination: SectionLocation
) -> MarkdownCell:
    """Move a cell to the end of another section, on the same or another page.

    Only the destination section is capacity-checked. On failure the cell is
    put back at its original position and CapacityError is raised.
    """
    source_kind = SectionKind.parse(source.section)
    destination_kind = SectionKind.parse(destination.section)
    notebook.cell_at(source.page_index, source_kind, source.cell_index)
    destination_page = notebook.page_at(destination.page_index)
    destination_section = notebook.section_at(destination.page_index, destination_kind)

    same_section = (
        source.page_index == destination.page_index and source_kind is destination_kind
    )
    cell = notebook.remove_cell(source.page_index, source_kind, source.cell_index)
    if not same_section:
        try:
            _ensure_fits(notebook, destination_page, destination_kind, destination_section, cell.size)
        except CapacityError:
            notebook.insert_cell(source.page_index, source_kind, source.cell_index, cell)
            raise
    destination_section.cells.append(cell)
    notebook.touch()
    logger.debug(
        "Cell relocated",
        extra={
            "notebook_id": notebook.id,
            "cell_id": cell.id,
            "from_page": source.page_index,
            "from_section": source_kind.value,
            "to_page": destination.page_index,
            "to_section": destination_kind.value,
        },
    )
    return cell


def move_cell_to_section(
    notebook: Notebook,
    page_index: int,
    from_section: SectionKind | str,
    to_section: SectionKind | str,
    cell_index: int,
) -> MarkdownCell:
    return relocate_cell(
        notebook,
        CellLocation(page_index, from_section, cell_index),
        SectionLocation(page_index, to_section),
    )


def move_cell_to_page(
    notebook: Notebook,
    from_page_index: int,
    to_page_index: int,
    section: SectionKind | str,
    cell_index: int,
) -> MarkdownCell:
    return relocate_cell(
        notebook,
        CellLocation(from_page_index, section, cell_index),
        SectionLocation(to_page_index, section),
    )


def delete_cell(
    notebook: Notebook, page_index: int, section: SectionKind | str, cell_index: int
) -> MarkdownCell:
    cell = notebook.remove_cell(page_index, section, cell_index)
    notebook.touch()
    return cell


def update_cell(
    notebook: Notebook,
    page_index: int,
    section: SectionKind | str,
    cell_index: int,
    source: str | None = None,
    name: str | None = None,
) -> MarkdownCell:
    """Edit a cell's markdown payload or metadata name. Size is untouched."""
    cell = notebook.cell_at(page_index, section, cell_index)
    if source is not None:
        cell.source = source
    if name is not None:
        cell.metadata.name = name
    notebook.touch()
    return cell


def resize_cell(
    notebook: Notebook,
    page_index: int,
    section: SectionKind | str,
    cell_index: int,
    size: float,
) -> ReflowReport:
    """Change a cell's height and reflow that section kind from its page onward.

    The new size must be positive and must fit an empty section.
    """
    kind = SectionKind.parse(section)
    page = notebook.page_at(page_index)
    cell = notebook.cell_at(page_index, kind, cell_index)
    if size <= 0:
        raise InvalidDimensionsError(f"Cell size must be positive, got {size}")
    capacity = notebook.section_capacity(kind)
    if size > capacity:
        raise CapacityError(
            f"Cell {cell.id} of {size} mm can never fit the {kind.value} section "
            f"(capacity {capacity} mm).",
            section=kind.value,
            page_id=page.id,
            capacity_mm=capacity,
            required_mm=size,
        )
    # Cells further on may already be oversized in a loaded document
    check_reflowable(notebook, kind, page_index)
    cell.size = size
    report = reflow(notebook, kind, start_page=page_index)
    notebook.touch()
    return report


# -- Geometry --


def change_dimensions(
    notebook: Notebook,
    width: float,
    height: float,
    name: str | None = None,
    orientation: Orientation | str | None = None,
) -> list[ReflowReport]:
    """Change the paper size and reflow every section kind from the first page.

    Shrinking the paper can overflow any page, so all three kinds are reflowed
    across the whole document. If some cell could never fit the new geometry
    the change is rejected with CapacityError and the paper is left as it was.
    """
    if width <= 0 or height <= 0:
        raise InvalidDimensionsError(f"Paper dimensions must be positive, got {width}x{height}")
    new_orientation = parse_orientation(orientation) if orientation is not None else None

    paper = notebook.metadata.paper
    previous = paper.model_copy(deep=True)
    paper.dimensions = PaperDimensions(
        name=name or paper.dimensions.name, width=width, height=height
    )
    if new_orientation is not None:
        paper.orientation = new_orientation
    try:
        for kind in SectionKind:
            check_reflowable(notebook, kind)
    except CapacityError:
        notebook.metadata.paper = previous
        raise

    reports = reflow_all(notebook)
    notebook.touch()
    logger.info(
        "Paper dimensions changed",
        extra={
            "notebook_id": notebook.id,
            "paper": paper.dimensions.name,
            "width": width,
            "height": height,
            "pages": notebook.page_count,
            "cells_moved": sum(report.cells_moved for report in reports),
        },
    )
    return reports


def change_paper(
    notebook: Notebook, preset: str, orientation: Orientation | str | None = None
) -> list[ReflowReport]:
    """Switch to a named paper preset (A4, Letter, ...) and reflow."""
    dimensions = get_paper_size(preset)
    return change_dimensions(
        notebook, dimensions.width, dimensions.height, dimensions.name, orientation
    )
