"""Tests for notebook edit operations."""

import random
from unittest.mock import patch

import pytest

from oliva.errors import (
    CapacityError,
    InvalidDimensionsError,
    InvalidIndexError,
    InvalidSectionError,
)
from oliva.models.notebook import Orientation
from oliva.models.page import MarkdownCell, SectionKind
from oliva.notebook import Notebook, new_blank_cell, operations
from oliva.notebook.operations import CellLocation, SectionLocation


def _cells(prefix: str, *sizes: float) -> list[MarkdownCell]:
    return [new_blank_cell(f"{prefix}-{i}", size) for i, size in enumerate(sizes)]


def _ids(cells: list[MarkdownCell]) -> list[str]:
    return [cell.id for cell in cells]


# --- Pages ---


def test_add_page_appends_page_with_placeholders(a4_notebook: Notebook):
    """add_page appends a page with one minimum-size cell per section."""
    page = operations.add_page(a4_notebook)

    assert a4_notebook.page_count == 2
    assert a4_notebook.pages[1] is page
    assert page.id == "page-1"
    assert _ids(page.content.cells) == ["content-cell-0"]
    assert _ids(page.cue.cells) == ["cue-cell-0"]
    assert _ids(page.summary.cells) == ["summary-cell-0"]
    assert page.content.cells[0].size == 10
    assert page.content.name == "Contenido"
    assert page.summary.name == "Resumen"


def test_added_pages_share_no_state(a4_notebook: Notebook):
    """Editing one added page leaves the others alone."""
    first = operations.add_page(a4_notebook)
    second = operations.add_page(a4_notebook)

    first.content.cells[0].source = "only on the first page"
    first.cue.cells.clear()

    assert second.content.cells[0].source == ""
    assert len(second.cue.cells) == 1
    assert len(a4_notebook.pages[0].cue.cells) == 1


def test_add_page_id_skips_ids_in_use(a4_notebook: Notebook):
    """New page ids never collide with existing ones."""
    operations.add_page(a4_notebook)  # page-1
    operations.add_page(a4_notebook)  # page-2
    operations.delete_page(a4_notebook, 1)

    page = operations.add_page(a4_notebook)

    assert page.id == "page-3"
    assert [p.id for p in a4_notebook.pages] == ["page-0", "page-2", "page-3"]


def test_move_page(a4_notebook: Notebook):
    """move_page removes and reinserts the page at the new index."""
    operations.add_page(a4_notebook)
    operations.add_page(a4_notebook)

    operations.move_page(a4_notebook, 0, 2)

    assert [p.id for p in a4_notebook.pages] == ["page-1", "page-2", "page-0"]


@pytest.mark.parametrize("old_index,new_index", [(-1, 0), (0, 2), (5, 0)])
def test_move_page_invalid_index(a4_notebook: Notebook, old_index: int, new_index: int):
    """Out of range page indices are rejected."""
    operations.add_page(a4_notebook)

    with pytest.raises(InvalidIndexError):
        operations.move_page(a4_notebook, old_index, new_index)

    assert [p.id for p in a4_notebook.pages] == ["page-0", "page-1"]


def test_delete_page(a4_notebook: Notebook):
    """delete_page removes and returns the page."""
    operations.add_page(a4_notebook)

    deleted = operations.delete_page(a4_notebook, 0)

    assert deleted.id == "page-0"
    assert [p.id for p in a4_notebook.pages] == ["page-1"]


def test_delete_only_page_is_rejected(a4_notebook: Notebook):
    """The only page of a notebook cannot be deleted."""
    with pytest.raises(InvalidIndexError):
        operations.delete_page(a4_notebook, 0)
    assert a4_notebook.page_count == 1


def test_delete_page_invalid_index(a4_notebook: Notebook):
    """Deleting past the last page is rejected."""
    with pytest.raises(InvalidIndexError):
        operations.delete_page(a4_notebook, 1)


# --- add_cell ---


def test_add_cell_appends_minimum_size_cell(a4_notebook: Notebook):
    """add_cell appends a cell of the minimum size."""
    cell = operations.add_cell(a4_notebook, 0, "content")

    assert cell.id == "content-cell-1"
    assert cell.size == 10
    assert cell.cell_type == "markdown"
    assert _ids(a4_notebook.pages[0].content.cells) == ["content-cell-0", "content-cell-1"]


def test_add_cell_summary_capacity_scenario(a4_notebook: Notebook):
    """Summary capacity is 297 / 4 * 1 = 74.25 mm: seven 10 mm cells fit, the eighth does not."""
    a4_notebook.pages[0].summary.cells.clear()
    assert a4_notebook.section_capacity(SectionKind.SUMMARY) == pytest.approx(74.25)

    for _ in range(7):
        operations.add_cell(a4_notebook, 0, SectionKind.SUMMARY)

    with pytest.raises(CapacityError) as exc_info:
        operations.add_cell(a4_notebook, 0, SectionKind.SUMMARY)

    assert len(a4_notebook.pages[0].summary.cells) == 7
    assert exc_info.value.section == "summary"
    assert exc_info.value.page_id == "page-0"
    assert exc_info.value.capacity_mm == pytest.approx(74.25)
    assert exc_info.value.required_mm == pytest.approx(80)


def test_add_cell_does_not_cascade(square_notebook: Notebook):
    """A full section rejects the insert even when a later page has room."""
    operations.add_page(square_notebook)
    square_notebook.pages[0].content.cells = _cells("c", 70)

    with pytest.raises(CapacityError):
        operations.add_cell(square_notebook, 0, SectionKind.CONTENT)

    assert _ids(square_notebook.pages[1].content.cells) == ["content-cell-0"]


def test_add_cell_id_skips_ids_in_use(a4_notebook: Notebook):
    """New cell ids never collide with existing ones."""
    a4_notebook.pages[0].cue.cells = _cells("x", 10)
    a4_notebook.pages[0].cue.cells[0].id = "cue-cell-1"

    cell = operations.add_cell(a4_notebook, 0, "cue")

    assert cell.id == "cue-cell-2"


def test_add_cell_invalid_section(a4_notebook: Notebook):
    """Unknown section names are rejected."""
    with pytest.raises(InvalidSectionError):
        operations.add_cell(a4_notebook, 0, "margin")


def test_add_cell_invalid_page(a4_notebook: Notebook):
    """Page indices past the end are rejected."""
    with pytest.raises(InvalidIndexError):
        operations.add_cell(a4_notebook, 1, "content")


# --- moves ---


def test_move_cell_in_section(square_notebook: Notebook):
    """A cell can be reordered within its section."""
    square_notebook.pages[0].content.cells = _cells("c", 10, 20, 30)

    operations.move_cell_in_section(square_notebook, 0, "content", 0, 2)

    assert _ids(square_notebook.pages[0].content.cells) == ["c-1", "c-2", "c-0"]


def test_move_cell_in_section_invalid_index(square_notebook: Notebook):
    """Out of range cell indices are rejected."""
    square_notebook.pages[0].content.cells = _cells("c", 10, 20)

    with pytest.raises(InvalidIndexError):
        operations.move_cell_in_section(square_notebook, 0, "content", 0, 2)

    assert _ids(square_notebook.pages[0].content.cells) == ["c-0", "c-1"]


def test_move_cell_to_section(square_notebook: Notebook):
    """A cell moves to the end of another section on the same page."""
    square_notebook.pages[0].content.cells = _cells("c", 10, 20)
    square_notebook.pages[0].cue.cells = _cells("q", 10)

    moved = operations.move_cell_to_section(square_notebook, 0, "content", "cue", 0)

    assert moved.id == "c-0"
    assert _ids(square_notebook.pages[0].content.cells) == ["c-1"]
    assert _ids(square_notebook.pages[0].cue.cells) == ["q-0", "c-0"]


def test_move_cell_to_section_rolls_back_on_capacity(square_notebook: Notebook):
    """A move into a full section leaves the cell where it was."""
    square_notebook.pages[0].content.cells = _cells("c", 10, 20, 30)
    square_notebook.pages[0].summary.cells = _cells("s", 20)  # Summary capacity 25 mm
    before = list(square_notebook.pages[0].content.cells)

    with pytest.raises(CapacityError):
        operations.move_cell_to_section(square_notebook, 0, "content", "summary", 1)

    assert square_notebook.pages[0].content.cells == before
    assert _ids(square_notebook.pages[0].content.cells) == ["c-0", "c-1", "c-2"]
    assert _ids(square_notebook.pages[0].summary.cells) == ["s-0"]


def test_move_cell_to_page(square_notebook: Notebook):
    """A cell moves to the same section of another page."""
    operations.add_page(square_notebook)
    square_notebook.pages[0].cue.cells = _cells("q", 15, 25)

    operations.move_cell_to_page(square_notebook, 0, 1, "cue", 1)

    assert _ids(square_notebook.pages[0].cue.cells) == ["q-0"]
    assert _ids(square_notebook.pages[1].cue.cells) == ["cue-cell-0", "q-1"]


def test_move_cell_to_page_rolls_back_on_capacity(square_notebook: Notebook):
    """A move onto a full page leaves the cell where it was."""
    operations.add_page(square_notebook)
    square_notebook.pages[0].content.cells = _cells("c", 10, 40, 10)
    square_notebook.pages[1].content.cells = _cells("d", 50)

    with pytest.raises(CapacityError) as exc_info:
        operations.move_cell_to_page(square_notebook, 0, 1, "content", 1)

    assert exc_info.value.page_id == "page-1"
    assert _ids(square_notebook.pages[0].content.cells) == ["c-0", "c-1", "c-2"]
    assert _ids(square_notebook.pages[1].content.cells) == ["d-0"]


def test_move_cell_to_page_invalid_destination(square_notebook: Notebook):
    """A destination page past the end is rejected."""
    square_notebook.pages[0].content.cells = _cells("c", 10)

    with pytest.raises(InvalidIndexError):
        operations.move_cell_to_page(square_notebook, 0, 4, "content", 0)

    assert _ids(square_notebook.pages[0].content.cells) == ["c-0"]


def test_relocate_within_same_section_moves_to_end(square_notebook: Notebook):
    """Same-section relocation is a reorder: no capacity check even when full."""
    square_notebook.pages[0].content.cells = _cells("c", 25, 25, 25)

    operations.relocate_cell(
        square_notebook, CellLocation(0, "content", 0), SectionLocation(0, "content")
    )

    assert _ids(square_notebook.pages[0].content.cells) == ["c-1", "c-2", "c-0"]


def test_delete_cell(square_notebook: Notebook):
    """delete_cell removes and returns the cell."""
    square_notebook.pages[0].cue.cells = _cells("q", 10, 20)

    deleted = operations.delete_cell(square_notebook, 0, "cue", 0)

    assert deleted.id == "q-0"
    assert _ids(square_notebook.pages[0].cue.cells) == ["q-1"]
    assert square_notebook.section_size(0, "cue") == 20


def test_delete_cell_invalid_index(square_notebook: Notebook):
    """Deleting past the last cell is rejected."""
    with pytest.raises(InvalidIndexError):
        operations.delete_cell(square_notebook, 0, "cue", 0)


def test_update_cell(a4_notebook: Notebook):
    """update_cell edits source and name but not size."""
    cell = operations.update_cell(a4_notebook, 0, "content", 0, source="# Heading", name="intro")

    assert cell.source == "# Heading"
    assert cell.metadata.name == "intro"
    assert cell.size == 10


# --- resize_cell ---


def test_resize_cell_reflows_following_cells(square_notebook: Notebook):
    """Growing a cell pushes the cells after it onto a new page."""
    square_notebook.pages[0].content.cells = _cells("c", 20, 20, 20)

    report = operations.resize_cell(square_notebook, 0, "content", 0, 50)

    assert square_notebook.page_count == 2
    assert _ids(square_notebook.pages[0].content.cells) == ["c-0", "c-1"]
    assert _ids(square_notebook.pages[1].content.cells) == ["c-2"]
    assert report.pages_created == 1


def test_resize_cell_larger_than_section_is_rejected(square_notebook: Notebook):
    """A size larger than an empty section is rejected."""
    square_notebook.pages[0].content.cells = _cells("c", 20)

    with pytest.raises(CapacityError):
        operations.resize_cell(square_notebook, 0, "content", 0, 80)

    assert square_notebook.pages[0].content.cells[0].size == 20


def test_resize_cell_with_oversized_cell_downstream_keeps_size(square_notebook: Notebook):
    """A later cell that can never fit aborts the resize before anything changes."""
    square_notebook.pages[0].content.cells = _cells("c", 10)
    operations.add_page(square_notebook)
    square_notebook.pages[1].content.cells = _cells("late", 80)

    with pytest.raises(CapacityError):
        operations.resize_cell(square_notebook, 0, "content", 0, 20)

    assert square_notebook.pages[0].content.cells[0].size == 10
    assert square_notebook.page_count == 2


@pytest.mark.parametrize("size", [0, -5])
def test_resize_cell_non_positive_is_rejected(square_notebook: Notebook, size: float):
    """Zero and negative sizes are rejected."""
    square_notebook.pages[0].content.cells = _cells("c", 20)

    with pytest.raises(InvalidDimensionsError):
        operations.resize_cell(square_notebook, 0, "content", 0, size)

    assert square_notebook.pages[0].content.cells[0].size == 20


# --- change_dimensions ---


def test_change_dimensions_reflow_scenario(a4_notebook: Notebook):
    """Two 60 mm content cells fit on A4; at 100 mm tall only one does."""
    a4_notebook.pages[0].content.cells = _cells("c", 60, 60)

    reports = operations.change_dimensions(a4_notebook, 210, 100)

    assert a4_notebook.metadata.paper.dimensions.height == 100
    assert a4_notebook.metadata.paper.dimensions.name == "A4"
    assert a4_notebook.section_capacity("content") == pytest.approx(75)
    assert a4_notebook.page_count == 2
    assert _ids(a4_notebook.pages[0].content.cells) == ["c-0"]
    assert _ids(a4_notebook.pages[1].content.cells) == ["c-1"]
    assert [r.section for r in reports] == list(SectionKind)
    assert reports[0].pages_created == 1


def test_change_dimensions_updates_name_and_orientation(a4_notebook: Notebook):
    """Custom dimensions rename the paper and set the orientation."""
    operations.change_dimensions(a4_notebook, 297, 210, name="A4 landscape", orientation="landscape")

    paper = a4_notebook.metadata.paper
    assert paper.dimensions.name == "A4 landscape"
    assert paper.dimensions.width == 297
    assert paper.orientation == Orientation.LANDSCAPE


def test_change_dimensions_growing_paper_moves_nothing(a4_notebook: Notebook):
    """A taller paper never moves cells."""
    operations.add_page(a4_notebook)

    reports = operations.change_dimensions(a4_notebook, 297, 420)

    assert not any(report.changed for report in reports)
    assert a4_notebook.page_count == 2


@pytest.mark.parametrize("width,height", [(0, 100), (100, 0), (-1, -1)])
def test_change_dimensions_rejects_non_positive(a4_notebook: Notebook, width, height):
    """Zero or negative dimensions are rejected."""
    with pytest.raises(InvalidDimensionsError):
        operations.change_dimensions(a4_notebook, width, height)
    assert a4_notebook.metadata.paper.dimensions.height == 297


def test_change_dimensions_rejects_invalid_orientation(a4_notebook: Notebook):
    """An unknown orientation is rejected before anything changes."""
    with pytest.raises(InvalidDimensionsError):
        operations.change_dimensions(a4_notebook, 100, 100, orientation="diagonal")
    assert a4_notebook.metadata.paper.dimensions.height == 297


def test_change_dimensions_rolls_back_when_a_cell_can_never_fit(a4_notebook: Notebook):
    """If a cell cannot fit the new paper, the old paper is restored."""
    a4_notebook.pages[0].content.cells = _cells("c", 100)

    with pytest.raises(CapacityError):
        operations.change_dimensions(a4_notebook, 210, 100, orientation="landscape")

    paper = a4_notebook.metadata.paper
    assert paper.dimensions.height == 297
    assert paper.orientation == Orientation.PORTRAIT
    assert a4_notebook.page_count == 1


def test_change_paper_preset(a4_notebook: Notebook):
    """change_paper applies a named preset."""
    operations.change_paper(a4_notebook, "a5")

    dimensions = a4_notebook.metadata.paper.dimensions
    assert (dimensions.name, dimensions.width, dimensions.height) == ("A5", 148, 210)


def test_change_paper_unknown_preset(a4_notebook: Notebook):
    """An unknown preset name is rejected."""
    with pytest.raises(InvalidDimensionsError):
        operations.change_paper(a4_notebook, "Napkin")


# --- whole-document properties ---


def test_successful_edits_refresh_modified(a4_notebook: Notebook):
    """Every successful edit refreshes the modified timestamp."""
    with patch("oliva.notebook.document.utc_timestamp", return_value="2030-01-01T00:00:00.000Z"):
        operations.add_cell(a4_notebook, 0, "cue")
    assert a4_notebook.metadata.modified == "2030-01-01T00:00:00.000Z"


def test_random_edit_sequence_conserves_cells_and_capacity(square_notebook: Notebook):
    """Successful edits change counts only by net inserts and deletes; capacity always holds."""
    rng = random.Random(7)
    expected = {kind: square_notebook.cell_count(kind) for kind in SectionKind}

    for _ in range(400):
        kind = rng.choice(list(SectionKind))
        page_index = rng.randrange(square_notebook.page_count)
        cells = getattr(square_notebook.pages[page_index], kind.value).cells
        action = rng.choice(["add", "add", "move_page", "move_section", "delete", "new_page"])
        try:
            if action == "add":
                operations.add_cell(square_notebook, page_index, kind)
                expected[kind] += 1
            elif action == "delete" and cells:
                operations.delete_cell(square_notebook, page_index, kind, rng.randrange(len(cells)))
                expected[kind] -= 1
            elif action == "move_page" and cells:
                target = rng.randrange(square_notebook.page_count)
                operations.move_cell_to_page(
                    square_notebook, page_index, target, kind, rng.randrange(len(cells))
                )
            elif action == "move_section" and cells:
                other = rng.choice(list(SectionKind))
                operations.move_cell_to_section(
                    square_notebook, page_index, kind, other, rng.randrange(len(cells))
                )
                expected[kind] -= 1
                expected[other] += 1
            elif action == "new_page":
                operations.add_page(square_notebook)
                for each in SectionKind:
                    expected[each] += 1
        except CapacityError:
            pass

        for each in SectionKind:
            assert square_notebook.cell_count(each) == expected[each]
        for index in range(square_notebook.page_count):
            for each in SectionKind:
                assert square_notebook.section_size(index, each) <= square_notebook.section_capacity(each)

    operations.change_dimensions(square_notebook, 100, 60)

    for each in SectionKind:
        assert square_notebook.cell_count(each) == expected[each]
    for index in range(square_notebook.page_count):
        for each in SectionKind:
            assert square_notebook.section_size(index, each) <= square_notebook.section_capacity(each)
