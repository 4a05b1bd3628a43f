"""Section-capacity reflow engine.

Walks forward from a starting page, keeping the cells of one section kind
that fit the section's capacity and carrying the rest onto the next page's
same section, appending pages when the document runs out. Runs as a loop
over the page index, so call depth does not grow with the document.

Greedy first-fit-forward: the scan stops at the first cell that does not
fit, and that cell plus everything after it overflows, even if a later
smaller cell would have fit the remaining space. This keeps the reading
order of cells intact across pages.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from oliva.errors import CapacityError
from oliva.models.page import MarkdownCell, SectionKind
from oliva.notebook.document import Notebook, section_of
from oliva.notebook.factory import new_blank_page, next_page_id

logger = logging.getLogger(__name__)


@dataclass
class ReflowReport:
    """What a reflow pass over one section kind did."""

    section: SectionKind
    start_page: int
    pages_visited: int = 0
    cells_moved: int = 0  # One per cell per page boundary crossed
    pages_created: int = 0

    @property
    def changed(self) -> bool:
        return self.cells_moved > 0 or self.pages_created > 0


def split_to_capacity(
    cells: Sequence[MarkdownCell], capacity: float
) -> tuple[list[MarkdownCell], list[MarkdownCell]]:
    """Split cells into (kept, overflow) with a greedy forward scan. Pure function."""
    used = 0.0
    for i, cell in enumerate(cells):
        if used + cell.size > capacity:
            return list(cells[:i]), list(cells[i:])
        used += cell.size
    return list(cells), []


def check_reflowable(
    notebook: Notebook,
    kind: SectionKind,
    start_page: int = 0,
    incoming: Iterable[MarkdownCell] = (),
) -> None:
    """Verify a reflow pass can terminate, without touching the document.

    Every page from ``start_page`` on must have the section, and no cell may be
    larger than an empty section: such a cell would be pushed onto a fresh
    page forever.
    """
    capacity = notebook.section_capacity(kind)
    pages = notebook.pages[start_page:]
    candidates = list(incoming)
    for page in pages:
        candidates.extend(section_of(page, kind).cells)
    for cell in candidates:
        if cell.size > capacity:
            raise CapacityError(
                f"Cell {cell.id} ({cell.size} mm) can never fit the {kind.value} section "
                f"(capacity {capacity} mm).",
                section=kind.value,
                page_id=None,
                capacity_mm=capacity,
                required_mm=cell.size,
            )


def reflow(
    notebook: Notebook,
    kind: SectionKind | str,
    start_page: int = 0,
    incoming: Iterable[MarkdownCell] = (),
) -> ReflowReport:
    """Enforce capacity for one section kind from ``start_page`` to the end.

    ``incoming`` cells are placed ahead of the starting page's own cells, as if
    they had been displaced from the page before it. Pages after the start are
    always re-validated, even when nothing overflows into them.
    """
    kind = SectionKind.parse(kind)
    notebook.page_at(start_page)
    carry = list(incoming)
    check_reflowable(notebook, kind, start_page, carry)

    capacity = notebook.section_capacity(kind)
    report = ReflowReport(section=kind, start_page=start_page)
    index = start_page
    while True:
        section = section_of(notebook.pages[index], kind)
        kept, carry = split_to_capacity(carry + section.cells, capacity)
        section.cells = kept
        report.pages_visited += 1

        is_last = index == notebook.page_count - 1
        if carry:
            report.cells_moved += len(carry)
            if is_last:
                notebook.append_page(new_blank_page(next_page_id(notebook.pages)))
                report.pages_created += 1
        elif is_last:
            break
        index += 1

    if report.changed:
        logger.info(
            "Reflow relocated cells",
            extra={
                "notebook_id": notebook.id,
                "section": kind.value,
                "start_page": start_page,
                "pages_visited": report.pages_visited,
                "cells_moved": report.cells_moved,
                "pages_created": report.pages_created,
            },
        )
    return report


def reflow_all(notebook: Notebook, start_page: int = 0) -> list[ReflowReport]:
    """Reflow all three section kinds. Checks every kind before mutating any."""
    notebook.page_at(start_page)
    for kind in SectionKind:
        check_reflowable(notebook, kind, start_page)
    return [reflow(notebook, kind, start_page) for kind in SectionKind]
