"""Notebook document, edit operations and the reflow engine.

Public API:
    Notebook.create(...) -> Notebook
    add_cell / relocate_cell / change_dimensions / ... (edit operations)
    reflow(notebook, section, start_page, incoming) -> ReflowReport
"""

from oliva.notebook.document import Notebook, section_of
from oliva.notebook.factory import new_blank_cell, new_blank_page
from oliva.notebook.operations import (
    CellLocation,
    SectionLocation,
    add_cell,
    add_page,
    change_dimensions,
    change_paper,
    delete_cell,
    delete_page,
    move_cell_in_section,
    move_cell_to_page,
    move_cell_to_section,
    move_page,
    relocate_cell,
    resize_cell,
    update_cell,
)
from oliva.notebook.reflow import ReflowReport, reflow, reflow_all, split_to_capacity

__all__ = [
    "add_cell",
    "add_page",
    "CellLocation",
    "change_dimensions",
    "change_paper",
    "delete_cell",
    "delete_page",
    "move_cell_in_section",
    "move_cell_to_page",
    "move_cell_to_section",
    "move_page",
    "new_blank_cell",
    "new_blank_page",
    "Notebook",
    "reflow",
    "reflow_all",
    "ReflowReport",
    "relocate_cell",
    "resize_cell",
    "section_of",
    "SectionLocation",
    "split_to_capacity",
    "update_cell",
]
