"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from oliva.app import app
from oliva.models.notebook import PaperDimensions
from oliva.models.page import SectionKind
from oliva.notebook import Notebook


@pytest.fixture(scope="session")
def client() -> TestClient:
    """Create a TestClient for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def a4_notebook() -> Notebook:
    """Default A4 notebook: 4 rows, 1 summary row.

    Capacities: content 222.75 mm, cue 222.75 mm, summary 74.25 mm.
    """
    return Notebook.create("nb-a4", "Ada Lovelace", paper="A4", min_cell_size=10)


@pytest.fixture
def square_notebook() -> Notebook:
    """100x100 mm notebook with empty sections: content 75 mm, cue 75 mm, summary 25 mm."""
    notebook = Notebook.create(
        "nb-square",
        "Ada Lovelace",
        paper=PaperDimensions(name="Square", width=100, height=100),
        page_rows=4,
        summary_rows=1,
        min_cell_size=10,
    )
    for kind in SectionKind:
        getattr(notebook.pages[0], kind.value).cells.clear()
    return notebook
