"""Load and save notebooks in the JSON notebook format.

File and string loaders both decode to a dict and go through
``load_notebook_from_dict``, so the same JSON content always produces the
same in-memory notebook regardless of where it came from.
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from oliva.models.notebook import OliDocument
from oliva.notebook.document import Notebook
from oliva.storage.errors import NotebookNotFoundError, NotebookParseError, NotebookStorageError

logger = logging.getLogger(__name__)


def notebook_to_dict(notebook: Notebook) -> dict:
    """Convert a notebook to the JSON-ready document shape."""
    notebook.validate_structure()
    document = OliDocument(
        metadata=notebook.metadata,
        pages=notebook.pages,
        nbformat=notebook.nbformat,
        nbformat_minor=notebook.nbformat_minor,
    )
    return document.model_dump(mode="json", exclude_none=True)


def serialize_notebook(notebook: Notebook) -> str:
    """Serialize a notebook to pretty-printed JSON (2-space indent)."""
    return json.dumps(notebook_to_dict(notebook), indent=2, ensure_ascii=False)


def load_notebook_from_dict(data: dict) -> Notebook:
    """Reconstruct a notebook from a complete, previously serialized document."""
    try:
        document = OliDocument.model_validate(data)
    except ValidationError as exc:
        raise NotebookParseError(f"Invalid notebook document: {exc}") from exc
    return Notebook(
        metadata=document.metadata,
        pages=document.pages,
        nbformat=document.nbformat,
        nbformat_minor=document.nbformat_minor,
    )


def load_notebook_from_string(text: str | bytes) -> Notebook:
    """Parse a serialized notebook from JSON text or raw UTF-8 bytes."""
    try:
        data = json.loads(text)
    except UnicodeDecodeError as exc:
        raise NotebookParseError(f"Notebook is not valid UTF-8: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise NotebookParseError(f"Notebook is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise NotebookParseError("Notebook JSON must be an object.")
    return load_notebook_from_dict(data)


def load_notebook_from_file(path: str | Path) -> Notebook:
    path = Path(path)
    try:
        raw = path.read_bytes()
    except FileNotFoundError as exc:
        raise NotebookNotFoundError(f"Notebook file not found: {path}") from exc
    except OSError as exc:
        raise NotebookStorageError(f"Could not read notebook file {path}: {exc}") from exc
    notebook = load_notebook_from_string(raw)
    logger.info("Notebook loaded", extra={"notebook_id": notebook.id, "path": str(path)})
    return notebook


def write_notebook_to_file(notebook: Notebook, path: str | Path) -> Path:
    """Write the notebook as JSON, replacing the target atomically."""
    path = Path(path)
    payload = serialize_notebook(notebook)
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(payload, encoding="utf-8")
        tmp_path.replace(path)
    except OSError as exc:
        raise NotebookStorageError(f"Could not write notebook file {path}: {exc}") from exc
    logger.info("Notebook saved", extra={"notebook_id": notebook.id, "path": str(path)})
    return path
