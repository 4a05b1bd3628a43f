"""Registry of open notebooks with per-notebook serialization.

The document model has no internal locking. Every public operation on an
open notebook runs under that notebook's asyncio.Lock, so concurrent
requests never observe a half-applied edit or reflow.
"""

import asyncio
import logging
import re
import uuid
from collections.abc import Callable
from pathlib import Path
from typing import Any

from oliva.config import get_settings
from oliva.errors import NotebookValidationError
from oliva.notebook.document import Notebook
from oliva.storage import (
    NotebookNotFoundError,
    load_notebook_from_file,
    load_notebook_from_string,
    notebook_to_dict,
    write_notebook_to_file,
)

logger = logging.getLogger(__name__)

NOTEBOOK_FILE_SUFFIX = ".oli"
_SAFE_ID = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")


class NotebookService:
    """Holds open notebooks in memory, keyed by notebook id."""

    def __init__(self, storage_dir: str | Path | None = None) -> None:
        self.storage_dir = Path(storage_dir or get_settings().storage_dir)
        self._notebooks: dict[str, Notebook] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def _register(self, notebook: Notebook) -> Notebook:
        if notebook.id in self._notebooks:
            raise NotebookValidationError(f"Notebook {notebook.id} is already open.")
        self._notebooks[notebook.id] = notebook
        self._locks[notebook.id] = asyncio.Lock()
        logger.info("Notebook opened", extra={"notebook_id": notebook.id})
        return notebook

    def get(self, notebook_id: str) -> Notebook:
        notebook = self._notebooks.get(notebook_id)
        if notebook is None:
            raise NotebookNotFoundError(f"Notebook {notebook_id} is not open.")
        return notebook

    def list_ids(self) -> list[str]:
        return list(self._notebooks)

    def create(self, author_name: str, notebook_id: str | None = None, **options: Any) -> Notebook:
        """Create and open a new notebook. Options are passed to Notebook.create."""
        notebook_id = notebook_id or uuid.uuid4().hex
        return self._register(Notebook.create(notebook_id, author_name, **options))

    def import_string(self, text: str | bytes) -> Notebook:
        return self._register(load_notebook_from_string(text))

    def open_file(self, path: str | Path) -> Notebook:
        return self._register(load_notebook_from_file(path))

    async def apply(
        self, notebook_id: str, operation: Callable[..., Any], *args: Any, **kwargs: Any
    ) -> Any:
        """Run ``operation(notebook, *args, **kwargs)`` under the notebook's lock."""
        notebook = self.get(notebook_id)
        async with self._locks[notebook_id]:
            return operation(notebook, *args, **kwargs)

    async def snapshot(self, notebook_id: str) -> dict:
        """Return the serialized document, taken under the notebook's lock."""
        return await self.apply(notebook_id, notebook_to_dict)

    async def save(self, notebook_id: str, path: str | Path | None = None) -> Path:
        """Write the notebook to ``path`` or to ``<storage_dir>/<id>.oli``."""
        if path is None:
            if not _SAFE_ID.match(notebook_id):
                raise NotebookValidationError(
                    f"Notebook id {notebook_id!r} cannot be used as a file name."
                )
            path = self.storage_dir / f"{notebook_id}{NOTEBOOK_FILE_SUFFIX}"
        notebook = self.get(notebook_id)
        async with self._locks[notebook_id]:
            return await asyncio.to_thread(write_notebook_to_file, notebook, path)

    async def close(self, notebook_id: str) -> None:
        self.get(notebook_id)
        async with self._locks[notebook_id]:
            del self._notebooks[notebook_id]
        del self._locks[notebook_id]
        logger.info("Notebook closed", extra={"notebook_id": notebook_id})


_service: NotebookService | None = None


def get_notebook_service() -> NotebookService:
    """Return the process-wide NotebookService, creating it on first call."""
    global _service
    if _service is None:
        _service = NotebookService()
    return _service


def reset_service() -> None:
    """Drop the process-wide service and its open notebooks. Used for testing."""
    global _service
    _service = None
