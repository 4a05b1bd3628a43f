"""Notebook persistence: JSON load/save."""

from oliva.storage.errors import NotebookNotFoundError, NotebookParseError, NotebookStorageError
from oliva.storage.io import (
    load_notebook_from_dict,
    load_notebook_from_file,
    load_notebook_from_string,
    notebook_to_dict,
    serialize_notebook,
    write_notebook_to_file,
)

__all__ = [
    "load_notebook_from_dict",
    "load_notebook_from_file",
    "load_notebook_from_string",
    "NotebookNotFoundError",
    "NotebookParseError",
    "NotebookStorageError",
    "notebook_to_dict",
    "serialize_notebook",
    "write_notebook_to_file",
]
