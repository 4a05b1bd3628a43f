"""Errors raised by the persistence adapter."""

from oliva.errors import NotebookError


class NotebookStorageError(NotebookError):
    """Reading or writing a notebook file failed."""


class NotebookNotFoundError(NotebookStorageError):
    """No notebook exists at the requested location."""


class NotebookParseError(NotebookStorageError):
    """The text is not valid JSON or not a complete notebook document."""
