"""Error taxonomy for notebook operations.

Three families, matching how a caller should react:

- ``NotebookValidationError``: the input was wrong (bad index, unknown
  section, impossible dimensions). Raised before any mutation.
- ``CapacityError``: the edit is well-formed but would overflow a section.
  Any partial removal is rolled back before raising.
- ``StructuralIntegrityError``: the document itself is corrupt (a page is
  missing a section). Not a user mistake; do not catch and retry.
"""


class NotebookError(Exception):
    """Base class for all notebook errors."""


class NotebookValidationError(NotebookError, ValueError):
    """Invalid input to a notebook operation. The document is unchanged."""


class InvalidIndexError(NotebookValidationError, IndexError):
    """A page, section or cell index does not currently exist."""


class InvalidSectionError(NotebookValidationError):
    """A section name is not one of content, cue or summary."""


class InvalidDimensionsError(NotebookValidationError):
    """Paper or layout geometry is not usable (non-positive, unknown preset)."""


class CapacityError(NotebookError):
    """An edit would push a section past its derived capacity."""

    def __init__(
        self,
        message: str,
        *,
        section: str,
        page_id: str | None,
        capacity_mm: float,
        required_mm: float,
    ) -> None:
        super().__init__(message)
        self.section = section
        self.page_id = page_id
        self.capacity_mm = capacity_mm
        self.required_mm = required_mm


class StructuralIntegrityError(NotebookError):
    """A page is missing one of its three sections."""
