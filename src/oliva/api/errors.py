"""Map notebook errors onto HTTP responses.

Structural-integrity failures are deliberately not mapped: a corrupt
document surfaces as a 500.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from oliva.errors import CapacityError, InvalidIndexError, NotebookValidationError
from oliva.storage import NotebookNotFoundError, NotebookParseError, NotebookStorageError

_STATUS_CODES: dict[type[Exception], int] = {
    InvalidIndexError: 404,
    NotebookValidationError: 422,
    CapacityError: 409,
    NotebookNotFoundError: 404,
    NotebookParseError: 400,
    NotebookStorageError: 503,
}


async def _notebook_error_handler(request: Request, exc: Exception) -> JSONResponse:
    status_code = next(
        code for cls, code in _STATUS_CODES.items() if isinstance(exc, cls)
    )
    body = {"error": type(exc).__name__, "detail": str(exc)}
    if isinstance(exc, CapacityError):
        body.update(
            section=exc.section,
            page_id=exc.page_id,
            capacity_mm=exc.capacity_mm,
            required_mm=exc.required_mm,
        )
    return JSONResponse(body, status_code=status_code)


def register_error_handlers(app: FastAPI) -> None:
    for error_class in _STATUS_CODES:
        app.add_exception_handler(error_class, _notebook_error_handler)
