"""HTTP API: FastAPI router and error mapping."""

from oliva.api.errors import register_error_handlers
from oliva.api.router import router

__all__ = ["register_error_handlers", "router"]
