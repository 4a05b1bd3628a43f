"""FastAPI application with lifespan and health endpoint."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from oliva.api import register_error_handlers
from oliva.api import router as notebooks_router
from oliva.config import get_settings
from oliva.logging_config import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: configure logging and load config on startup."""
    configure_logging()
    settings = get_settings()
    app.state.settings = settings
    yield


app = FastAPI(
    title="Oliva",
    lifespan=lifespan,
)
app.include_router(notebooks_router)
register_error_handlers(app)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": "oliva",
        "version": "0.1.0",
    }
