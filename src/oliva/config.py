"""Application configuration via pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="OLIVA_",
        case_sensitive=False,
    )

    # Notebook defaults
    min_cell_size_mm: int | float = 10
    default_paper: str = "A4"
    default_page_columns: int = 3
    default_page_rows: int = 4
    default_cue_columns: int = 1
    default_summary_rows: int = 1

    # Storage
    storage_dir: str = "notebooks"

    # App
    environment: str = "development"
    log_level: str = "INFO"
    port: int = 8080


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings. Lazy initialization to avoid import-time errors."""
    return Settings()
