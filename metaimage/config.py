from __future__ import annotations

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from metaimage import __version__

# Load environment variables from a .env file if present (local dev only)
load_dotenv()


class Settings(BaseSettings):
    """Application configuration loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="METAIMAGE_", case_sensitive=False)

    # Outbound HTTP
    fetch_timeout: float = Field(10.0, gt=0, description="Timeout in seconds for page and image fetches.")
    max_fetch_bytes: int = Field(
        10 * 1024 * 1024, ge=1, description="Largest page or image body accepted from upstream (bytes)."
    )
    user_agent: str = Field(f"metaimage/{__version__}", description="User-Agent sent on outbound requests.")

    # Thumbnails
    max_dimension: int = Field(4096, ge=1, description="Largest accepted thumbnail width or height (pixels).")
    max_source_pixels: int = Field(
        40_000_000, ge=1, description="Largest source image decoded, in pixels (width * height)."
    )

    # Logging
    log_level: str = Field("INFO", description="Root log level.")


@lru_cache()
def get_settings() -> Settings:  # pragma: no cover
    """Return a cached Settings instance so it is only parsed once."""

    return Settings()
