from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ONE_DAY_SECONDS = 24 * 60 * 60


class Thumbnail(BaseModel):
    """Encoded thumbnail plus the caching hints sent with it."""

    model_config = ConfigDict(frozen=True)

    content: bytes
    mime_type: Literal["image/jpeg"] = "image/jpeg"
    cache_max_age_seconds: int = Field(ONE_DAY_SECONDS, ge=0)

    @property
    def cache_control(self) -> str:
        # Shared caches may store it; no must-revalidate.
        return f"max-age={self.cache_max_age_seconds}, public"
