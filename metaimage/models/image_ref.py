from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ResolvedImageRef(BaseModel):
    """Preview-image URI found in a page's meta tags."""

    model_config = ConfigDict(frozen=True)

    uri: str = Field(..., min_length=1)
