from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TargetSize(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: int = Field(..., ge=1)
    height: int = Field(..., ge=1)
