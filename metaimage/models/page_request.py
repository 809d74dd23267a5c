from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


class PageRequest(BaseModel):
    """One incoming thumbnail request.

    ``requested_width``/``requested_height`` are ``None`` when the query value
    was absent or not an integer; the transformer then derives them from the
    source image. Non-positive integers are kept so they can be rejected later.
    """

    model_config = ConfigDict(frozen=True)

    page_url: str = Field(..., min_length=1)
    requested_width: int | None = None
    requested_height: int | None = None

    @classmethod
    def from_query(cls, page_url: str, width: str | None, height: str | None) -> "PageRequest":
        return cls(
            page_url=page_url.strip(),
            requested_width=parse_dimension(width),
            requested_height=parse_dimension(height),
        )


def parse_dimension(raw: str | None) -> int | None:
    """Parse a query value as a 32-bit signed integer, or return ``None``."""

    if raw is None:
        return None
    text = raw.strip()
    if not _INTEGER_RE.fullmatch(text):
        return None
    value = int(text)
    if value < _INT32_MIN or value > _INT32_MAX:
        return None
    return value
