"""Failure kinds raised while building a thumbnail.

None of these reach the caller distinctly: the HTTP layer turns every
``ThumbnailError`` into an empty 404 and only the log sees ``kind`` and
``url``.
"""
from __future__ import annotations


class ThumbnailError(Exception):
    """Base class for every per-request failure."""

    kind = "ThumbnailError"

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.url = url

    def __str__(self) -> str:
        if self.url:
            return f"{self.kind}: {self.message} ({self.url})"
        return f"{self.kind}: {self.message}"


class MissingParameter(ThumbnailError):
    kind = "MissingParameter"


class UpstreamUnavailable(ThumbnailError):
    kind = "UpstreamUnavailable"


class NoImageMetaFound(ThumbnailError):
    kind = "NoImageMetaFound"


class DecodeFailure(ThumbnailError):
    kind = "DecodeFailure"


class InvalidTargetSize(ThumbnailError):
    kind = "InvalidTargetSize"


class EncodeFailure(ThumbnailError):
    kind = "EncodeFailure"
