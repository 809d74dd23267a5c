"""Outbound HTTP for pages and images.

Every way a fetch can go wrong (DNS, connect, timeout, non-2xx, oversized
body) collapses into a single :class:`FetchFailure`, so callers only branch
on success or not. Nothing is retried.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

import httpx

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchSuccess:
    uri: str
    content: bytes
    headers: httpx.Headers
    encoding: str | None = None

    @property
    def text(self) -> str:
        try:
            return self.content.decode(self.encoding or "utf-8", errors="replace")
        except LookupError:
            return self.content.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class FetchFailure:
    uri: str
    reason: str
    kind: str = "UpstreamUnavailable"


FetchResult = Union[FetchSuccess, FetchFailure]


class ImageFetcher:  # pylint: disable=too-few-public-methods
    """Fetch raw bodies through a shared, pooled ``httpx.AsyncClient``."""

    _DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10 MB

    def __init__(self, client: httpx.AsyncClient, *, max_bytes: int = _DEFAULT_MAX_BYTES) -> None:
        self._client = client
        self._max_bytes = max_bytes

    async def fetch(self, uri: str) -> FetchResult:
        logger.info("GET '%s'", uri)
        try:
            async with self._client.stream("GET", uri) as resp:
                if not resp.is_success:
                    logger.warning("GET '%s' returned HTTP %s", uri, resp.status_code)
                    return FetchFailure(uri, f"HTTP {resp.status_code}")

                declared = resp.headers.get("Content-Length")
                if declared and declared.isdigit() and int(declared) > self._max_bytes:
                    return self._too_large(uri)

                chunks: list[bytes] = []
                received = 0
                async for chunk in resp.aiter_bytes():
                    received += len(chunk)
                    if received > self._max_bytes:
                        return self._too_large(uri)
                    chunks.append(chunk)
                return FetchSuccess(uri, b"".join(chunks), resp.headers, resp.charset_encoding)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("GET '%s' failed: %s", uri, exc)
            return FetchFailure(uri, f"{type(exc).__name__}: {exc}")

    def _too_large(self, uri: str) -> FetchFailure:
        logger.warning("GET '%s' exceeded %d bytes", uri, self._max_bytes)
        return FetchFailure(uri, f"body larger than {self._max_bytes} bytes")
