"""In-memory images and a fake upstream web for tests."""

from __future__ import annotations

import io
from typing import Callable

import httpx
from PIL import Image


def make_image_bytes(width: int, height: int, color=(200, 30, 30), fmt: str = "JPEG") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format=fmt)
    return buffer.getvalue()


def page_html(head: str = "", body: str = "") -> str:
    return f"<!DOCTYPE html><html><head><title>t</title>{head}</head><body>{body}</body></html>"


class FakeWeb:
    """Routes URLs to canned responses and records every request."""

    def __init__(self) -> None:
        self.routes: dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[str] = []

    def add(self, url: str, *, status: int = 200, content: bytes | str = b"", content_type: str = "text/html") -> None:
        body = content.encode("utf-8") if isinstance(content, str) else content
        self.routes[url] = lambda request: httpx.Response(
            status, content=body, headers={"Content-Type": content_type}
        )

    def add_error(self, url: str, exc: Exception) -> None:
        def raise_(request: httpx.Request) -> httpx.Response:
            raise exc

        self.routes[url] = raise_

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)
        route = self.routes.get(url)
        if route is None:
            return httpx.Response(404)
        return route(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)
