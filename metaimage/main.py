from __future__ import annotations

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from metaimage.config import Settings, get_settings
from metaimage.handlers import meta_image_handler
from metaimage.services.fetcher import ImageFetcher
from metaimage.services.thumbnail_service import ThumbnailService
from metaimage.utils.logging import setup_logging


def build_http_client(settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    """One pooled client per process; redirects are followed like a browser would."""
    return httpx.AsyncClient(
        timeout=settings.fetch_timeout,
        follow_redirects=True,
        headers={"User-Agent": settings.user_agent},
        transport=transport,
    )


def create_app(
    settings: Settings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    ``transport`` replaces the network layer of the outbound client, which
    lets tests serve pages and images from memory.
    """
    settings = settings or get_settings()
    logger = setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = build_http_client(settings, transport)
        fetcher = ImageFetcher(client, max_bytes=settings.max_fetch_bytes)
        app.state.thumbnail_service = ThumbnailService(
            fetcher,
            max_dimension=settings.max_dimension,
            max_source_pixels=settings.max_source_pixels,
        )
        logger.info("Outbound HTTP client ready (timeout=%ss)", settings.fetch_timeout)
        try:
            yield
        finally:
            await client.aclose()

    app = FastAPI(title="MetaImage API", lifespan=lifespan)
    app.include_router(meta_image_handler.router)

    @app.get("/healthz")
    async def healthz():
        return {"status": "ok"}

    return app


app = create_app()
