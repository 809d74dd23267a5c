"""``GET /meta-image``: social-card thumbnail for a page URL."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import Response

from metaimage.errors import MissingParameter, ThumbnailError
from metaimage.models import PageRequest
from metaimage.services.thumbnail_service import ThumbnailService

router = APIRouter()
logger = logging.getLogger(__name__)


def get_thumbnail_service(request: Request) -> ThumbnailService:
    """Retrieve the shared thumbnail service from the app state."""
    return request.app.state.thumbnail_service


def not_found() -> Response:
    return Response(status_code=404)


@router.get("/meta-image")
async def meta_image(
    u: str | None = Query(None, description="Page whose og:image/twitter:image is thumbnailed."),
    w: str | None = Query(None, description="Thumbnail width; defaults to a tenth of the source."),
    h: str | None = Query(None, description="Thumbnail height; defaults to a tenth of the source."),
    service: ThumbnailService = Depends(get_thumbnail_service),
):
    """Return a JPEG thumbnail, or an empty 404 for any failure."""
    try:
        if u is None or not u.strip():
            raise MissingParameter("query parameter 'u' is required")
        page_request = PageRequest.from_query(u, w, h)
        thumbnail = await service.build(page_request)
    except ThumbnailError as exc:
        logger.warning("meta-image failed: %s", exc)
        return not_found()

    return Response(
        content=thumbnail.content,
        media_type=thumbnail.mime_type,
        headers={"Cache-Control": thumbnail.cache_control},
    )
