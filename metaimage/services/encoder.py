"""Serialize thumbnails to JPEG."""
from __future__ import annotations

import io
import logging

from PIL import Image

from metaimage.errors import EncodeFailure
from metaimage.models import Thumbnail
from metaimage.models.thumbnail import ONE_DAY_SECONDS

logger = logging.getLogger(__name__)

JPEG_QUALITY = 60


def encode(image: Image.Image, *, url: str | None = None) -> Thumbnail:
    """Encode ``image`` as a JPEG thumbnail cached for one day."""

    try:
        rgb = image.convert("RGB")  # JPEG has no alpha channel
        buffer = io.BytesIO()
        rgb.save(buffer, format="JPEG", quality=JPEG_QUALITY)
    except (OSError, ValueError) as exc:
        raise EncodeFailure(f"JPEG encoding failed: {exc}", url=url) from exc

    content = buffer.getvalue()
    logger.debug("Encoded %dx%d thumbnail, %d bytes", rgb.width, rgb.height, len(content))
    return Thumbnail(content=content, cache_max_age_seconds=ONE_DAY_SECONDS)
