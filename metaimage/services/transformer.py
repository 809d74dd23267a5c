"""Decode source images and cut them down to thumbnail size.

Images are handled in a single pixel format (RGBA) from decode until the
encoder drops the alpha channel.

The resize runs in two stages, both anchored at the center:

1. *fit*: scale uniformly so the whole image fits inside the target box;
2. *crop*: scale again so the image covers the box, then cut the centered
   ``width x height`` region.

The net effect is cover-fit followed by a center crop. Sources smaller than
the box are upscaled.
"""
from __future__ import annotations

import io
import logging

from PIL import Image, UnidentifiedImageError

from metaimage.errors import DecodeFailure, InvalidTargetSize
from metaimage.models import TargetSize

logger = logging.getLogger(__name__)

PIXEL_MODE = "RGBA"
RESAMPLE = Image.Resampling.BICUBIC

# Without an explicit size the thumbnail is a tenth of the source.
DEFAULT_SCALE_DIVISOR = 10


def decode_image(content: bytes, *, url: str | None = None, max_pixels: int | None = None) -> Image.Image:
    """Decode ``content`` into an RGBA image.

    The header size is checked against ``max_pixels`` before any pixel data
    is decoded.

    Raises
    ------
    DecodeFailure
        If Pillow cannot identify or fully decode the bytes, or the image
        exceeds ``max_pixels`` or Pillow's decompression-bomb limit.
    """

    if not content:
        raise DecodeFailure("empty image body", url=url)
    try:
        with Image.open(io.BytesIO(content)) as src:
            if max_pixels is not None and src.width * src.height > max_pixels:
                raise DecodeFailure(
                    f"source {src.width}x{src.height} exceeds {max_pixels} pixels", url=url
                )
            src.load()
            image = src.convert(PIXEL_MODE)
    except (UnidentifiedImageError, Image.DecompressionBombError) as exc:
        raise DecodeFailure(str(exc), url=url) from exc
    except (OSError, SyntaxError, ValueError) as exc:
        # Truncated or corrupt data surfaces as one of these from the plugins.
        raise DecodeFailure(f"corrupt image data: {exc}", url=url) from exc

    logger.debug("Decoded %dx%d image from %s", image.width, image.height, url or "<bytes>")
    return image


def resolve_target_size(
    image: Image.Image,
    width: int | None,
    height: int | None,
    *,
    max_dimension: int | None = None,
) -> TargetSize:
    """Pick the output size, falling back to a tenth of the source per axis.

    Non-positive results (requested, or a fallback on a source narrower than
    ten pixels) raise :class:`InvalidTargetSize`, as do results above
    ``max_dimension``.
    """

    w = width if width is not None else image.width // DEFAULT_SCALE_DIVISOR
    h = height if height is not None else image.height // DEFAULT_SCALE_DIVISOR
    return validate_target_size(w, h, max_dimension=max_dimension)


def reject_non_positive(width: int | None, height: int | None) -> None:
    """Raise :class:`InvalidTargetSize` for any explicitly requested size <= 0."""

    if (width is not None and width <= 0) or (height is not None and height <= 0):
        raise InvalidTargetSize(f"requested size must be positive, got w={width} h={height}")


def validate_target_size(width: int, height: int, *, max_dimension: int | None = None) -> TargetSize:
    if width <= 0 or height <= 0:
        raise InvalidTargetSize(f"target size must be positive, got {width}x{height}")
    if max_dimension is not None and (width > max_dimension or height > max_dimension):
        raise InvalidTargetSize(f"target size {width}x{height} exceeds {max_dimension}px")
    return TargetSize(width=width, height=height)


def transform(image: Image.Image, size: TargetSize) -> Image.Image:
    """Return a new image of exactly ``size``: cover-fit, then center crop."""

    fitted = _fit(image, size)
    return _crop(fitted, size)


def fit_size(src_w: int, src_h: int, size: TargetSize) -> tuple[int, int]:
    """Largest uniformly scaled size of ``src_w x src_h`` that fits inside ``size``."""

    scale = min(size.width / src_w, size.height / src_h)
    return max(1, round(src_w * scale)), max(1, round(src_h * scale))


def cover_size(src_w: int, src_h: int, size: TargetSize) -> tuple[int, int]:
    """Smallest uniformly scaled size of ``src_w x src_h`` that covers ``size``."""

    scale = max(size.width / src_w, size.height / src_h)
    # Rounding must never leave the covered box short of the target.
    return max(size.width, round(src_w * scale)), max(size.height, round(src_h * scale))


def crop_box(cover_w: int, cover_h: int, size: TargetSize) -> tuple[int, int, int, int]:
    left = (cover_w - size.width) // 2
    top = (cover_h - size.height) // 2
    return left, top, left + size.width, top + size.height


def _fit(image: Image.Image, size: TargetSize) -> Image.Image:
    return image.resize(fit_size(image.width, image.height, size), RESAMPLE)


def _crop(image: Image.Image, size: TargetSize) -> Image.Image:
    covered = image.resize(cover_size(image.width, image.height, size), RESAMPLE)
    box = crop_box(covered.width, covered.height, size)
    if box == (0, 0, covered.width, covered.height):
        return covered
    return covered.crop(box)
