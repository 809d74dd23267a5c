"""Page URL in, JPEG thumbnail out.

The two fetches run strictly one after the other (the image URI comes from
the page), and the CPU-bound decode/transform/encode steps start only once
the image body is complete. They run in the threadpool so a large image does
not stall the event loop for other requests.
"""
from __future__ import annotations

import logging

from PIL import Image
from starlette.concurrency import run_in_threadpool

from metaimage.errors import DecodeFailure, EncodeFailure, NoImageMetaFound, ThumbnailError, UpstreamUnavailable
from metaimage.models import PageRequest, TargetSize, Thumbnail
from metaimage.services.encoder import encode
from metaimage.services.fetcher import FetchFailure, FetchSuccess, ImageFetcher
from metaimage.services.meta_resolver import resolve_image_url
from metaimage.services.transformer import decode_image, reject_non_positive, resolve_target_size, transform

logger = logging.getLogger(__name__)


class ThumbnailService:
    """Run the fetch -> resolve -> fetch -> decode -> transform -> encode pipeline."""

    def __init__(
        self,
        fetcher: ImageFetcher,
        *,
        max_dimension: int | None = None,
        max_source_pixels: int | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._max_dimension = max_dimension
        self._max_source_pixels = max_source_pixels

    async def build(self, request: PageRequest) -> Thumbnail:
        """Return the thumbnail for ``request`` or raise a :class:`~metaimage.errors.ThumbnailError`."""

        # Nothing is fetched for a size that can never be rendered.
        reject_non_positive(request.requested_width, request.requested_height)
        page = await self._get(request.page_url)
        ref = resolve_image_url(page.text, request.page_url)
        if ref is None:
            raise NoImageMetaFound("no og:image or twitter:image meta tag", url=request.page_url)

        image_body = await self._get(ref.uri)
        return await run_in_threadpool(self.render, image_body.content, request, ref.uri)

    def render(self, content: bytes, request: PageRequest, url: str | None = None) -> Thumbnail:
        """Decode, resize and encode one image body synchronously.

        Any fault in these steps surfaces as a typed error: decode and resize
        failures as :class:`DecodeFailure`, encoder failures as
        :class:`EncodeFailure`.
        """

        image = _decode(content, url, self._max_source_pixels)
        try:
            size = resolve_target_size(
                image,
                request.requested_width,
                request.requested_height,
                max_dimension=self._max_dimension,
            )
            thumb = _transform(image, size, url)
        finally:
            image.close()
        try:
            return _encode(thumb, url)
        finally:
            thumb.close()

    async def _get(self, uri: str) -> FetchSuccess:
        result = await self._fetcher.fetch(uri)
        if isinstance(result, FetchFailure):
            raise UpstreamUnavailable(result.reason, url=result.uri)
        return result


def _decode(content: bytes, url: str | None, max_pixels: int | None) -> Image.Image:
    try:
        return decode_image(content, url=url, max_pixels=max_pixels)
    except ThumbnailError:
        raise
    except Exception as exc:  # pylint: disable=broad-exception-caught
        logger.exception("Decode failed for '%s'", url)
        raise DecodeFailure(f"decode failed: {exc}", url=url) from exc


def _transform(image: Image.Image, size: TargetSize, url: str | None) -> Image.Image:
    try:
        return transform(image, size)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        logger.exception("Resize failed for '%s'", url)
        raise DecodeFailure(f"resize failed: {exc}", url=url) from exc


def _encode(image: Image.Image, url: str | None) -> Thumbnail:
    try:
        return encode(image, url=url)
    except ThumbnailError:
        raise
    except Exception as exc:  # pylint: disable=broad-exception-caught
        logger.exception("Encode failed for '%s'", url)
        raise EncodeFailure(f"encode failed: {exc}", url=url) from exc
