#!/usr/bin/env python
"""Render the social-card thumbnail for one page and write it to disk."""
from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from metaimage.config import get_settings
from metaimage.errors import ThumbnailError
from metaimage.main import build_http_client
from metaimage.models import PageRequest
from metaimage.services.fetcher import ImageFetcher
from metaimage.services.thumbnail_service import ThumbnailService
from metaimage.utils.logging import setup_logging


async def run(page_request: PageRequest, output: Path) -> int:
    settings = get_settings()
    async with build_http_client(settings) as client:
        service = ThumbnailService(
            ImageFetcher(client, max_bytes=settings.max_fetch_bytes),
            max_dimension=settings.max_dimension,
            max_source_pixels=settings.max_source_pixels,
        )
        try:
            thumbnail = await service.build(page_request)
        except ThumbnailError as exc:
            print(f"Failed: {exc}", file=sys.stderr)
            return 1
    output.write_bytes(thumbnail.content)
    print(f"Wrote {len(thumbnail.content)} bytes to {output}")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Fetch a page's og:image as a JPEG thumbnail")
    parser.add_argument("url", help="Page URL")
    parser.add_argument("-w", "--width", help="Thumbnail width (default: source width / 10)")
    parser.add_argument("--height", help="Thumbnail height (default: source height / 10)")
    parser.add_argument("-o", "--output", type=Path, default=Path("thumbnail.jpg"))
    args = parser.parse_args()

    setup_logging(get_settings())
    page_request = PageRequest.from_query(args.url, args.width, args.height)
    sys.exit(asyncio.run(run(page_request, args.output)))


if __name__ == "__main__":
    main()
