"""Locate a page's social-preview image in its HTML.

``og:image`` wins over ``twitter:image``; only the first tag of each kind is
considered, and a tag with an empty ``content`` counts as missing.
"""
from __future__ import annotations

import logging
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from metaimage.models import ResolvedImageRef

logger = logging.getLogger(__name__)

_META_PROPERTIES = ("og:image", "twitter:image")


def resolve(html: str) -> ResolvedImageRef | None:
    """Return the preview-image URI declared in ``html``, or ``None``."""

    soup = BeautifulSoup(html or "", "html5lib")
    for prop in _META_PROPERTIES:
        tag = soup.select_one(f'head meta[property="{prop}"]')
        if tag is None:
            continue
        content = (tag.get("content") or "").strip()
        if content:
            logger.debug("Found %s -> %s", prop, content)
            return ResolvedImageRef(uri=content)
        logger.debug("Ignoring %s with empty content", prop)
    return None


def resolve_image_url(html: str, page_url: str) -> ResolvedImageRef | None:
    """Like :func:`resolve`, with relative URIs made absolute against ``page_url``."""

    ref = resolve(html)
    if ref is None:
        logger.warning("No image meta tag found on '%s'", page_url)
        return None
    try:
        absolute = urljoin(page_url, ref.uri)
    except ValueError as exc:
        logger.warning("Unusable image URL %r on '%s': %s", ref.uri, page_url, exc)
        return None
    if absolute != ref.uri:
        return ResolvedImageRef(uri=absolute)
    return ref
