"""Meta resolver tests."""

from __future__ import annotations

from metaimage.models import ResolvedImageRef
from metaimage.services.meta_resolver import resolve, resolve_image_url
from tests.helpers import page_html


def test_og_image_wins_over_twitter_image():
    html = page_html(
        '<meta property="twitter:image" content="https://x/tw.jpg">'
        '<meta property="og:image" content="https://x/img.jpg">'
    )
    assert resolve(html) == ResolvedImageRef(uri="https://x/img.jpg")


def test_twitter_image_used_when_og_image_missing():
    html = page_html('<meta property="twitter:image" content="https://x/tw.jpg">')
    assert resolve(html).uri == "https://x/tw.jpg"


def test_first_og_image_is_used():
    html = page_html(
        '<meta property="og:image" content="https://x/first.jpg">'
        '<meta property="og:image" content="https://x/second.jpg">'
    )
    assert resolve(html).uri == "https://x/first.jpg"


def test_content_is_trimmed():
    html = page_html('<meta property="og:image" content="  https://x/img.jpg \n">')
    assert resolve(html).uri == "https://x/img.jpg"


def test_empty_og_image_falls_back_to_twitter_image():
    html = page_html(
        '<meta property="og:image" content="   ">'
        '<meta property="twitter:image" content="https://x/tw.jpg">'
    )
    assert resolve(html).uri == "https://x/tw.jpg"


def test_og_image_without_content_attribute_is_skipped():
    html = page_html(
        '<meta property="og:image">'
        '<meta property="twitter:image" content="https://x/tw.jpg">'
    )
    assert resolve(html).uri == "https://x/tw.jpg"


def test_both_empty_yields_none():
    html = page_html('<meta property="og:image" content=""><meta property="twitter:image" content=" ">')
    assert resolve(html) is None


def test_no_meta_yields_none():
    assert resolve(page_html('<meta name="description" content="hello">')) is None


def test_meta_outside_head_is_ignored():
    html = page_html(body='<meta property="og:image" content="https://x/body.jpg">')
    assert resolve(html) is None


def test_twitter_name_attribute_is_not_matched():
    # Only the ``property`` attribute is consulted.
    html = page_html('<meta name="twitter:image" content="https://x/tw.jpg">')
    assert resolve(html) is None


def test_malformed_html_does_not_raise():
    assert resolve("<html><head><meta property='og:image' content='https://x/a.jpg'") in (
        None,
        ResolvedImageRef(uri="https://x/a.jpg"),
    )
    assert resolve("<<<>>> not html at all </div></p>") is None
    assert resolve("") is None


def test_relative_uri_resolved_against_page():
    html = page_html('<meta property="og:image" content="/static/card.png">')
    ref = resolve_image_url(html, "https://example.com/posts/1")
    assert ref.uri == "https://example.com/static/card.png"


def test_absolute_uri_returned_unchanged():
    html = page_html('<meta property="og:image" content="https://cdn.example.org/a.jpg">')
    assert resolve_image_url(html, "https://example.com/a").uri == "https://cdn.example.org/a.jpg"


def test_resolve_image_url_logs_when_missing(caplog):
    with caplog.at_level("WARNING"):
        assert resolve_image_url(page_html(), "https://example.com/a") is None
    assert "No image meta tag found on 'https://example.com/a'" in caplog.text


def test_meta_found_when_head_tag_is_omitted():
    html = '<!DOCTYPE html><meta property="og:image" content="https://x/img.jpg"><title>t</title><p>body'
    assert resolve(html) == ResolvedImageRef(uri="https://x/img.jpg")


def test_malformed_image_url_counts_as_missing(caplog):
    html = page_html('<meta property="og:image" content="http://[::1/x.jpg">')
    with caplog.at_level("WARNING"):
        assert resolve_image_url(html, "https://example.com/a") is None
    assert "Unusable image URL" in caplog.text
