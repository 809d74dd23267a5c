"""Model and query parsing tests."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from metaimage.models import PageRequest, TargetSize, Thumbnail
from metaimage.models.page_request import parse_dimension


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, None),
        ("100", 100),
        (" 42 ", 42),
        ("+7", 7),
        ("0", 0),
        ("-5", -5),
        ("", None),
        ("abc", None),
        ("1.5", None),
        ("2147483647", 2147483647),
        ("2147483648", None),
        ("1_00", None),
        ("\u0661\u0662", None),
        ("12px", None),
    ],
)
def test_parse_dimension(raw, expected):
    assert parse_dimension(raw) == expected


def test_page_request_from_query():
    request = PageRequest.from_query(" https://example.com/a ", "100", "oops")

    assert request.page_url == "https://example.com/a"
    assert request.requested_width == 100
    assert request.requested_height is None


def test_page_request_is_immutable():
    request = PageRequest(page_url="https://example.com/a")
    with pytest.raises(ValidationError):
        request.requested_width = 10


def test_target_size_must_be_positive():
    with pytest.raises(ValidationError):
        TargetSize(width=0, height=10)


def test_thumbnail_is_read_only():
    thumb = Thumbnail(content=b"\xff\xd8")
    with pytest.raises(ValidationError):
        thumb.content = b""
