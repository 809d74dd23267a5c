"""Shared fixtures."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from metaimage.config import Settings
from metaimage.main import create_app
from tests.helpers import FakeWeb


@pytest.fixture
def fake_web() -> FakeWeb:
    return FakeWeb()


@pytest.fixture
def settings() -> Settings:
    return Settings(fetch_timeout=5.0, max_fetch_bytes=2 * 1024 * 1024, max_dimension=2000)


@pytest.fixture
def client(fake_web: FakeWeb, settings: Settings):
    app = create_app(settings, transport=fake_web.transport)
    with TestClient(app) as test_client:
        yield test_client
