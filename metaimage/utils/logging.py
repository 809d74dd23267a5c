"""Logging helpers."""

from __future__ import annotations

import logging

from metaimage.config import Settings


def setup_logging(settings: Settings) -> logging.Logger:
    """Configure the root logger once and return the package logger."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler()],
    )
    return logging.getLogger("metaimage")
