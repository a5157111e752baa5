"""Logging configuration helpers."""

import logging
from typing import Optional


def configure_logging(level: Optional[str] = None) -> None:
    """Configure application logging with a single stream handler on the ``app`` logger."""
    logger = logging.getLogger("app")
    logger.setLevel((level or "INFO").upper())
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
