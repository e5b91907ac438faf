"""Process-wide logging setup for the CLI and the API."""

from __future__ import annotations

import logging

from wms.infrastructure.config import Config

_configured = False


def setup_logging(config: Config) -> None:
    """Attach one console handler to the ``wms`` logger (idempotent)."""
    global _configured
    logger = logging.getLogger("wms")
    logger.setLevel(getattr(logging, config.LOG_LEVEL.upper()))
    if _configured:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(config.LOG_FORMAT))
    logger.addHandler(handler)
    _configured = True
