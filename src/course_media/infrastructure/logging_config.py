"""Logging bootstrap for course media services and CLI."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV_VAR = "COURSE_MEDIA_LOG_LEVEL"


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger once; later calls keep existing handlers."""
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return

    level_name = (level or os.environ.get(LOG_LEVEL_ENV_VAR, "")).strip().upper()
    logging.basicConfig(
        level=logging.getLevelNamesMapping().get(level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
