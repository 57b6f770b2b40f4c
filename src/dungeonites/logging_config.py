"""Root logger setup for processes embedding the simulation core.

The core itself only emits records through module loggers; hosts call
``configure_logging`` once at startup.
"""
from __future__ import annotations

import logging
import os
from typing import Optional, TextIO, Union

LOG_LEVEL_ENV = "DUNGEONITES_LOG_LEVEL"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def resolve_level(value: Optional[Union[str, int]], default: int = logging.INFO) -> int:
    """Turn a level name ("debug") or number ("10", 10) into a logging level."""
    if value is None or value == "":
        return default
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    if isinstance(level, int):
        return level
    return default


def configure_logging(default_level: int = logging.INFO, stream: Optional[TextIO] = None) -> int:
    """Configure the root logger and return the level that was applied.

    ``DUNGEONITES_LOG_LEVEL`` overrides ``default_level``; an unrecognised value
    falls back to the default and is reported once the handler is in place.
    """
    raw = os.getenv(LOG_LEVEL_ENV)
    level = resolve_level(raw, default_level)
    kwargs = {"level": level, "format": LOG_FORMAT}
    if stream is not None:
        kwargs["stream"] = stream
    logging.basicConfig(**kwargs)
    if raw and resolve_level(raw, default=-1) == -1:
        logger.warning("Ignoring unknown %s=%r", LOG_LEVEL_ENV, raw)
    return level
