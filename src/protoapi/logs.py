from __future__ import annotations

import logging
import sys

LOG_LEVEL_ENV = "PROTOAPI_LOG_LEVEL"
LOG_FORMAT = "protoapi: %(levelname)s: %(message)s"


def configure_logging(level: str | int = logging.WARNING) -> None:
    """Send protoapi log records to stderr.

    stdout is reserved for the protoc plugin protocol. Unknown level names
    fall back to WARNING.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.strip().upper())
        if not isinstance(level, int):
            level = logging.WARNING
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger = logging.getLogger("protoapi")
    logger.handlers[:] = [handler]
    logger.setLevel(level)
    logger.propagate = False
