"""Logging setup for the cryptify command line.

Only the ``cryptify`` package logger is configured; the root logger is left
to whatever embeds the library. Standard output is reserved for the
``Error:`` line, so records go to standard error.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

LOGGER_NAME = "cryptify"
LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


class _CliHandler(logging.StreamHandler):
    # marker type so repeated configure_logging() calls find their own handler
    pass


def configure_logging(
    level: int = logging.WARNING, stream: Optional[TextIO] = None
) -> logging.Logger:
    """Attach one stderr handler to the package logger and set its level.

    Safe to call more than once: the existing handler is reused and only
    its level and stream are updated.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    handler = next((h for h in logger.handlers if isinstance(h, _CliHandler)), None)
    if handler is None:
        handler = _CliHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
    handler.setStream(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    return logger
