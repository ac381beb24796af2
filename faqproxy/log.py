"""Logging setup shared by the API and the CLI."""

from __future__ import annotations

import logging
import sys
from typing import IO

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str | int = logging.INFO, stream: IO[str] | None = None) -> logging.Logger:
    """Attach a stream handler to the ``faqproxy`` logger (once) and set its level.

    Logs go to stdout unless another *stream* is given.
    """
    logger = logging.getLogger("faqproxy")
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(stream or sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)

    return logger
