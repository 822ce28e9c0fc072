import logging
import sys
from typing import TextIO

PACKAGE_LOGGER = "pokerai"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s"

_installed_handler: logging.Handler | None = None


def set_logging(level: int | str, stream: TextIO | None = None) -> logging.Logger:
    """Send pokerai diagnostics at `level` to `stream` (stderr by default)."""
    global _installed_handler

    logger = logging.getLogger(PACKAGE_LOGGER)
    if _installed_handler is not None:
        logger.removeHandler(_installed_handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    _installed_handler = handler
    return logger
