"""Logging setup for the service."""

import logging
import sys

_HANDLER_FLAG = "_settlement_handler"


def setup_logging(level: str = "INFO", logger_name: str | None = None) -> logging.Logger:
    """
    Configure the root (or a named) logger.

    Idempotent: calling it again only changes the level.
    """
    logger = logging.getLogger(logger_name or "")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not any(getattr(h, _HANDLER_FLAG, False) for h in logger.handlers):
        handler = logging.StreamHandler(stream=sys.stderr)
        setattr(handler, _HANDLER_FLAG, True)
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%H:%M:%S",
            )
        )
        logger.addHandler(handler)

    return logger
