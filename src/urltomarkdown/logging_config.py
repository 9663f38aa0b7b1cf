"""Logging setup for the urltomarkdown package and the libraries it drives."""

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "urltomarkdown"

# Libraries whose debug chatter would drown out per-URL messages
THIRD_PARTY_LOGGERS = ("aiohttp", "charset_normalizer")

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def quiet_third_party(numeric_level: int) -> None:
    """Raise fetch and decoding library loggers to at least WARNING."""
    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Configure the package logger.

    Records go to stderr, since stdout carries converted Markdown, and
    optionally to a file. aiohttp and charset_normalizer are held at
    WARNING or the configured level, whichever is higher.

    Args:
        level: Logging level name; unknown names fall back to INFO
        log_file: Optional file path for logging output
        format_string: Optional custom format string for log messages
        force: If True, replace handlers installed by an earlier call

    Returns:
        The "urltomarkdown" logger
    """
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(numeric_level)

    if force or not logger.handlers:
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

        handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
        if log_file:
            handlers.append(logging.FileHandler(log_file))
        for handler in handlers:
            handler.setLevel(numeric_level)
            handler.setFormatter(formatter)
            logger.addHandler(handler)

    logger.propagate = False
    quiet_third_party(numeric_level)

    return logger
