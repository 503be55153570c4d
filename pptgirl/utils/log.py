"""Logging setup for the pptgirl package."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO", log_file: str | None = None) -> logging.Logger:
    """Attach a single handler to the ``pptgirl`` logger.

    Logs go to stderr, or to ``log_file`` (append mode) when given. Calling
    this again replaces the previously installed handler.
    """
    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, mode="a")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger("pptgirl")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    return logger
