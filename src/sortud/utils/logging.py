"""Logging setup for the sortud command-line tool.

Rendered output owns standard output, so every log record goes to
standard error. Modules obtain loggers with ``logging.getLogger(__name__)``
and attach structured context through ``extra={...}``.
"""

import logging
import sys
from typing import Final, TextIO

DEFAULT_LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Root of the package logger hierarchy configured by the CLI
PACKAGE_LOGGER: Final[str] = "sortud"


def configure_logging(
    *,
    log_level: str = "WARNING",
    enable_console: bool = True,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Configure the package logger with a console handler.

    Existing handlers on the package logger are removed so that repeated
    calls (for example from tests) do not duplicate output.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_console: Attach a stream handler
        stream: Stream for the handler (default: standard error)

    Returns:
        The configured package logger

    Example:
        >>> logger = configure_logging(log_level="DEBUG")
        >>> logger.debug("Walk started", extra={"root": "."})
    """
    logger = logging.getLogger(PACKAGE_LOGGER)

    level = getattr(logging, log_level.upper(), logging.WARNING)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
        console_handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
        logger.addHandler(console_handler)
    else:
        logger.addHandler(logging.NullHandler())

    return logger
