"""
Logging configuration for FlatRepo.

Library modules only create ``flatrepo.*`` loggers. Applications that
embed FlatRepo call ``setup_logging`` to attach handlers to the package
logger; the root logger is left alone.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "flatrepo"
DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
    verbose: bool = False,
) -> logging.Logger:
    """
    Attach stderr (and optionally file) handlers to the package logger.

    Calling it again replaces the handlers installed by the previous
    call.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional file to write logs to.
        format_string: Custom format string.
        verbose: Force DEBUG regardless of ``level``.

    Returns:
        The configured package logger.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    package_logger.setLevel(logging.DEBUG if verbose else getattr(logging, level.upper()))
    package_logger.propagate = False

    # Transport noise from the HTTP stack
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    return package_logger
