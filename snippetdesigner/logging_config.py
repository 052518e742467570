"""Logging setup for hosts embedding the snippet directory resolver.

Package modules only create loggers with ``logging.getLogger(__name__)``;
nothing is emitted until the host calls ``setup_logging()`` once at startup.
Resolution reports skipped store sections at DEBUG and unreadable settings
or store files at WARNING, so WARNING is the default level.

Usage:
    from snippetdesigner.logging_config import setup_logging

    setup_logging()

Environment variables:
    SNIPPET_DESIGNER_LOG_LEVEL: Set log level (DEBUG, INFO, WARNING, ERROR)
    SNIPPET_DESIGNER_LOG_FILE: Also write to <log dir>/snippetdesigner.log (true/1)
"""

import logging
import os
import sys
from pathlib import Path

from snippetdesigner.paths import get_log_dir

LOGGER_NAME = "snippetdesigner"
LOG_FILE_NAME = "snippetdesigner.log"
DEFAULT_LEVEL = logging.WARNING

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Handlers installed here carry these names so a second setup_logging()
# replaces them without touching handlers the host attached itself.
CONSOLE_HANDLER_NAME = "snippetdesigner.console"
FILE_HANDLER_NAME = "snippetdesigner.file"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def get_log_level() -> int:
    """Level from SNIPPET_DESIGNER_LOG_LEVEL; unknown names give WARNING."""
    name = os.environ.get("SNIPPET_DESIGNER_LOG_LEVEL", "")
    return _LEVELS.get(name.strip().upper(), DEFAULT_LEVEL)


def is_file_logging_enabled() -> bool:
    return os.environ.get("SNIPPET_DESIGNER_LOG_FILE", "").strip().lower() in (
        "true",
        "1",
    )


def _remove_installed_handlers(package_logger: logging.Logger) -> None:
    for handler in list(package_logger.handlers):
        if handler.name in (CONSOLE_HANDLER_NAME, FILE_HANDLER_NAME):
            package_logger.removeHandler(handler)
            handler.close()


def _add_handler(
    package_logger: logging.Logger, handler: logging.Handler, name: str, level: int
) -> None:
    handler.set_name(name)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    package_logger.addHandler(handler)


def setup_logging(
    level: int | None = None,
    log_file: bool | None = None,
) -> logging.Logger:
    """Attach stderr (and optionally file) output to the package logger.

    An unwritable log directory leaves console logging in place and is
    reported as a warning.

    Args:
        level: Log level (uses SNIPPET_DESIGNER_LOG_LEVEL if not specified)
        log_file: Enable file logging (uses SNIPPET_DESIGNER_LOG_FILE if not specified)

    Returns:
        The configured ``snippetdesigner`` logger.
    """
    if level is None:
        level = get_log_level()
    if log_file is None:
        log_file = is_file_logging_enabled()

    package_logger = logging.getLogger(LOGGER_NAME)
    _remove_installed_handlers(package_logger)
    package_logger.setLevel(level)
    package_logger.propagate = False

    _add_handler(
        package_logger, logging.StreamHandler(sys.stderr), CONSOLE_HANDLER_NAME, level
    )

    if log_file:
        log_dir = Path(get_log_dir())
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(
                log_dir / LOG_FILE_NAME, encoding="utf-8"
            )
        except OSError as e:
            package_logger.warning(f"File logging disabled for {log_dir}: {e}")
        else:
            _add_handler(package_logger, file_handler, FILE_HANDLER_NAME, level)

    return package_logger


def set_debug_mode(enabled: bool = True) -> None:
    """Switch the package logger to DEBUG, or back to the configured level."""
    level = logging.DEBUG if enabled else get_log_level()
    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.setLevel(level)
    for handler in package_logger.handlers:
        handler.setLevel(level)
