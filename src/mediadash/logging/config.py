"""Root logger setup for the mediadash CLI and server.

Logs go to exactly one destination: the log file when one is configured,
stderr otherwise. A log file that cannot be opened falls back to stderr and
the failure is logged there.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from mediadash.logging.context import IntegrationContextFilter
from mediadash.logging.handlers import JSONFormatter

if TYPE_CHECKING:
    from mediadash.config.models import LoggingConfig

logger = logging.getLogger(__name__)

LOG_FILE_MAX_BYTES = 10_000_000
LOG_FILE_BACKUP_COUNT = 5

# context_tag is "[tdarr:<app id>] " inside an operation, "" otherwise.
TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(context_tag)s%(name)s: %(message)s"
TEXT_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def build_formatter(log_format: str) -> logging.Formatter:
    """Return the formatter for "text" or "json" output."""
    if log_format.casefold() == "json":
        return JSONFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATE_FORMAT)


def _open_log_file(path: Path) -> RotatingFileHandler:
    path = path.expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        path,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )


def configure_logging(config: LoggingConfig) -> logging.Handler:
    """Point the root logger at the configured destination.

    Handlers installed by earlier calls are replaced.

    Returns:
        The handler now attached to the root logger.
    """
    handler: logging.Handler | None = None
    file_error: OSError | None = None
    if config.file is not None:
        try:
            handler = _open_log_file(config.file)
        except OSError as e:
            file_error = e
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(build_formatter(config.format))
    handler.addFilter(IntegrationContextFilter())

    root_logger = logging.getLogger()
    for old in root_logger.handlers[:]:
        root_logger.removeHandler(old)
    root_logger.addHandler(handler)
    root_logger.setLevel(config.level.upper())

    if file_error is not None:
        logger.warning(
            "Could not open log file %s, logging to stderr: %s",
            config.file,
            file_error,
        )
    return handler
