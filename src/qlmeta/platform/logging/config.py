"""Logger configuration bootstrap.

Where: platform/logging/config.py
What: Build the ``qlmeta`` logger with a rich stderr console and an optional rotating file.
Why: Library imports stay side-effect free on disk; the CLI opts into file logging.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path
from typing import Final

from rich.console import Console

from qlmeta.config.paths import default_log_file

from .handlers import MetadataRichHandler


LOGGER_NAME: Final[str] = "qlmeta"
DEFAULT_LOG_FILE: Final[Path] = default_log_file()

_FILE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_MAX_LOG_BYTES: Final[int] = 10 * 1024 * 1024
_LOG_BACKUPS: Final[int] = 5


def _console_handler(level: int) -> logging.Handler:
    handler = MetadataRichHandler(console=Console(stderr=True, soft_wrap=True))
    handler.setLevel(level)
    return handler


def _rotating_file_handler(log_file: Path, level: int) -> logging.Handler:
    target = Path(log_file).expanduser().resolve()
    target.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        target,
        maxBytes=_MAX_LOG_BYTES,
        backupCount=_LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT))
    return handler


def setup_logger(
    log_file: Path | None = None,
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> logging.Logger:
    """(Re)configure the application logger.

    Existing handlers are closed and replaced, so repeated calls are safe.

    Args:
        log_file: Rotating log destination; console only when None.
        console_level: Threshold for the stderr console.
        file_level: Threshold for the log file.

    Returns:
        logging.Logger: The configured ``qlmeta`` logger.
    """
    configured = logging.getLogger(LOGGER_NAME)
    configured.setLevel(logging.DEBUG)

    for stale in list(configured.handlers):
        configured.removeHandler(stale)
        stale.close()

    configured.addHandler(_console_handler(console_level))
    if log_file is not None:
        configured.addHandler(_rotating_file_handler(log_file, file_level))
    return configured


logger: Final[logging.Logger] = setup_logger()


__all__ = ["DEFAULT_LOG_FILE", "LOGGER_NAME", "logger", "setup_logger"]
