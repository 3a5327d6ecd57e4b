"""
Logging setup for the sauna service.

main.py configures the root logger once (console plus rotating sauna.log).
api.py attaches api.log to its own logger and lets records propagate to the
root console. Library modules only call logging.getLogger(__name__).
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterable, Optional

LOG_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(filename)s:%(lineno)d] - %(message)s"
)
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Per-update and per-request INFO records from the frameworks
FRAMEWORK_LOGGERS = ("aiogram.event", "aiohttp.access")


def _rotating_file_handler(
    log_dir: str, log_file: str, max_bytes: int, backup_count: int
) -> RotatingFileHandler:
    log_dir_path = Path(log_dir)
    log_dir_path.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        log_dir_path / log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )


def setup_logging(
    name: str = "",
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    log_dir: str = "logs",
    console: bool = True,
    max_bytes: int = 5 * 1024 * 1024,  # 5MB
    backup_count: int = 3,
) -> logging.Logger:
    """
    Configure a process-level logger.

    Args:
        name: Logger name ("" for the root logger)
        log_level: Level name (DEBUG, INFO, ...)
        log_file: Optional file name inside log_dir, rotated by size
        log_dir: Directory for log files, created if missing
        console: Attach a stdout handler; named loggers that propagate to
            an already configured root should pass False
        max_bytes: Rotation threshold
        backup_count: Number of rotated files to keep

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Called again for the same name (module re-import, tests)
    if logger.handlers:
        return logger

    level = getattr(logging, log_level.upper(), logging.INFO)
    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = []
    if console:
        handlers.append(logging.StreamHandler(sys.stdout))
    if log_file:
        handlers.append(
            _rotating_file_handler(log_dir, log_file, max_bytes, backup_count)
        )

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def quiet_framework_loggers(
    names: Iterable[str] = FRAMEWORK_LOGGERS, level: int = logging.WARNING
) -> None:
    """Raise the threshold of chatty framework loggers (one record per update/request)."""
    for name in names:
        logging.getLogger(name).setLevel(level)
