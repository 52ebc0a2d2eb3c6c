from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional
import logging
import os
import re

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

_SIZE_UNITS = {"": 1, "b": 1, "k": 1024, "m": 1024 ** 2, "g": 1024 ** 3}


def parse_size(value: str) -> int:
    """Convert a size string such as '100m' or '512k' to bytes"""
    match = re.fullmatch(r"\s*(\d+)\s*([bkmg]?)\s*", value.lower())
    if not match:
        raise ValueError(f"Invalid size: {value}")
    return int(match.group(1)) * _SIZE_UNITS[match.group(2)]


def setup_logging(
    level: Optional[str] = None,
    log_dir: Optional[str] = None,
    max_size: Optional[str] = None,
    max_backups: Optional[int] = None,
) -> logging.Logger:
    """
    Configure the ``scrapeless`` logger with a console handler and, when the
    log directory is writable, a size-rotated file handler.

    Args:
        level: Log level name (env SCRAPELESS_LOG_LEVEL, default INFO)
        log_dir: Directory for scrapeless.log (env SCRAPELESS_LOG_ROOT_DIR, default ./logs)
        max_size: Rotation size such as '100m' (env SCRAPELESS_LOG_MAX_SIZE)
        max_backups: Rotated files to keep (env SCRAPELESS_LOG_MAX_BACKUPS)

    Returns:
        The configured package logger
    """
    level = (level or os.getenv("SCRAPELESS_LOG_LEVEL", "INFO")).upper()
    log_dir = log_dir or os.getenv("SCRAPELESS_LOG_ROOT_DIR", "./logs")
    max_size = max_size or os.getenv("SCRAPELESS_LOG_MAX_SIZE", "100m")
    if max_backups is None:
        max_backups = int(os.getenv("SCRAPELESS_LOG_MAX_BACKUPS", "5"))

    package_logger = logging.getLogger("scrapeless")
    package_logger.setLevel(level)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    console = logging.StreamHandler()
    console.setFormatter(formatter)
    package_logger.addHandler(console)

    try:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            path / "scrapeless.log",
            maxBytes=parse_size(max_size),
            backupCount=max_backups,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)
    except OSError as e:
        package_logger.warning(f"Cannot write to log directory {log_dir}, file logging disabled: {e}")

    return package_logger
