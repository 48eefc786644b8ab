"""Logger configuration for Jai Metro.

Console output always goes to stderr. When LOG_FILE is set, a rotating,
zip-compressed file sink is added with the same level.
"""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"


def _add_file_sink(path: Path, level: str, rotation: str, retention: str) -> int:
    path.parent.mkdir(parents=True, exist_ok=True)
    return logger.add(
        path,
        format=FILE_FORMAT,
        level=level,
        rotation=rotation,
        retention=retention,
        compression="zip",
        backtrace=True,
        diagnose=False,
    )


def setup_logger(
    level: str = "INFO",
    log_file: str | Path | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """Replace loguru's default handler with the app's sinks.

    Args:
        level: Minimum level for every sink
        log_file: Path of the rotating log file, None for console only
        rotation: When to rotate the file (e.g. "10 MB", "1 day")
        retention: How long rotated files are kept (e.g. "7 days")
    """
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_file:
        _add_file_sink(Path(log_file), level, rotation, retention)
        logger.debug(f"Logging to file {log_file} (rotation={rotation}, retention={retention})")

    logger.debug(f"Logger configured level={level}")
