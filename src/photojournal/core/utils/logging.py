"""
Logging configuration using loguru.

Call setup_logging() once at startup (the CLI does); library modules just
``from loguru import logger``. A relative ``logging.file`` is placed in
``paths.log_dir``, so ``file: journal.log`` ends up next to the journal data.
"""

import sys
from pathlib import Path

from loguru import logger

from ..types import PathLike

CONSOLE_FORMAT = "<level>{level.name}</level>: {message}"
DEBUG_CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> <level>{level.name: <7}</level> <cyan>{name}</cyan> {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function} | {message}"


def resolve_log_file(log_file: PathLike | None, log_dir: PathLike | None = None) -> Path | None:
    """Return where the file sink writes, or None for console-only logging."""
    if not log_file:
        return None
    path = Path(log_file).expanduser()
    if not path.is_absolute() and log_dir is not None:
        path = Path(log_dir).expanduser() / path
    return path


def setup_logging(
    level: str = "WARNING",
    log_file: PathLike | None = None,
    log_dir: PathLike | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> Path | None:
    """
    Configure loguru with console and optional file output.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR).
        log_file: Log file path. Relative paths are resolved against log_dir.
        log_dir: Directory for relative log files, usually ``paths.log_dir``.
        rotation: Log file rotation size.
        retention: How long to keep rotated logs.

    Returns:
        The log file path in use, or None if only stderr is configured.
    """
    logger.remove()
    fmt = DEBUG_CONSOLE_FORMAT if level.upper() == "DEBUG" else CONSOLE_FORMAT
    logger.add(sys.stderr, level=level, format=fmt)

    path = resolve_log_file(log_file, log_dir)
    if path is not None:
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(path, level=level, format=FILE_FORMAT, rotation=rotation, retention=retention)
    return path
