"""Logger configuration for the CLI and the data access layer."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from lightbnb.config.settings import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(module)s.%(funcName)s:%(lineno)d] - %(message)s"


def log_file_for(logger_name: str, log_dir: Path) -> Path:
    """Return the log file used for a logger; unsafe characters become underscores."""
    stem = "".join(c if c.isalnum() or c in "_-" else "_" for c in logger_name)
    return log_dir / f"{stem}.log"


def setup_logging(
    logger_name: str,
    log_level: int = logging.INFO,
    log_dir: Optional[Path] = None,
    console_output: bool = True,
) -> logging.Logger:
    """
    Configure a logger writing to stderr and to a size-rotated file.

    Rotation size and backup count come from ``Settings``. Calling this again
    for a configured logger only updates its level.

    Args:
        logger_name: Logger name, e.g. "lightbnb_cli"
        log_level: Minimum level to record
        log_dir: Directory for the log file; defaults to Settings.LOGS_DIR
        console_output: Whether to also log to stderr

    Returns:
        The configured logger
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level)
    if logger.handlers:
        return logger

    log_dir = log_dir or Settings.LOGS_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT)

    handlers: list[logging.Handler] = [
        RotatingFileHandler(
            log_file_for(logger_name, log_dir),
            maxBytes=Settings.LOG_FILE_MAX_BYTES,
            backupCount=Settings.LOG_FILE_BACKUP_COUNT,
            encoding="utf-8",
        )
    ]
    if console_output:
        handlers.append(logging.StreamHandler(sys.stderr))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
