"""
Logging setup for the trade_dash CLI and scripts.
Coloured console output plus an optional rotating log file.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

import colorama

colorama.init()


class ColoredFormatter(logging.Formatter):
    """Formatter that colours the level name on the console."""

    COLORS = {
        "DEBUG": colorama.Fore.CYAN,
        "INFO": colorama.Fore.GREEN,
        "WARNING": colorama.Fore.YELLOW,
        "ERROR": colorama.Fore.RED,
        "CRITICAL": colorama.Fore.RED + colorama.Style.BRIGHT,
    }

    def format(self, record):
        color = self.COLORS.get(record.levelname)
        if color is None:
            return super().format(record)
        # format a copy so file handlers never see the escape codes
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{colorama.Style.RESET_ALL}"
        return super().format(record)


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    max_bytes: int = 10485760,  # 10MB
    backup_count: int = 5,
) -> logging.Logger:
    """
    Configure the root logger.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL (unknown names fall back to INFO)
        log_file: path of a rotating log file; console only when None
        max_bytes: size at which the log file rotates
        backup_count: number of rotated files to keep

    Returns:
        The configured root logger.
    """
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        ColoredFormatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)

    return logger
