"""
Logging configuration for the application.

``setup_logging`` attaches a console handler to the root logger and,
when ``LOG_FILE`` is set, a size-rotated file handler.  The MongoDB
driver loggers are capped at WARNING so that connection pool chatter
does not drown the request logs at DEBUG level.  Configuration happens
once per process.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are too verbose below WARNING.
NOISY_LOGGERS = ("pymongo", "motor")


def setup_logging(level: str = "INFO", logfile: Optional[str] = None, max_bytes: int = 5 * 1024 * 1024) -> None:
    """Configure the root logger.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to INFO.
    logfile : Optional[str]
        Path of a log file.  The file is rotated when it exceeds
        ``max_bytes`` and three backups are kept.
    max_bytes : int
        Rotation threshold for ``logfile``.
    """
    root = logging.getLogger()
    if root.handlers:
        # Already configured (tests, or ``create_app`` called repeatedly).
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        file_handler = RotatingFileHandler(
            Path(logfile).resolve(),
            maxBytes=max_bytes,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
