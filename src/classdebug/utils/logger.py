import logging
import sys
import os
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
REPORT_FORMAT = "%(message)s"


def get_logger(
    name: str,
    level: str = "INFO",
    log_file: Optional[str] = None,
    fmt: str = DEFAULT_FORMAT,
    propagate: bool = True,
) -> logging.Logger:
    """
    Create or retrieve a logger with optional file logging.

    Args:
        name (str): Name of the logger.
        level (str, optional): Logging level ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL").
        log_file (str, optional): Path to log file. If None, logs only to console.
        fmt (str, optional): Format string shared by the console and file handlers.
        propagate (bool, optional): Whether records also reach ancestor loggers.

    Returns:
        logging.Logger: Configured logger instance.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:  # Avoid adding duplicate handlers
        numeric_level = getattr(logging, level.upper(), logging.INFO)
        if not isinstance(numeric_level, int):
            numeric_level = logging.INFO
        logger.setLevel(numeric_level)
        logger.propagate = propagate

        formatter = logging.Formatter(fmt)

        # Console handler
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        # Optional file handler
        if log_file:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger


def get_report_logger(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """Logger that prints bare report lines, the way the inspector output is read."""
    return get_logger(
        "classdebug.report",
        level=level,
        log_file=log_file,
        fmt=REPORT_FORMAT,
        propagate=False,
    )
