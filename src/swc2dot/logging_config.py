# src/swc2dot/logging_config.py
"""
Logging configuration for the 'swc2dot' namespace.
"""
from __future__ import annotations

# General imports (stdlib)
import logging
import sys
import time
from contextlib import contextmanager
from typing import Iterator, Optional

LOGGER_NAME = "swc2dot"


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO).
        log_file: Optional path to also write log records to.

    Returns:
        logging.Logger: The configured 'swc2dot' logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Drop handlers from a previous call so records are not duplicated
    if logger.hasHandlers():
        logger.handlers.clear()

    # Format: Time - Module - Level - Message
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    # Progress on stdout, warnings and errors on stderr
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.addFilter(lambda record: record.levelno < logging.WARNING)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    error_handler = logging.StreamHandler(sys.stderr)
    error_handler.setLevel(max(level, logging.WARNING))
    error_handler.setFormatter(formatter)
    logger.addHandler(error_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


@contextmanager
def timed(label: str, logger: Optional[logging.Logger] = None) -> Iterator[None]:
    """
    Log how long the enclosed block took once it exits.

    A block that raises is logged at ERROR as failed; the exception propagates.

    Args:
        label (str): Label used in the log line.
        logger (Optional[logging.Logger]): Target logger; the package logger by default.
    """
    log = logger or logging.getLogger(LOGGER_NAME)
    t0 = time.time()
    try:
        yield
    except Exception:
        dt_ms = (time.time() - t0) * 1000.0
        log.error(f"[failed] {label} ({dt_ms:,.0f} ms)")
        raise
    dt_ms = (time.time() - t0) * 1000.0
    log.info(f"[ok] {label} ({dt_ms:,.0f} ms)")
