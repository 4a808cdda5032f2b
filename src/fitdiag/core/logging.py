"""Logging configuration and utilities.

Everything logs under the ``fitdiag`` namespace. Console output goes to
stderr so that reports printed on stdout stay machine-readable.
"""

import logging
import sys
from pathlib import Path

LOGGER_NAMESPACE = "fitdiag"


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure package-wide logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to a log file, e.g. from ``LOG_FILE``;
            missing parent directories are created
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    package_logger.setLevel(log_level)
    for handler in package_logger.handlers:
        handler.close()
    package_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module under the ``fitdiag`` namespace."""
    if not name.startswith(LOGGER_NAMESPACE):
        name = f"{LOGGER_NAMESPACE}.{name}"

    return logging.getLogger(name)
