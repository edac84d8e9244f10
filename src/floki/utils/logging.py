"""Logging utilities."""

import logging
import sys


VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def validate_log_level(level: str) -> str:
    """Normalize a log level name, rejecting unknown ones."""
    if level.upper() not in VALID_LEVELS:
        raise ValueError(f"Invalid log level: {level}")
    return level.upper()


def setup_logging(level: str = "WARNING"):
    """Setup logging configuration."""
    log_level = getattr(logging, validate_log_level(level))

    # Configure root logger
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        handlers=[
            logging.StreamHandler(sys.stderr)
        ],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
