"""
Centralized logging configuration for Hello App.

INFO and DEBUG go to stdout, WARNING and ERROR to stderr.
Log level is configurable via LOG_LEVEL environment variable.
All modules log through the shared "hello" logger.
"""

import logging
import sys
from hello.config import LOG_LEVEL

LOGGER_NAME = "hello"

# Format: "2026-10-19 14:30:45 - hello - WARNING - Message"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LevelFilter(logging.Filter):
    """Pass only records whose level is within [level_min, level_max]."""

    def __init__(self, level_min: int, level_max: int):
        super().__init__()
        self.level_min = level_min
        self.level_max = level_max

    def filter(self, record: logging.LogRecord) -> bool:
        return self.level_min <= record.levelno <= self.level_max


def setup_logging(level: str = LOG_LEVEL) -> logging.Logger:
    """
    Configure the application logger with split stdout/stderr handlers.

    Safe to call more than once: existing handlers are replaced.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)

    Returns:
        The configured "hello" logger
    """
    root = logging.getLogger(LOGGER_NAME)
    root.setLevel(level)
    root.propagate = False
    root.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(logging.DEBUG)
    stdout_handler.addFilter(LevelFilter(logging.DEBUG, logging.INFO))
    stdout_handler.setFormatter(formatter)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(formatter)

    root.addHandler(stdout_handler)
    root.addHandler(stderr_handler)

    return root


# Global logger instance
logger = setup_logging()
