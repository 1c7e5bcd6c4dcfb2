"""
Logging Configuration
Sets up the package logger used by the parser, layout and GUI modules.
"""
import logging
import sys
from typing import Optional, Union

LOGGER_NAME = "sankeyplot"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def resolve_level(level: Union[int, str]) -> int:
    """Accept either a logging constant or its name ("debug", "INFO", ...)."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown logging level: {level!r}")
    return resolved


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the logger for the 'sankeyplot' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG or "debug")
        log_file: Optional path to save logs to a file.

    Returns:
        The configured package logger.
    """
    level = resolve_level(level)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Re-running setup (e.g. from tests) must not stack handlers
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')

    # 1. Console Handler (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # 2. File Handler (Optional)
    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug(f"Logging initialized at level {logging.getLevelName(level)}.")
    return logger
