"""Logging configuration for the babbler."""

from __future__ import annotations

import logging

from .config import BabblerConfig

CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
FILE_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | %(module)s:%(lineno)d | "
    "%(funcName)s | %(message)s"
)

# Loggers that only write to the run's log file, with their levels.
FILE_ONLY_LOGGERS = (
    ("py.warnings", logging.DEBUG),
    ("gradio", logging.WARNING),
)


def _replace_handlers(logger: logging.Logger, *handlers: logging.Handler) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.propagate = False


def setup_logging(config: BabblerConfig) -> logging.Logger:
    """Route ``babbler.*`` to the console and the log file.

    Captured warnings and Gradio's own logger go to the file only. Calling
    this again swaps the handlers instead of stacking them.
    """
    console_handler = logging.StreamHandler()
    console_handler.setLevel(config.log_level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
    file_handler.setLevel(config.file_log_level)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))

    logger = logging.getLogger("babbler")
    logger.setLevel(logging.DEBUG)
    _replace_handlers(logger, console_handler, file_handler)

    logging.captureWarnings(True)
    for name, level in FILE_ONLY_LOGGERS:
        routed = logging.getLogger(name)
        routed.setLevel(level)
        _replace_handlers(routed, file_handler)
    return logger
