"""Logging setup shared by the library and the command line."""

import logging
import sys

ROOT_LOGGER_NAME = "tscriptify"


class _TscriptifyHandler(logging.StreamHandler):
    """Marker class so configure_logging can find its own handler again."""


def _build_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def configure_logging(level: str = "WARNING", stream=None) -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Safe to call multiple times; a handler installed by an earlier call is
    replaced, never duplicated.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        stream: Target stream, stderr by default

    Returns:
        The package logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    for existing in list(logger.handlers):
        if isinstance(existing, _TscriptifyHandler):
            logger.removeHandler(existing)

    handler = _TscriptifyHandler(stream or sys.stderr)
    handler.setFormatter(_build_formatter())
    logger.addHandler(handler)

    handler.setLevel(numeric_level)
    logger.setLevel(numeric_level)
    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Get a module logger below the package namespace."""
    return logging.getLogger(name)
