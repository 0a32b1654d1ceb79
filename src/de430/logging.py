"""
Logging configuration for the de430 package.

Every module obtains its logger through get_logger() so that parser warnings,
codec summaries and CLI diagnostics share one format and one level switch.
"""

import logging
import os
import sys

# Debug and info messages are suppressed unless asked for
DEFAULT_LOG_LEVEL = logging.WARNING

ROOT_LOGGER_NAME = "de430"

FORMATTER = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
)

_LEVELS_BY_NAME = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger for the given name.

    Args:
        name: Name for the logger, typically __name__ of the calling module

    Returns:
        A configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        log_level = (
            root_logger.level if root_logger.level != logging.NOTSET else _get_log_level()
        )
        logger.setLevel(log_level)

        # stdout may carry command output, diagnostics go to stderr
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(FORMATTER)
        logger.addHandler(handler)
        logger.propagate = False

    return logger


def _get_log_level() -> int:
    """
    Get the logging level from the DE430_LOG_LEVEL environment variable.

    Returns:
        The matching logging level, or DEFAULT_LOG_LEVEL if unset or unknown
    """
    log_level_str = os.environ.get("DE430_LOG_LEVEL", "").upper()
    return _LEVELS_BY_NAME.get(log_level_str, DEFAULT_LOG_LEVEL)


def set_log_level(level: int) -> None:
    """
    Set the logging level for all de430 loggers.

    Args:
        level: The logging level to set (e.g., logging.DEBUG)
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)

    # Loggers created by get_logger() carry their own level and handler
    for name, logger in logging.Logger.manager.loggerDict.items():
        if not isinstance(logger, logging.Logger):
            continue
        if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
            logger.setLevel(level)
            for handler in logger.handlers:
                handler.setLevel(level)
