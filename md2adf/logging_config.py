"""Logging setup for applications embedding md2adf.

The library itself only attaches a NullHandler; call configure_logging()
from a script or service to see conversion warnings and debug output.
Calling it again replaces the handlers it installed before.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

LOGGER_NAME = "md2adf"

# Handler names owned by configure_logging()
CONSOLE_HANDLER_NAME = "md2adf.console"
FILE_HANDLER_NAME = "md2adf.file"

_VERBOSITY_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)

CONSOLE_FORMAT = "%(asctime)s [%(levelname)8s] %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level_for(verbosity: int) -> int:
    index = min(max(verbosity, 0), len(_VERBOSITY_LEVELS) - 1)
    return _VERBOSITY_LEVELS[index]


def _remove_owned_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        if handler.get_name() in (CONSOLE_HANDLER_NAME, FILE_HANDLER_NAME):
            logger.removeHandler(handler)
            handler.close()


def _named_handler(handler: logging.Handler, name: str, level: int, fmt: str) -> logging.Handler:
    handler.set_name(name)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=DATE_FORMAT))
    return handler


def configure_logging(verbosity: int, logdir: Optional[str] = None) -> logging.Logger:
    """Configure the 'md2adf' logger for the given verbosity.

    Only the package namespace is touched; the root logger and third-party
    loggers keep their configuration.

    Args:
        verbosity: 0 (or less) = WARNING, 1 = INFO, 2 or more = DEBUG
        logdir: Optional directory for a timestamped log file

    Returns:
        The configured package logger
    """
    level = _level_for(verbosity)
    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.setLevel(level)
    _remove_owned_handlers(package_logger)

    package_logger.addHandler(_named_handler(
        logging.StreamHandler(sys.stderr), CONSOLE_HANDLER_NAME, level, CONSOLE_FORMAT,
    ))

    if logdir:
        log_dir = Path(logdir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"md2adf_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"

        package_logger.addHandler(_named_handler(
            logging.FileHandler(log_file, encoding="utf-8"), FILE_HANDLER_NAME, level, FILE_FORMAT,
        ))
        package_logger.info(f"Logging to file: {log_file}")

    return package_logger
