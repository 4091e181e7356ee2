"""
Logging Configuration Module.

Every logger of the package lives under the ``i2e`` namespace. Console
output is colorized with colorama; a rotating log file is optional.

The extraction engine only emits DEBUG-level traces (boundary lines,
candidate rows, chosen strategy, selected total), so heuristic tracing
stays silent unless a host turns it on with enable_trace().

Usage:
    from i2e.utils.logger import setup_logger_from_config, get_logger

    setup_logger_from_config()          # once, at startup
    logger = get_logger(__name__)
    logger.info("Processing invoice...")
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

import yaml
from colorama import Fore, Style, just_fix_windows_console

just_fix_windows_console()

ROOT_LOGGER_NAME = "i2e"
TRACE_LOGGER_NAME = f"{ROOT_LOGGER_NAME}.extraction"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """Console formatter coloring each record by its level."""

    COLORS = {
        logging.DEBUG: Fore.CYAN,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.RED + Style.BRIGHT,
    }

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        color = self.COLORS.get(record.levelno)
        return f"{color}{text}{Style.RESET_ALL}" if color else text


def _console_handler(level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _file_handler(
    log_file: str,
    level: int,
    formatter: logging.Formatter,
    max_bytes: int,
    backup_count: int
) -> logging.Handler:
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=max_bytes, backupCount=backup_count, encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logger(
    level: str = "INFO",
    log_format: Optional[str] = None,
    date_format: Optional[str] = None,
    log_file: Optional[str] = None,
    max_bytes: int = 10485760,  # 10 MB
    backup_count: int = 5,
    colorize: bool = True
) -> logging.Logger:
    """
    Install handlers on the ``i2e`` logger.

    Calling it again replaces the previous handlers. The package logger
    does not propagate, so host applications keep their own root setup.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Record format, LOG_FORMAT if None.
        date_format: Timestamp format, DATE_FORMAT if None.
        log_file: Rotating log file; None disables file logging.
        max_bytes: Size at which the log file rotates.
        backup_count: Rotated files kept.
        colorize: Color console output by level.

    Returns:
        The ``i2e`` logger.

    Example:
        >>> setup_logger(level="DEBUG", log_file="logs/i2e.log")
    """
    log_format = log_format or LOG_FORMAT
    date_format = date_format or DATE_FORMAT
    numeric_level = getattr(logging, level.upper())

    plain = logging.Formatter(log_format, datefmt=date_format)
    console = ColoredFormatter(log_format, datefmt=date_format) if colorize else plain

    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.setLevel(numeric_level)
    package_logger.handlers.clear()
    package_logger.addHandler(_console_handler(numeric_level, console))

    if log_file:
        package_logger.addHandler(
            _file_handler(log_file, numeric_level, plain, max_bytes, backup_count)
        )

    package_logger.propagate = False
    package_logger.debug(f"Logging initialized at {level.upper()}")
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """
    Logger for a module, nested under the ``i2e`` namespace.

    Example:
        >>> get_logger("main").name
        'i2e.main'
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def enable_trace(enabled: bool = True) -> None:
    """
    Toggle DEBUG tracing of the extraction heuristics.

    Only the ``i2e.extraction`` subtree changes level; the rest of the
    package keeps its configured level.
    """
    trace_logger = logging.getLogger(TRACE_LOGGER_NAME)
    trace_logger.setLevel(logging.DEBUG if enabled else logging.NOTSET)
    if enabled:
        # handlers filter by level too
        for handler in logging.getLogger(ROOT_LOGGER_NAME).handlers:
            handler.setLevel(logging.DEBUG)


def setup_logger_from_config() -> logging.Logger:
    """
    Initialize logging from the ``logging`` section of the settings.

    Falls back to the defaults when the settings cannot be read, and turns
    on extraction tracing when ``extraction.trace`` is set.
    """
    from config import get_config
    from i2e.utils.exceptions import ConfigurationError

    try:
        settings = get_config("logging", {}) or {}
        file_settings = settings.get("file") or {}
        console_settings = settings.get("console") or {}
        trace = get_config("extraction.trace", False)
    except (ConfigurationError, yaml.YAMLError, AttributeError) as e:
        print(f"Warning: Could not load logging config, using defaults: {e}")
        return setup_logger()

    logger = setup_logger(
        level=settings.get("level", "INFO"),
        log_format=settings.get("format"),
        date_format=settings.get("date_format"),
        log_file=file_settings.get("path") if file_settings.get("enabled") else None,
        max_bytes=file_settings.get("max_bytes", 10485760),
        backup_count=file_settings.get("backup_count", 5),
        colorize=console_settings.get("colorize", True),
    )

    if trace:
        enable_trace(True)
    return logger
