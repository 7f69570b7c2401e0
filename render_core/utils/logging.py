"""
Logging utility module for the render pipeline.
"""

import logging
import os
import sys
import time
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

# Root logger name of the package; module loggers hang below it
LOGGER_NAME = "render_core"

# Define logging levels dictionary for easy reference
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL
}


class LogFormatter(logging.Formatter):
    """Log formatter that colours the level name on terminals."""

    RESET = '\033[0m'

    # Level-specific colors
    LEVEL_COLORS = {
        'DEBUG': '\033[34m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[31m\033[1m'
    }

    def __init__(self, colored: bool = True, *args, **kwargs):
        """
        Initialize formatter.

        Args:
            colored: Whether to use colored output
            *args: Additional formatter args
            **kwargs: Additional formatter kwargs
        """
        self.colored = colored and sys.platform != 'win32'
        super().__init__(*args, **kwargs)

    def format(self, record: logging.LogRecord) -> str:
        formatted_msg = super().format(record)

        if self.colored:
            level_name = record.levelname
            if level_name in self.LEVEL_COLORS:
                colored_level = f"{self.LEVEL_COLORS[level_name]}{level_name}{self.RESET}"
                formatted_msg = formatted_msg.replace(f"[{level_name}]", f"[{colored_level}]", 1)

        return formatted_msg


def setup_logging(log_file: Optional[str] = None,
                  console_level: str = "WARNING",
                  file_level: str = "DEBUG",
                  component: Optional[str] = None) -> logging.Logger:
    """
    Set up logging for the package.

    Calling this more than once for the same logger is a no-op, so the
    package can bootstrap console logging on import and applications can
    still call it first with their own settings.

    Args:
        log_file: Path to log file (None for no file logging)
        console_level: Console logging level name
        file_level: File logging level name
        component: Optional component name for a child logger

    Returns:
        logging.Logger: Configured logger
    """
    logger_name = LOGGER_NAME
    if component:
        logger_name = f"{logger_name}.{component}"

    logger = logging.getLogger(logger_name)

    # If handlers already exist, assume logger is already configured
    if logger.handlers:
        return logger

    console = LOG_LEVELS.get(console_level.upper(), logging.WARNING)
    to_file = LOG_LEVELS.get(file_level.upper(), logging.DEBUG)
    logger.setLevel(min(console, to_file) if log_file else console)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console)
    console_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    console_handler.setFormatter(LogFormatter(colored=sys.stderr.isatty(),
                                              fmt=console_format, datefmt='%H:%M:%S'))
    logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(to_file)
        file_format = ("%(asctime)s [%(levelname)s] %(name)s "
                       "(%(filename)s:%(lineno)d): %(message)s")
        file_handler.setFormatter(logging.Formatter(file_format, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)

    return logger


def configure_from(config) -> logging.Logger:
    """
    Apply the ``logging.*`` settings of a Config object.

    Existing handlers on the package logger are replaced.

    Args:
        config: A Config instance

    Returns:
        logging.Logger: The package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    return setup_logging(log_file=config.get('logging.file'),
                         console_level=config.get('logging.console_level', "WARNING"),
                         file_level=config.get('logging.file_level', "DEBUG"))


class PerformanceLogger:
    """Utility class for logging stage timings."""

    def __init__(self, logger: logging.Logger, component: str):
        """
        Initialize performance logger.

        Args:
            logger: Logger to use
            component: Component name
        """
        self.logger = logger
        self.component = component
        self.start_times: Dict[str, float] = {}
        self.durations: Dict[str, float] = {}

    def start(self, name: str) -> None:
        self.start_times[name] = time.perf_counter()

    def end(self, name: str, level: str = "DEBUG") -> float:
        """
        End timing an operation and log the duration.

        Args:
            name: Operation name
            level: Log level

        Returns:
            float: Duration in seconds
        """
        if name not in self.start_times:
            self.logger.warning(f"No start time found for {name}")
            return 0.0

        duration = time.perf_counter() - self.start_times.pop(name)
        self.log(name, duration, level)
        return duration

    def log(self, name: str, duration: float, level: str = "DEBUG") -> None:
        self.durations[name] = duration
        log_func = getattr(self.logger, level.lower())
        log_func(f"{self.component} {name} took {duration:.4f} seconds")

    @contextmanager
    def measure(self, name: str, level: str = "DEBUG") -> Iterator[None]:
        """Time the enclosed block as operation ``name``."""
        self.start(name)
        try:
            yield
        finally:
            self.end(name, level)

    def clear(self) -> None:
        """Clear all start times and recorded durations."""
        self.start_times.clear()
        self.durations.clear()
