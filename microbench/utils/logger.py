"""Centralized logging for microbench.

Library modules log through ``Logger.child()``, which never raises and stays
silent until the application opts in. Applications (and the CLI) call
``Logger.configure()`` once at startup; after that ``Logger.get()`` hands out
loggers under the ``microbench`` namespace.

Usage:
    from microbench.utils.logger import Logger

    # Configure once at startup
    Logger.configure(level="DEBUG", timestamps=False)

    # Get a logger anywhere in the codebase
    log = Logger.get("executor")
    log.info("Running benchmarks...")

    # Inside library code
    log = Logger.child("runner")
"""

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import TextIO

ROOT_LOGGER_NAME = "microbench"

# Silent by default: benchmark output goes through the output sink, not logs.
logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


class LogLevel(Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_logging_level(self) -> int:
        """Convert to Python logging level."""
        level: int = getattr(logging, self.value)
        return level


class LoggerNotConfiguredError(Exception):
    """Raised when Logger.get() is used before Logger.configure()."""

    def __init__(self) -> None:
        super().__init__(
            "Logger not configured. Call Logger.configure() at application startup."
        )


class Logger:
    """Facade over the ``microbench`` logger hierarchy.

    Example:
        >>> Logger.configure(level="INFO", output="stderr")
        >>> Logger.get("cli").info("loaded 3 benchmarks")
    """

    _configured: bool = False
    _root_name: str = ROOT_LOGGER_NAME

    @classmethod
    def configure(
        cls,
        level: str | LogLevel = "WARNING",
        output: str | Path | TextIO | None = None,
        timestamps: bool = True,
        include_location: bool = False,
        format_string: str | None = None,
    ) -> None:
        """Configure the logger. Replaces any previous configuration.

        Args:
            level: "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL" or a LogLevel.
            output: Where to send logs:
                - None or "stderr": sys.stderr (default, keeps stdout for reports)
                - "stdout": sys.stdout
                - str/Path: File path
                - TextIO: Any file-like object
            timestamps: Include timestamps in messages.
            include_location: Include [filename:lineno].
            format_string: Custom format string (overrides the two flags above).

        Raises:
            ValueError: If ``level`` or ``output`` is not recognised.
        """
        if isinstance(level, str):
            level = LogLevel(level.upper())

        logger = logging.getLogger(cls._root_name)
        logger.setLevel(level.to_logging_level())

        for existing_handler in logger.handlers[:]:
            logger.removeHandler(existing_handler)
            existing_handler.close()

        new_handler: logging.Handler
        if output is None or output == "stderr":
            new_handler = logging.StreamHandler(sys.stderr)
        elif output == "stdout":
            new_handler = logging.StreamHandler(sys.stdout)
        elif isinstance(output, str | Path):
            new_handler = logging.FileHandler(str(output))
        elif hasattr(output, "write"):
            new_handler = logging.StreamHandler(output)
        else:
            raise ValueError(f"Invalid output: {type(output)}")

        new_handler.setLevel(level.to_logging_level())

        if format_string is None:
            parts = []
            if timestamps:
                parts.append("%(asctime)s")
            parts.append("%(levelname)s")
            parts.append("[%(name)s]")
            if include_location:
                parts.append("[%(filename)s:%(lineno)d]")
            parts.append("%(message)s")
            format_string = " ".join(parts)

        new_handler.setFormatter(logging.Formatter(format_string))
        logger.addHandler(new_handler)
        logger.propagate = False

        cls._configured = True

    @classmethod
    def reset(cls) -> None:
        """Drop the configured handler and go back to silent mode."""
        logger = logging.getLogger(cls._root_name)
        for existing_handler in logger.handlers[:]:
            logger.removeHandler(existing_handler)
            existing_handler.close()
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.NOTSET)
        logger.propagate = True
        cls._configured = False

    @classmethod
    def get(cls, name: str | None = None) -> logging.Logger:
        """Get a logger, requiring prior configuration.

        Args:
            name: Logger name (appended to "microbench."). If None, returns
                the package root logger.

        Raises:
            LoggerNotConfiguredError: If configure() hasn't been called.
        """
        if not cls._configured:
            raise LoggerNotConfiguredError()
        return cls.child(name)

    @classmethod
    def child(cls, name: str | None = None) -> logging.Logger:
        """Get a logger for library code. Never raises."""
        if name:
            return logging.getLogger(f"{cls._root_name}.{name}")
        return logging.getLogger(cls._root_name)

    @classmethod
    def set_level(cls, level: str | LogLevel) -> None:
        """Change log level without reconfiguring.

        Raises:
            LoggerNotConfiguredError: If configure() hasn't been called.
        """
        if not cls._configured:
            raise LoggerNotConfiguredError()

        if isinstance(level, str):
            level = LogLevel(level.upper())

        logger = logging.getLogger(cls._root_name)
        logger.setLevel(level.to_logging_level())
        for handler in logger.handlers:
            handler.setLevel(level.to_logging_level())

    @classmethod
    def is_configured(cls) -> bool:
        """Check if logger has been configured."""
        return cls._configured
