"""Centralized logging for youup.

The CLI configures the ``youup`` logger once at startup. Library code
(probers, resolvers, providers) asks for loggers with
``require_configured=False`` so it keeps working when youup is imported
as a library and nobody configured anything.

Usage:
    from youup.utils.logger import Logger

    # Configure once at startup
    Logger.configure(level="INFO", output="stderr")

    # Get a logger anywhere in the CLI layer
    log = Logger.get("commands.check")
    log.info("Running checks...")

    # Library modules
    log = Logger.get("core.prober", require_configured=False)
"""

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import TextIO


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
    """Raised when trying to use Logger before calling Logger.configure()."""

    def __init__(self) -> None:
        super().__init__(
            "Logger not configured. Call Logger.configure() at application startup."
        )


# Silent until the application attaches a real handler.
logging.getLogger("youup").addHandler(logging.NullHandler())


class Logger:
    """Centralized logging for youup.

    Example:
        >>> Logger.configure(level="DEBUG", output="stderr")
        >>> log = Logger.get("core.checker")
        >>> log.debug("Gateway pipeline finished")
    """

    _configured: bool = False
    _root_name: str = "youup"

    @classmethod
    def configure(
        cls,
        level: str | LogLevel = "WARNING",
        output: str | Path | TextIO | None = None,
        timestamps: bool = True,
        include_location: bool = False,
        format_string: str | None = None,
    ) -> None:
        """Configure the logger.

        Args:
            level: Log level - "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"
                or a LogLevel enum value.
            output: Where to send logs:
                - None or "stderr": sys.stderr (default, keeps stdout clean
                  for JSON output)
                - "stdout": sys.stdout
                - str/Path: File path
                - TextIO: Any file-like object
            timestamps: Include timestamps in messages (default True).
            include_location: Include [filename:lineno] (default False).
            format_string: Custom format string (overrides timestamps/include_location).
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
    def get(
        cls, name: str | None = None, *, require_configured: bool = True
    ) -> logging.Logger:
        """Get a logger instance.

        Args:
            name: Logger name (appended to "youup."). If None, returns root logger.
            require_configured: Raise when configure() hasn't been called.
                Library modules pass False.

        Returns:
            Logger instance.

        Raises:
            LoggerNotConfiguredError: If require_configured is set and
                configure() hasn't been called.
        """
        if require_configured and not cls._configured:
            raise LoggerNotConfiguredError()

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
