"""
Logging configuration for deduper.

Handlers are attached to the ``deduper`` package logger rather than the
root logger, so embedding applications keep control of their own logging.
Console output always goes to stderr; stdout is reserved for exported lines.
"""

import logging
import os
import sys
import time
from pathlib import Path
from typing import Any, Optional

PACKAGE_LOGGER = "deduper"
LOG_LEVEL_ENV = "DEDUPER_LOG_LEVEL"

CONSOLE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s [%(filename)s:%(lineno)d] %(message)s"

# Third-party loggers pulled in by the HTTP line source
HTTP_LOGGERS = ("urllib3", "requests", "charset_normalizer")


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name for terminal output."""

    LEVEL_COLORS = {
        logging.DEBUG: "36",
        logging.INFO: "32",
        logging.WARNING: "33",
        logging.ERROR: "31",
        logging.CRITICAL: "1;31",
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None:
            return super().format(record)

        original = record.levelname
        record.levelname = f"\033[{color}m{original}\033[0m"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def resolve_level(level: Optional[str] = None) -> int:
    """Turn a level name into a logging level.

    Falls back to ``$DEDUPER_LOG_LEVEL`` and then INFO; unknown names map
    to INFO.
    """
    name = level or os.environ.get(LOG_LEVEL_ENV) or "INFO"
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
    colored: bool = True,
) -> logging.Logger:
    """Attach console (and optionally file) handlers to the package logger.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        level: Level name; defaults to ``$DEDUPER_LOG_LEVEL`` or INFO
        log_file: Also append records to this file
        format_string: Console format (defaults to CONSOLE_FORMAT)
        colored: Color level names when stderr is a terminal

    Returns:
        The ``deduper`` logger

    Example:
        >>> logger = setup_logging(level="DEBUG", log_file=Path("dedup.log"))
    """
    numeric_level = resolve_level(level)
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(numeric_level)
    package_logger.propagate = False

    console_format = format_string or CONSOLE_FORMAT
    console_handler = logging.StreamHandler(sys.stderr)
    if colored and sys.stderr.isatty():
        console_handler.setFormatter(ColoredFormatter(console_format))
    else:
        console_handler.setFormatter(logging.Formatter(console_format))
    package_logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        package_logger.addHandler(file_handler)

    return package_logger


def configure_library_logging(quiet: bool = False) -> None:
    """Raise HTTP library loggers to WARNING when ``quiet``, else INFO."""
    library_level = logging.WARNING if quiet else logging.INFO
    for logger_name in HTTP_LOGGERS:
        logging.getLogger(logger_name).setLevel(library_level)


class PerformanceLogger:
    """Context manager timing an operation and reporting its throughput.

    Set ``count`` inside the block to have the rate included in the
    completion message.

    Example:
        >>> with PerformanceLogger("Import", unit="lines") as perf:
        ...     perf.count = deduper.import_strings(lines)
        # Output: "Import completed: 120,000 lines in 2.34s (51,282 lines/s)"
    """

    def __init__(
        self,
        operation: str,
        logger: Optional[logging.Logger] = None,
        level: int = logging.INFO,
        unit: str = "items",
    ):
        self.operation = operation
        self.logger = logger or logging.getLogger(PACKAGE_LOGGER)
        self.level = level
        self.unit = unit
        self.count: Optional[int] = None
        self.elapsed = 0.0
        self._start: Optional[float] = None

    @property
    def rate(self) -> Optional[float]:
        if self.count is None or self.elapsed <= 0:
            return None
        return self.count / self.elapsed

    def __enter__(self) -> "PerformanceLogger":
        self._start = time.perf_counter()
        self.logger.debug(f"{self.operation} started")
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self._start is None:
            return
        self.elapsed = time.perf_counter() - self._start

        if exc_type is not None:
            self.logger.error(f"{self.operation} failed after {self.elapsed:.2f}s: {exc_val}")
            return

        message = f"{self.operation} completed in {self.elapsed:.2f}s"
        if self.count is not None:
            message = f"{self.operation} completed: {self.count:,} {self.unit} in {self.elapsed:.2f}s"
            if self.rate is not None:
                message += f" ({self.rate:,.0f} {self.unit}/s)"
        self.logger.log(self.level, message)
