"""
Utility modules for deduper.

This package contains utility functions and classes for:
- Exception handling
- Retry logic with backoff
- Logging configuration
"""

from .exceptions import (
    ConfigurationError,
    DeduperException,
    DeduplicationError,
    ExportError,
    NetworkError,
    SourceError,
)
from .logging import (
    ColoredFormatter,
    PerformanceLogger,
    configure_library_logging,
    resolve_level,
    setup_logging,
)
from .retry import backoff_delays, is_transient, retry_with_backoff

__all__ = [
    # Exceptions
    "DeduperException",
    "SourceError",
    "NetworkError",
    "DeduplicationError",
    "ConfigurationError",
    "ExportError",
    # Retry utilities
    "retry_with_backoff",
    "backoff_delays",
    "is_transient",
    # Logging
    "setup_logging",
    "resolve_level",
    "configure_library_logging",
    "PerformanceLogger",
    "ColoredFormatter",
]
