"""
Exceptions raised by deduper.

Every error carries a message, a ``details`` mapping with structured
context (source URL, status code, offending line, config key) and the UTC
time it was raised, so it can be logged as a record via ``to_dict``.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class DeduperException(Exception):
    """Base class for deduper errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{name}={value}" for name, value in self.details.items())
        return f"{self.message} ({context})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": type(self).__name__,
            "message": self.message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


class SourceError(DeduperException):
    """An input file or stream could not be read.

    The message is prefixed with the source name: ``[names.txt] ...``.
    """

    def __init__(self, source: str, message: str, **details: Any) -> None:
        super().__init__(f"[{source}] {message}", details)
        self.source = source


class NetworkError(SourceError):
    """A remote source was unreachable or answered with an error status.

    ``status_code`` is None when no response was received.
    """

    def __init__(
        self,
        source: str,
        message: str = "Network error",
        status_code: Optional[int] = None,
        **details: Any,
    ) -> None:
        super().__init__(source, message, status_code=status_code, **details)
        self.status_code = status_code


class DeduplicationError(DeduperException):
    """Grouping a line failed, typically inside a custom normalizer."""

    def __init__(self, message: str = "Deduplication failed", **details: Any) -> None:
        super().__init__(message, details)


class ConfigurationError(DeduperException):
    """Settings that pass model validation but cannot be used.

    Examples are an unknown matching strategy or a run without any input.
    """

    def __init__(
        self, message: str = "Configuration error", config_key: Optional[str] = None, **details: Any
    ) -> None:
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details)
        self.config_key = config_key


class ExportError(DeduperException):
    """Writing an output file failed.

    Raised by exporter ``write`` methods; ``export`` turns it into a False
    return value.
    """

    def __init__(
        self, message: str = "Export failed", format: Optional[str] = None, **details: Any
    ) -> None:
        if format:
            details["format"] = format
        super().__init__(message, details)
        self.format = format
