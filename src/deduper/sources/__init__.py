"""
Line sources for deduper.

Sources yield raw input lines lazily so imports can stream large files or
remote lists without loading them whole.
"""

from deduper.core.config import SourceConfig
from deduper.sources.base import LineSource
from deduper.sources.file import FileLineSource
from deduper.sources.http import HttpLineSource
from deduper.utils.exceptions import ConfigurationError

__all__ = [
    "LineSource",
    "FileLineSource",
    "HttpLineSource",
    "get_source",
]


def get_source(config: SourceConfig) -> LineSource:
    """Create the line source described by a source configuration.

    Raises:
        ConfigurationError: If neither a path nor a URL is configured
    """
    if config.url:
        return HttpLineSource(config.url, timeout=config.timeout, encoding=config.encoding)
    if config.path is not None:
        return FileLineSource(config.path, encoding=config.encoding)
    raise ConfigurationError("No input configured: set source.path or source.url", config_key="source")
