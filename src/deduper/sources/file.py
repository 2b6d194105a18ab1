import logging
from pathlib import Path
from typing import Iterator, Union

from deduper.sources.base import LineSource
from deduper.utils.exceptions import SourceError

logger = logging.getLogger(__name__)


class FileLineSource(LineSource):
    """Reads lines lazily from a local text file."""

    def __init__(self, path: Union[str, Path], encoding: str = "utf-8"):
        self.path = Path(path)
        self.encoding = encoding

    @property
    def name(self) -> str:
        return str(self.path)

    def __iter__(self) -> Iterator[str]:
        try:
            with open(self.path, "r", encoding=self.encoding) as f:
                logger.info(f"Reading lines from {self.path}")
                for line in f:
                    yield line.rstrip("\r\n")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceError(self.name, f"Cannot read file: {e}") from e
