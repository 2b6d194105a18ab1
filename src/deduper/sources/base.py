import asyncio
from abc import ABC, abstractmethod
from itertools import islice
from typing import AsyncIterator, Iterator


class LineSource(ABC):
    """Abstract base class for sources of newline-delimited text."""

    # Lines fetched per worker thread hop during async iteration
    async_batch_size = 256

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @abstractmethod
    def __iter__(self) -> Iterator[str]:
        """
        Yield lines in order, without line terminators.

        Blank lines are passed through; the deduplicator skips them.

        Raises:
            SourceError: If the source cannot be read.
        """
        pass

    def __aiter__(self) -> AsyncIterator[str]:
        """
        Iterate lines without blocking the event loop.

        The blocking ``__iter__`` is advanced in a worker thread, up to
        ``async_batch_size`` lines per hop, so file and network reads never
        run on the loop itself.
        """
        return self._aiter_lines()

    async def _aiter_lines(self) -> AsyncIterator[str]:
        lines = iter(self)
        while True:
            batch = await asyncio.to_thread(list, islice(lines, self.async_batch_size))
            if not batch:
                return
            for line in batch:
                yield line

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"
