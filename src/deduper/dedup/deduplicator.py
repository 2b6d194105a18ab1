"""
Main deduplicator class for deduper.

This module provides the StringDeduplicator, which consumes a sequence of
raw strings, groups them through the GroupingStore and exposes duplicate
and unique views of the result.
"""

import logging
from typing import AsyncIterable, Iterable, Iterator, Optional

from deduper.core.config import DeduperConfig
from deduper.core.models import DedupStatistics, Group
from deduper.dedup.store import GroupingStore
from deduper.utils.exceptions import DeduplicationError

logger = logging.getLogger(__name__)


class StringDeduplicator:
    """Main deduplicator class.

    Example:
        >>> config = DeduperConfig(normalize="company", ignored_suffixes="company")
        >>> deduper = StringDeduplicator(config)
        >>> deduper.import_strings(["Acme Inc", "ACME, Inc.", "Globex"])
        3
        >>> list(deduper.get_duplicates(include_original=True))
        ['Acme Inc', 'ACME, Inc.']
    """

    def __init__(self, config: Optional[DeduperConfig] = None):
        """Initialize deduplicator with configuration.

        Args:
            config: Deduplication configuration (defaults to raw string keys)

        Raises:
            ConfigurationError: If the fuzzy matching strategy is unknown
        """
        self.config = config or DeduperConfig()
        self._store = GroupingStore(self.config)
        self.lines_read = 0
        self.lines_dropped = 0

        logger.info(f"Initialized deduplicator {self.config.describe()}")

    @property
    def store(self) -> GroupingStore:
        return self._store

    def _consume(self, line: str) -> bool:
        self.lines_read += 1
        if not line or line.isspace():
            return False
        try:
            key = self._store.add(line)
        except Exception as e:
            raise DeduplicationError(
                f"Failed to group line {self.lines_read}: {e}", line=line
            ) from e
        if key is None:
            self.lines_dropped += 1
            return False
        return True

    def import_strings(self, lines: Iterable[str]) -> int:
        """Read raw strings in order, normalize them and store them in memory.

        Each line is resolved and recorded before the next is read, so the
        source may be an unbounded generator. Blank lines are skipped. An
        exception from the source aborts the import; lines recorded so far
        stay in memory.

        Args:
            lines: Iterable of raw strings (see ``deduper.sources``)

        Returns:
            Number of lines recorded into groups

        Raises:
            DeduplicationError: If grouping a line fails, e.g. a custom
                normalizer raises
        """
        imported = 0
        for line in lines:
            if self._consume(line):
                imported += 1

        logger.info(f"Imported {imported:,} lines into {len(self._store):,} groups")
        return imported

    async def import_strings_async(self, lines: AsyncIterable[str]) -> int:
        """Async variant of ``import_strings``.

        Suspends only while waiting for the next line; store updates are
        synchronous.
        """
        imported = 0
        async for line in lines:
            if self._consume(line):
                imported += 1

        logger.info(f"Imported {imported:,} lines into {len(self._store):,} groups")
        return imported

    def get_duplicates(
        self,
        include_original: bool = False,
        exclude_repeats: bool = False,
        add_empty_string: bool = False,
    ) -> Iterator[str]:
        """Lazily yield strings belonging to groups with duplicates.

        Args:
            include_original: Include the first instance of each group
                (technically not a duplicate)
            exclude_repeats: Yield literal repeats such as "Microsoft" and
                "Microsoft" only once
            add_empty_string: Yield an empty string after each group as a
                delimiter

        Returns:
            Generator over the live store
        """
        return self._store.duplicates(
            include_representative=include_original,
            collapse_repeats=exclude_repeats,
            group_separator=add_empty_string,
        )

    def get_uniques(self, restrict_to_unique_input: bool = False) -> Iterator[str]:
        """Lazily yield one representative string per group.

        Args:
            restrict_to_unique_input: Only strings that were already unique
                in the input, as opposed to deduplicated uniques
        """
        return self._store.uniques(restrict_to_input_unique=restrict_to_unique_input)

    def get_all(self, exclude_repeats: bool = False, add_empty_string: bool = False) -> Iterator[str]:
        """Lazily yield every imported string, grouped."""
        return self._store.everything(
            collapse_repeats=exclude_repeats, group_separator=add_empty_string
        )

    def groups(self) -> Iterator[Group]:
        return self._store.groups()

    def clear_memory(self) -> None:
        """Clear groups, indexed keys and counters to prepare for a new import."""
        self._store.clear()
        self.lines_read = 0
        self.lines_dropped = 0

    def get_statistics(self) -> DedupStatistics:
        """Get deduplication statistics for the current session.

        Example:
            >>> stats = deduper.get_statistics()
            >>> print(f"Duplicate rate: {stats.duplicate_rate:.1%}")
        """
        lines_imported = 0
        duplicate_groups = 0
        unique_groups = 0
        distinct_values = 0

        for group in self._store.groups():
            lines_imported += group.total_count
            distinct_values += group.distinct_count
            if group.is_duplicate:
                duplicate_groups += 1
            else:
                unique_groups += 1

        return DedupStatistics(
            lines_read=self.lines_read,
            lines_imported=lines_imported,
            lines_dropped=self.lines_dropped,
            groups=len(self._store),
            duplicate_groups=duplicate_groups,
            unique_groups=unique_groups,
            distinct_values=distinct_values,
            fuzzy_redirects=self._store.fuzzy_redirects,
            settings=self.config.describe(),
        )
