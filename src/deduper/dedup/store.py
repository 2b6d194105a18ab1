"""
In-memory grouping store.

Maps each canonical key to the raw strings that resolved to it and how many
times each appeared. Keys are resolved greedily: with fuzzy matching enabled
a fresh key is redirected to the first known key the matcher accepts, and
that redirect stays stable for the rest of the session.

Query methods return generators over the live store. They are evaluated
lazily, so output reflects the store at iteration time rather than a
snapshot; importing while a query generator is suspended invalidates it
(``RuntimeError: dictionary changed size during iteration``).
"""

import logging
from typing import Dict, Iterator, Optional

from deduper.core.config import DeduperConfig
from deduper.core.models import Group
from deduper.dedup.index import LengthBucketIndex
from deduper.dedup.matchers import FuzzyMatcher, create_matcher
from deduper.normalization import KeyNormalizer

logger = logging.getLogger(__name__)


class GroupingStore:
    """Canonical key to group mapping with fuzzy key resolution."""

    def __init__(self, config: DeduperConfig):
        """Initialize the store with configuration.

        Args:
            config: Deduplication configuration

        Raises:
            ConfigurationError: If the fuzzy matching strategy is unknown
        """
        self.config = config
        self.key_normalizer = KeyNormalizer(config.normalize, config.ignored_suffixes)
        self.matcher: Optional[FuzzyMatcher] = (
            create_matcher(config.fuzzy.strategy) if config.fuzzy is not None else None
        )
        self._groups: Dict[str, Group] = {}
        self._index = LengthBucketIndex()
        self.fuzzy_redirects = 0

    @property
    def index(self) -> LengthBucketIndex:
        return self._index

    def resolve_key(self, raw: str) -> Optional[str]:
        """Resolve a raw string to the key of the group it belongs to.

        Args:
            raw: Raw input string

        Returns:
            The canonical key, possibly redirected to an existing fuzzy
            match, or None when the string normalizes to nothing.
        """
        key = self.key_normalizer(raw)
        if key is None:
            return None

        fuzzy = self.config.fuzzy
        if fuzzy is None or self.matcher is None:
            return key

        # A key that already exists keeps its own group; scanning would let a
        # shorter key created later (below min_string_length) steal it.
        if len(key) >= fuzzy.min_string_length and key not in self._index:
            for candidate in self._index.candidates_within(len(key), fuzzy.max_deviation):
                if self.matcher.matches(key, candidate, fuzzy.max_deviation):
                    logger.debug(f"Fuzzy match: {key!r} -> {candidate!r}")
                    self.fuzzy_redirects += 1
                    return candidate

        self._index.add(key)
        return key

    def record(self, key: str, raw: str) -> None:
        """Count one occurrence of ``raw`` in the group for ``key``."""
        group = self._groups.get(key)
        if group is None:
            group = self._groups[key] = Group(key=key)
        group.add(raw)

    def add(self, raw: str) -> Optional[str]:
        """Resolve and record a raw string; returns the key or None if dropped."""
        key = self.resolve_key(raw)
        if key is not None:
            self.record(key, raw)
        return key

    def get_group(self, key: str) -> Optional[Group]:
        return self._groups.get(key)

    def groups(self) -> Iterator[Group]:
        """Iterate groups in the order their keys were first created."""
        return iter(self._groups.values())

    def duplicates(
        self,
        include_representative: bool = False,
        collapse_repeats: bool = False,
        group_separator: bool = False,
    ) -> Iterator[str]:
        """Yield raw strings of groups that contain duplicates.

        A group qualifies when it holds several distinct strings or one
        string seen more than once.

        Args:
            include_representative: Also yield the first occurrence of the
                group's first string
            collapse_repeats: Yield each distinct string at most once instead
                of once per occurrence. The representative's own occurrence
                is dropped before collapsing, so a string repeated in the
                input is still reported once without it.
            group_separator: Yield an empty string after every group
        """
        for group in self._groups.values():
            if not group.is_duplicate:
                continue

            for position, (value, count) in enumerate(group.occurrences()):
                if position == 0 and not include_representative:
                    count -= 1
                if collapse_repeats:
                    count = min(count, 1)
                for _ in range(count):
                    yield value

            if group_separator:
                yield ""

    def uniques(self, restrict_to_input_unique: bool = False) -> Iterator[str]:
        """Yield the representative string of each group.

        Args:
            restrict_to_input_unique: Only groups formed by a single input
                line (one distinct string, seen once)
        """
        for group in self._groups.values():
            if restrict_to_input_unique and not group.is_input_unique:
                continue
            yield group.representative

    def everything(
        self, collapse_repeats: bool = False, group_separator: bool = False
    ) -> Iterator[str]:
        """Yield every raw string of every group."""
        for group in self._groups.values():
            for value, count in group.occurrences():
                for _ in range(1 if collapse_repeats else count):
                    yield value

            if group_separator:
                yield ""

    def clear(self) -> None:
        """Drop all groups and indexed keys."""
        self._groups.clear()
        self._index.clear()
        self.fuzzy_redirects = 0

    def __len__(self) -> int:
        return len(self._groups)

    def __contains__(self, key: object) -> bool:
        return key in self._groups
