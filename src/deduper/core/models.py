"""Core data models for deduper."""

from dataclasses import dataclass, field
from typing import Dict, Iterator, Tuple

from pydantic import BaseModel, Field


@dataclass
class Group:
    """Distinct raw strings sharing one canonical key.

    Values keep insertion order; the first inserted value is the group's
    representative.

    Attributes:
        key: Canonical key of the group
        values: Mapping of distinct raw string to occurrence count
    """

    key: str
    values: Dict[str, int] = field(default_factory=dict)

    def add(self, value: str) -> None:
        self.values[value] = self.values.get(value, 0) + 1

    @property
    def representative(self) -> str:
        """First raw string inserted into the group."""
        return next(iter(self.values))

    @property
    def distinct_count(self) -> int:
        return len(self.values)

    @property
    def total_count(self) -> int:
        """Number of input lines that resolved to this group."""
        return sum(self.values.values())

    @property
    def is_duplicate(self) -> bool:
        """True for several distinct strings or a repeated single string."""
        return self.distinct_count > 1 or self.values[self.representative] > 1

    @property
    def is_input_unique(self) -> bool:
        """True when exactly one input line resolved to this group."""
        return self.distinct_count == 1 and self.values[self.representative] == 1

    def occurrences(self) -> Iterator[Tuple[str, int]]:
        """Yield (value, count) pairs in insertion order."""
        return iter(self.values.items())


class DedupStatistics(BaseModel):
    """Counters describing an import session.

    Attributes:
        lines_read: Lines consumed from the source, blank ones included
        lines_imported: Lines recorded into a group
        lines_dropped: Non-blank lines whose key normalized to nothing
        groups: Number of groups
        duplicate_groups: Groups with several strings or repeated strings
        unique_groups: Groups holding exactly one input line
        distinct_values: Distinct raw strings across all groups
        fuzzy_redirects: Lines whose key was redirected to an existing key
    """

    lines_read: int = 0
    lines_imported: int = 0
    lines_dropped: int = 0
    groups: int = 0
    duplicate_groups: int = 0
    unique_groups: int = 0
    distinct_values: int = 0
    fuzzy_redirects: int = 0
    settings: Dict[str, object] = Field(default_factory=dict)

    @property
    def duplicate_rate(self) -> float:
        """Share of imported lines that collapse into an existing group."""
        if self.lines_imported == 0:
            return 0.0
        return (self.lines_imported - self.groups) / self.lines_imported
