"""
Deduplication module for deduper.

This module groups raw strings by canonical key, optionally folding keys
that are a small edit distance apart into the first group seen.

Main classes:
    - StringDeduplicator: Import and query coordinator
    - GroupingStore: Key to group mapping with fuzzy key resolution
    - LengthBucketIndex: Length-bucketed key lookup for fuzzy matching
    - LevenshteinMatcher: Edit distance strategy
    - BitapMatcher: Bit-parallel approximate search strategy

Example:
    >>> from deduper.core.config import DeduperConfig, FuzzyMatchingConfig
    >>> from deduper.dedup import StringDeduplicator
    >>>
    >>> config = DeduperConfig(normalize="company", fuzzy=FuzzyMatchingConfig())
    >>> deduper = StringDeduplicator(config)
    >>> deduper.import_strings(lines)
    >>> duplicates = list(deduper.get_duplicates(include_original=True))
"""

from deduper.dedup.deduplicator import StringDeduplicator
from deduper.dedup.index import LengthBucketIndex
from deduper.dedup.matchers import (
    BITAP_MAX_PATTERN_LENGTH,
    BitapMatcher,
    FuzzyMatcher,
    LevenshteinMatcher,
    bitap_search,
    create_matcher,
)
from deduper.dedup.store import GroupingStore

__all__ = [
    "StringDeduplicator",
    "GroupingStore",
    "LengthBucketIndex",
    "FuzzyMatcher",
    "LevenshteinMatcher",
    "BitapMatcher",
    "BITAP_MAX_PATTERN_LENGTH",
    "bitap_search",
    "create_matcher",
]
