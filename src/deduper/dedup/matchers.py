"""
Fuzzy matching strategies for deduper.

Each matcher answers one question: are two keys close enough that the
second should be folded into the group of the first.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List

from rapidfuzz.distance import Levenshtein

from deduper.core.config import FuzzyMatchingStrategy
from deduper.utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Bit-parallel search keeps the pattern state in one machine word
BITAP_MAX_PATTERN_LENGTH = 31


def bitap_search(text: str, pattern: str, k: int) -> int:
    """Find ``pattern`` in ``text`` allowing up to ``k`` mismatched characters.

    Shift-or bitap: one bit row per allowed mismatch level, a cleared bit at
    position ``m`` of row ``k`` marks a match ending at the current text
    position.

    Args:
        text: Text to search in
        pattern: Pattern to search for
        k: Maximum number of mismatches

    Returns:
        Start index of the first approximate occurrence, ``0`` for an empty
        pattern, or ``-1`` when there is none or the pattern is longer than
        ``BITAP_MAX_PATTERN_LENGTH``.
    """
    m = len(pattern)
    if not pattern:
        return 0
    if m > BITAP_MAX_PATTERN_LENGTH:
        return -1

    rows: List[int] = [~1] * (k + 1)
    masks: Dict[str, int] = {}
    for i, char in enumerate(pattern):
        masks[char] = masks.get(char, ~0) & ~(1 << i)

    match_bit = 1 << m
    for i, char in enumerate(text):
        mask = masks.get(char, ~0)
        previous = rows[0]

        rows[0] = (rows[0] | mask) << 1

        for d in range(1, k + 1):
            current = rows[d]
            rows[d] = (previous & (current | mask)) << 1
            previous = current

        if not rows[k] & match_bit:
            return i - m + 1

    return -1


class FuzzyMatcher(ABC):
    """Base class for fuzzy matching strategies."""

    name: str = ""

    @abstractmethod
    def matches(self, a: str, b: str, limit: int) -> bool:
        """Return True when ``a`` and ``b`` are within ``limit`` of each other."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class LevenshteinMatcher(FuzzyMatcher):
    """Classic edit distance: insertions, deletions and substitutions."""

    name = FuzzyMatchingStrategy.LEVENSHTEIN.value

    def matches(self, a: str, b: str, limit: int) -> bool:
        # score_cutoff stops the computation once the limit is exceeded
        return Levenshtein.distance(a, b, score_cutoff=limit) <= limit


class BitapMatcher(FuzzyMatcher):
    """Approximate substring search of the shorter key inside the longer one.

    The shorter key must fit in ``BITAP_MAX_PATTERN_LENGTH`` characters;
    longer pairs never match.
    """

    name = FuzzyMatchingStrategy.BITAP.value

    def matches(self, a: str, b: str, limit: int) -> bool:
        # sorted() is stable, so equal lengths keep the argument order
        text, pattern = sorted((a, b), key=len, reverse=True)
        if len(pattern) > BITAP_MAX_PATTERN_LENGTH:
            return False
        return bitap_search(text, pattern, limit) > -1


_MATCHERS = {
    FuzzyMatchingStrategy.LEVENSHTEIN: LevenshteinMatcher,
    FuzzyMatchingStrategy.BITAP: BitapMatcher,
}


def create_matcher(strategy: FuzzyMatchingStrategy) -> FuzzyMatcher:
    """Create the matcher for a configured strategy.

    Raises:
        ConfigurationError: If the strategy is not recognized
    """
    try:
        matcher_class = _MATCHERS[FuzzyMatchingStrategy(strategy)]
    except (KeyError, ValueError):
        raise ConfigurationError(
            f"Unknown fuzzy matching strategy: {strategy}", config_key="fuzzy.strategy"
        )
    return matcher_class()
