"""
Length-bucketed key index.

Fuzzy matching only compares keys whose lengths differ by at most the
allowed deviation, so keys are filed by length and candidates are read from
the neighbouring buckets instead of scanning every known key.
"""

from typing import Dict, Iterator


class LengthBucketIndex:
    """Mapping of key length to the keys of that length, in insertion order."""

    def __init__(self) -> None:
        # dicts as insertion-ordered sets
        self._buckets: Dict[int, Dict[str, None]] = {}
        self._size = 0

    def add(self, key: str) -> None:
        bucket = self._buckets.setdefault(len(key), {})
        if key not in bucket:
            bucket[key] = None
            self._size += 1

    def candidates_within(self, length: int, max_deviation: int) -> Iterator[str]:
        """Yield keys whose length lies within ``max_deviation`` of ``length``.

        Buckets are visited from shortest to longest, keys within a bucket
        in insertion order. Lengths below 1 are never visited.

        Example:
            >>> index = LengthBucketIndex()
            >>> for key in ("abcd", "abc", "abcdef"):
            ...     index.add(key)
            >>> list(index.candidates_within(4, 1))
            ['abc', 'abcd']
        """
        for size in range(max(1, length - max_deviation), length + max_deviation + 1):
            bucket = self._buckets.get(size)
            if bucket:
                yield from bucket

    def bucket_sizes(self) -> Dict[int, int]:
        return {size: len(keys) for size, keys in sorted(self._buckets.items())}

    def clear(self) -> None:
        self._buckets.clear()
        self._size = 0

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key in self._buckets.get(len(key), ())

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[str]:
        for size in sorted(self._buckets):
            yield from self._buckets[size]
