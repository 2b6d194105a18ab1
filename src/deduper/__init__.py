"""
deduper - deduplicate large lists of free-text strings.

Raw strings are normalized into canonical keys, grouped by key (or by a
nearby key when fuzzy matching is enabled) and exposed as duplicate and
unique views.
"""

__version__ = "0.1.0"
