"""
Normalization module for deduper.

This module provides tools for turning raw strings into canonical keys.
"""

from deduper.normalization.normalizer import (
    COMPANY_SUFFIXES,
    KeyNormalizer,
    available_normalizers,
    get_normalizer,
    normalize_company_name,
    prepare_suffixes,
    trim_suffixes,
)

__all__ = [
    "COMPANY_SUFFIXES",
    "KeyNormalizer",
    "available_normalizers",
    "get_normalizer",
    "normalize_company_name",
    "prepare_suffixes",
    "trim_suffixes",
]
