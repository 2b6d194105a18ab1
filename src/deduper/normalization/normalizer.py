"""
Key normalization for deduper.

Turns raw input strings into canonical keys: an optional normalize function
(lowercasing and character stripping for company names) followed by ordered
removal of ignored suffixes.
"""

import re
from typing import Callable, Dict, Iterable, Optional, Tuple

NormalizeFunc = Callable[[str], str]

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]")

# Legal-entity suffixes commonly attached to company names
COMPANY_SUFFIXES: Tuple[str, ...] = (
    "ltd",
    "llc",
    "limitedliabilitycompany",
    "limited",
    "incorporated",
    "inc",
    "corporation",
    "corp",
    "company",
    "co",
)


def normalize_company_name(raw: str) -> str:
    """Lowercase a company name and delete everything outside ``[a-z0-9]``.

    Characters are removed, not replaced by separators, so
    ``"Acme, Inc."`` becomes ``"acmeinc"``.

    Args:
        raw: Raw input string

    Returns:
        Normalized key (may be empty)
    """
    return _NON_ALPHANUMERIC.sub("", raw.lower())


_NORMALIZERS: Dict[str, Optional[NormalizeFunc]] = {
    "identity": None,
    "company": normalize_company_name,
}


def get_normalizer(name: str) -> Optional[NormalizeFunc]:
    """Look up a registered normalize function by name.

    ``"identity"`` maps to ``None``: the raw string is used as the key.

    Raises:
        KeyError: If no normalizer is registered under ``name``
    """
    return _NORMALIZERS[name.lower()]


def available_normalizers() -> Tuple[str, ...]:
    return tuple(_NORMALIZERS)


def prepare_suffixes(
    suffixes: Iterable[str], normalize: Optional[NormalizeFunc] = None
) -> Tuple[str, ...]:
    """Normalize ignored suffixes once so they compare against canonical keys.

    Suffixes that normalize to an empty string are dropped, duplicates are
    removed, and the remainder is sorted descending lexicographically. The
    sort puts a longer suffix ahead of any shorter suffix it starts with
    (``"limitedliabilitycompany"`` before ``"limited"``).

    Args:
        suffixes: Suffixes as configured
        normalize: Normalize function applied to input strings

    Returns:
        Tuple of suffixes in removal order
    """
    prepared = set()
    for suffix in suffixes:
        value = normalize(suffix) if normalize is not None else suffix
        if value and value.strip():
            prepared.add(value)
    return tuple(sorted(prepared, reverse=True))


def trim_suffixes(key: str, suffixes: Iterable[str]) -> str:
    """Remove ignored suffixes from a key in a single ordered pass.

    Each suffix is checked once against the result of the previous
    removals; earlier suffixes are never checked again.

    >>> trim_suffixes("acmecompanyinc", ("inc", "company"))
    'acme'
    >>> trim_suffixes("acmeinccompany", ("inc", "company"))
    'acmeinc'
    """
    for suffix in suffixes:
        if key.endswith(suffix):
            key = key[: len(key) - len(suffix)]
    return key


class KeyNormalizer:
    """Callable turning a raw string into its canonical key.

    Holds the normalize function and the prepared suffix list so both are
    built once per configuration.
    """

    def __init__(
        self, normalize: Optional[NormalizeFunc] = None, ignored_suffixes: Iterable[str] = ()
    ):
        self.normalize = normalize
        self.suffixes = prepare_suffixes(ignored_suffixes, normalize)

    def __call__(self, raw: str) -> Optional[str]:
        """Return the canonical key, or None when nothing meaningful remains."""
        key = self.normalize(raw) if self.normalize is not None else raw
        if self.suffixes:
            key = trim_suffixes(key, self.suffixes)
        if not key or not key.strip():
            return None
        return key

    def __repr__(self) -> str:
        name = getattr(self.normalize, "__name__", "identity") if self.normalize else "identity"
        return f"KeyNormalizer(normalize={name}, suffixes={len(self.suffixes)})"
