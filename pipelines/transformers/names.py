"""
Name Transformers

Utilities for normalizing player and team names so that lookups typed by
hand (search box, URL) match the names recorded in match events.
"""

import unicodedata
from typing import Optional


def normalize_name(name: Optional[str]) -> str:
    """
    Normalize a name by removing diacritics, trimming and lowercasing.

    Hangul syllables are recomposed after the diacritics pass, so Korean
    names survive unchanged apart from surrounding whitespace.

    Examples:
        >>> normalize_name("  Son Heung-min ")
        'son heung-min'
        >>> normalize_name("Luka Dončić")
        'luka doncic'
        >>> normalize_name("김민재")
        '김민재'
    """
    if not name:
        return ""

    # Decompose unicode characters (e.g., é → e + combining accent)
    normalized = unicodedata.normalize("NFD", name)

    # Remove combining diacritical marks
    stripped = "".join(c for c in normalized if unicodedata.category(c) != "Mn")

    return unicodedata.normalize("NFC", stripped).casefold().strip()


def same_name(a: Optional[str], b: Optional[str]) -> bool:
    """Case-insensitive, whitespace-trimmed name equality. Empty never matches."""
    left = normalize_name(a)
    return bool(left) and left == normalize_name(b)
