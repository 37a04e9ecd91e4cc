"""
Canonical brand resolution for Listing Writer.

Decides the single authoritative spelling of a brand before it is used in
prompts and in the post-generation rewrite.

Rules:
- Whitespace is always normalized (trimmed, internal runs collapsed)
- Casing typed by the caller is trusted if it contains any uppercase letter
  ("iPhone", "IKEA", "HubSpot" are returned as-is)
- All-lowercase input is title-cased word by word ("apple" -> "Apple")
- Nothing is ever lowercased

Examples:
    >>> canonicalize_brand("  apple   watch ")
    'Apple Watch'
    >>> canonicalize_brand("IKEA")
    'IKEA'
    >>> canonicalize_brand("")
    ''
"""

import re
from typing import Any

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_spaces(value: Any) -> str:
    """
    Trim a value and collapse every internal whitespace run to one space.

    Args:
        value: Any value. None becomes an empty string, everything else
            is coerced with str().

    Returns:
        Normalized string (possibly empty)

    Example:
        >>> normalize_spaces("  Nike \\t Air\\nMax  ")
        'Nike Air Max'
        >>> normalize_spaces(None)
        ''
    """
    if value is None:
        return ""
    return _WHITESPACE_RUN.sub(" ", str(value).strip())


def title_case_words(value: Any) -> str:
    """
    Uppercase the first character of each word, leaving the rest untouched.

    Unlike str.title(), characters after the first are never modified, so
    "c++ gear" becomes "C++ Gear" and "macbook" becomes "Macbook".

    Args:
        value: Text to title-case (normalized first)

    Returns:
        Title-cased text joined with single spaces
    """
    words = normalize_spaces(value).split(" ")
    return " ".join(word[0].upper() + word[1:] if word else "" for word in words)


def canonicalize_brand(raw: Any) -> str:
    """
    Resolve the canonical capitalization of a caller-supplied brand.

    Args:
        raw: Brand as typed by the caller (may be None, empty, any casing)

    Returns:
        Canonical brand, or "" if the input is empty/whitespace-only

    Example:
        >>> canonicalize_brand("nike")
        'Nike'
        >>> canonicalize_brand("iPhone")
        'iPhone'
        >>> canonicalize_brand("   ")
        ''
    """
    cleaned = normalize_spaces(raw)
    if not cleaned:
        return ""

    # Caller casing is intentional as soon as one uppercase letter appears
    if any(char.isupper() for char in cleaned):
        return cleaned

    return title_case_words(cleaned)
