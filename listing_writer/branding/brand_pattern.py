"""
Brand pattern builder for Listing Writer.

Compiles a brand name into a boundary-safe regex that finds the brand in
generated listing text, including naive possessive and plural forms, without
matching inside longer words ("Art" must not match in "Article").

Pattern layout:
    (^|[^A-Za-z0-9])   group 1: left boundary, preserved on replace
    (<brand>)          group 2: the brand phrase, words joined by \\s+
    ('s|’s|s)?         group 3: optional possessive/plural suffix
    (?![A-Za-z0-9])    right boundary (lookahead, never consumed)

Security:
- Every brand word goes through re.escape(), so "C++ Gear" or "A.P.C."
  are matched literally

Example:
    >>> pattern = build_brand_pattern("Nike")
    >>> bool(pattern.search("new NIKE shoes"))
    True
    >>> bool(build_brand_pattern("Art").search("Article"))
    False
"""

import re

from listing_writer.branding.canonical import normalize_spaces

LEFT_BOUNDARY_GROUP = 1
BRAND_GROUP = 2
SUFFIX_GROUP = 3

# Apostrophe or right single quotation mark followed by "s", or a bare "s"
SUFFIX_PATTERN = r"(?:'s|’s|s)"

BRAND_PATTERN_FLAGS = re.IGNORECASE | re.MULTILINE


def build_brand_pattern(brand: str | None) -> re.Pattern | None:
    """
    Create a boundary-safe, case-insensitive pattern for a brand.

    Args:
        brand: Brand text to match (raw or canonical form)

    Returns:
        Compiled pattern, or None if the brand is empty/whitespace-only

    Example:
        >>> pattern = build_brand_pattern("c++   gear")
        >>> pattern.search("Try C++ Gear today").group(2)
        'C++ Gear'
    """
    cleaned = normalize_spaces(brand)
    if not cleaned:
        return None

    # SECURITY: escape each word, then allow irregular spacing between words
    phrase = r"\s+".join(re.escape(word) for word in cleaned.split(" "))

    pattern = (
        r"(^|[^A-Za-z0-9])"
        + f"({phrase})"
        + f"({SUFFIX_PATTERN})?"
        + r"(?![A-Za-z0-9])"
    )
    return re.compile(pattern, BRAND_PATTERN_FLAGS)


def replace_brand(text: str, pattern: re.Pattern, canonical_brand: str) -> str:
    """
    Replace every brand match in text with the canonical brand.

    The left boundary character is kept and a matched suffix is written back
    in lowercase, so "NIKE'S" becomes "Nike's" rather than "Nike'S".

    Args:
        text: Text to rewrite
        pattern: Pattern from build_brand_pattern()
        canonical_brand: Replacement spelling

    Returns:
        Rewritten text (unchanged if nothing matched)

    Example:
        >>> replace_brand("NIKE shoes, nike's bag", build_brand_pattern("nike"), "Nike")
        "Nike shoes, Nike's bag"
    """

    def _substitute(match: re.Match) -> str:
        left = match.group(LEFT_BOUNDARY_GROUP)
        suffix = (match.group(SUFFIX_GROUP) or "").lower()
        return f"{left}{canonical_brand}{suffix}"

    return pattern.sub(_substitute, text)
