"""
Brand rewriting over generated listing documents.

Applies brand patterns to the JSON document returned by the text generator
so that every brand mention ends up in the canonical spelling.

Two operations:
- replace_brand_in_fields: targeted pass over the top-level string fields
- force_brand_everywhere: deep sweep over every string leaf of the tree

canonicalize_document() composes them in three passes:
1. targeted pass using the caller's raw brand as match source
2. targeted pass using the canonical brand as match source
3. deep sweep using the canonical brand over the whole tree

Only string leaves change. Numbers, booleans, None and any other leaf kinds
pass through untouched; keys are never added or removed.
"""

import logging
from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Any, TypeAlias

from listing_writer.branding.brand_pattern import build_brand_pattern, replace_brand
from listing_writer.branding.canonical import canonicalize_brand

# JSON-like tree produced by the generator
Document: TypeAlias = (
    str | int | float | bool | None | list["Document"] | dict[str, "Document"]
)

logger = logging.getLogger(__name__)


@dataclass
class CanonicalizationResult:
    """
    Outcome of canonicalize_document().

    Attributes:
        document: Rewritten document (same object as the input when the root
            is a list or dict)
        canonical_brand: Resolved canonical brand ("" if no brand was given)
        raw_brand: Brand exactly as supplied by the caller
    """

    document: Document
    canonical_brand: str
    raw_brand: str | None = None


def replace_brand_in_fields(
    fields: MutableMapping[str, Any],
    brand_source: str | None,
    canonical_brand: str,
) -> int:
    """
    Rewrite brand mentions in every non-empty top-level string field.

    Args:
        fields: Flat mapping of field name -> value, mutated in place
        brand_source: Text the pattern is built from (raw or canonical brand)
        canonical_brand: Replacement spelling

    Returns:
        Number of fields whose text changed (0 if the brand source is empty)

    Example:
        >>> listing = {"Title": "nike running shoes", "price": 10}
        >>> replace_brand_in_fields(listing, "nike", "Nike")
        1
        >>> listing["Title"]
        'Nike running shoes'
    """
    pattern = build_brand_pattern(brand_source)
    if pattern is None:
        return 0

    changed = 0
    for key, value in fields.items():
        if not isinstance(value, str) or not value:
            continue
        rewritten = replace_brand(value, pattern, canonical_brand)
        if rewritten != value:
            fields[key] = rewritten
            changed += 1

    return changed


def force_brand_everywhere(
    document: Document, canonical_brand: str | None
) -> Document:
    """
    Deep sweep: rewrite brand mentions in every string leaf of a document.

    Lists and dicts are rewritten in place (order, length and keys are
    preserved) and returned. Running the sweep again on its own output
    changes nothing.

    Args:
        document: JSON-like tree (str, list, dict or any other leaf)
        canonical_brand: Canonical spelling; also used as match source

    Returns:
        The rewritten document (a new str for string roots)

    Example:
        >>> force_brand_everywhere({"a": ["NIKE", 5, None]}, "Nike")
        {'a': ['Nike', 5, None]}
    """
    if not canonical_brand:
        return document

    pattern = build_brand_pattern(canonical_brand)
    if pattern is None:
        return document

    def _walk(node: Document) -> Document:
        if isinstance(node, str):
            return replace_brand(node, pattern, canonical_brand) if node else node
        if isinstance(node, list):
            for index, item in enumerate(node):
                node[index] = _walk(item)
            return node
        if isinstance(node, dict):
            for key, value in node.items():
                node[key] = _walk(value)
            return node
        return node

    return _walk(document)


def canonicalize_document(
    document: Document, raw_brand: str | None
) -> CanonicalizationResult:
    """
    Converge every brand mention in a generated document to the canonical form.

    Args:
        document: Generated listing (usually a dict of field -> text)
        raw_brand: Brand as supplied by the caller

    Returns:
        CanonicalizationResult with the rewritten document and canonical brand.
        If the brand is empty, the document is returned untouched.

    Example:
        >>> result = canonicalize_document(
        ...     {"Title": "NIKE shoes and Nike's bag"}, raw_brand="nike"
        ... )
        >>> result.canonical_brand
        'Nike'
        >>> result.document["Title"]
        "Nike shoes and Nike's bag"
    """
    canonical_brand = canonicalize_brand(raw_brand)
    if not canonical_brand:
        logger.debug("No brand supplied, skipping brand canonicalization")
        return CanonicalizationResult(document, "", raw_brand)

    if isinstance(document, MutableMapping):
        raw_changed = replace_brand_in_fields(document, raw_brand, canonical_brand)
        canonical_changed = replace_brand_in_fields(
            document, canonical_brand, canonical_brand
        )
        logger.debug(
            f"Targeted brand passes for '{canonical_brand}': "
            f"raw={raw_changed} fields, canonical={canonical_changed} fields"
        )

    document = force_brand_everywhere(document, canonical_brand)

    return CanonicalizationResult(document, canonical_brand, raw_brand)
