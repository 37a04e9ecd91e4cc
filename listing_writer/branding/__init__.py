"""
Brand canonicalization for generated listings.

This package resolves the canonical spelling of a brand and rewrites every
mention of it inside generated listing text.

Public API:
    - normalize_spaces: Trim and collapse whitespace
    - canonicalize_brand: Resolve the canonical brand capitalization
    - build_brand_pattern: Boundary-safe, possessive-tolerant brand regex
    - replace_brand: Apply a brand pattern to one string
    - replace_brand_in_fields: Targeted pass over top-level string fields
    - force_brand_everywhere: Deep sweep over every string leaf
    - canonicalize_document: Three-pass composition used by the listing service
    - CanonicalizationResult: Result of canonicalize_document
"""

from listing_writer.branding.brand_pattern import build_brand_pattern, replace_brand
from listing_writer.branding.canonical import canonicalize_brand, normalize_spaces
from listing_writer.branding.rewriter import (
    CanonicalizationResult,
    Document,
    canonicalize_document,
    force_brand_everywhere,
    replace_brand_in_fields,
)

__all__ = [
    "CanonicalizationResult",
    "Document",
    "build_brand_pattern",
    "canonicalize_brand",
    "canonicalize_document",
    "force_brand_everywhere",
    "normalize_spaces",
    "replace_brand",
    "replace_brand_in_fields",
]
