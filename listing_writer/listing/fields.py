"""
Field names of a generated listing and the mainText fallback.

The generator is asked to return exactly these keys. mainText is the combined
description; when the generator omits it, it is assembled from the classic
description paragraphs.
"""

from collections.abc import Mapping
from typing import Any

TITLE_FIELD = "Title"
SUBTITLE_FIELD = "Subtitle"
MAIN_TEXT_FIELD = "mainText"

SEO_FIELDS = (
    "seo_opening_paragraph",
    "seo_description_paragraph_1",
    "seo_description_paragraph_2",
    "seo_description_paragraph_3",
    "seo_long_tail_paragraph",
)

HIGHLIGHT_FIELDS = (
    "highlight_1",
    "highlight_2",
    "highlight_3",
    "highlight_4",
)

DESCRIPTION_PARAGRAPH_FIELDS = (
    "description_paragraph_1",
    "description_paragraph_2",
    "description_paragraph_3",
)

# Key order of the JSON template sent to the generator
LISTING_FIELDS = (
    TITLE_FIELD,
    SUBTITLE_FIELD,
    *SEO_FIELDS,
    *HIGHLIGHT_FIELDS,
    *DESCRIPTION_PARAGRAPH_FIELDS,
)

PARAGRAPH_SEPARATOR = "\n\n"


def empty_listing_template() -> dict[str, str]:
    """Return the generator JSON template: every listing field set to ""."""
    return {field: "" for field in LISTING_FIELDS}


def build_main_text(generated: Mapping[str, Any] | None) -> str:
    """
    Assemble mainText from the three classic description paragraphs.

    Each paragraph is stripped; empty ones are dropped and the rest are
    joined with a blank line.

    Args:
        generated: Generated listing fields (missing keys and None are empty)

    Returns:
        Combined description, or "" if all paragraphs are empty

    Example:
        >>> build_main_text({
        ...     "description_paragraph_1": "A.",
        ...     "description_paragraph_2": "",
        ...     "description_paragraph_3": "B.",
        ... })
        'A.\\n\\nB.'
    """
    generated = generated or {}
    parts = []
    for field in DESCRIPTION_PARAGRAPH_FIELDS:
        value = generated.get(field)
        text = str(value).strip() if value else ""
        if text:
            parts.append(text)

    return PARAGRAPH_SEPARATOR.join(parts)
