"""
Tests for branding.brand_pattern module.

Tests cover:
- Empty brands produce no pattern
- Case-insensitive matching with word boundaries ("Art" vs "Article")
- Literal matching of regex metacharacters ("C++ Gear", "A.P.C.")
- Flexible whitespace between brand words
- Possessive and plural suffixes preserved on replacement
- Boundary characters around the brand are kept
"""

import pytest

from listing_writer.branding.brand_pattern import (
    BRAND_GROUP,
    SUFFIX_GROUP,
    build_brand_pattern,
    replace_brand,
)


class TestBuildBrandPattern:
    """Test suite for build_brand_pattern()."""

    @pytest.mark.parametrize("brand", [None, "", "   "])
    def test_empty_brand_returns_none(self, brand):
        """No pattern is built for missing or blank brands."""
        assert build_brand_pattern(brand) is None

    def test_matches_case_insensitively(self):
        """Any casing of the brand is found."""
        pattern = build_brand_pattern("Nike")

        for text in ("nike shoes", "NIKE shoes", "NiKe shoes"):
            assert pattern.search(text) is not None

    def test_does_not_match_inside_longer_word(self):
        """The brand must not match as part of another word."""
        pattern = build_brand_pattern("Art")

        assert pattern.search("Article about paint") is None
        assert pattern.search("Smart watch") is None

    def test_digits_count_as_word_characters(self):
        """A digit next to the brand blocks the match."""
        pattern = build_brand_pattern("Nike")

        assert pattern.search("Nike2 edition") is None
        assert pattern.search("2Nike edition") is None

    def test_metacharacters_are_literal(self):
        """Regex metacharacters in the brand are escaped."""
        pattern = build_brand_pattern("C++ Gear")

        match = pattern.search("Try c++ gear today")
        assert match is not None
        assert match.group(BRAND_GROUP) == "c++ gear"
        assert pattern.search("Try Cxx Gear today") is None

    def test_dots_are_literal(self):
        """Dots in the brand do not match arbitrary characters."""
        pattern = build_brand_pattern("A.P.C.")

        assert pattern.search("A.P.C. jeans") is not None
        assert pattern.search("AxPxCx jeans") is None

    def test_irregular_spacing_between_words(self):
        """Brand words match across any whitespace run."""
        pattern = build_brand_pattern("apple   watch")

        match = pattern.search("new Apple \n Watch band")
        assert match is not None
        assert match.group(BRAND_GROUP) == "Apple \n Watch"

    def test_captures_suffix(self):
        """Possessive and plural suffixes land in the suffix group."""
        pattern = build_brand_pattern("Nike")

        assert pattern.search("Nike's shoes").group(SUFFIX_GROUP) == "'s"
        assert pattern.search("Nike’s shoes").group(SUFFIX_GROUP) == "’s"
        assert pattern.search("Nikes shoes").group(SUFFIX_GROUP) == "s"
        assert pattern.search("Nike shoes").group(SUFFIX_GROUP) is None

    def test_matches_at_line_start(self):
        """Each line start is a valid left boundary."""
        pattern = build_brand_pattern("Nike")

        assert len(pattern.findall("intro\nnike shoes\nNIKE bag")) == 2


class TestReplaceBrand:
    """Test suite for replace_brand()."""

    def test_replaces_every_casing(self):
        """All mentions converge to the canonical spelling."""
        pattern = build_brand_pattern("nike")

        result = replace_brand("NIKE shoes and nike socks", pattern, "Nike")

        assert result == "Nike shoes and Nike socks"

    def test_possessive_is_preserved(self):
        """The suffix survives, only the brand changes."""
        pattern = build_brand_pattern("Nike")

        assert replace_brand("nike's shoes", pattern, "Nike") == "Nike's shoes"
        assert replace_brand("NIKE’s shoes", pattern, "Nike") == "Nike’s shoes"

    def test_plural_is_preserved(self):
        """A bare "s" suffix is kept."""
        pattern = build_brand_pattern("Nike")

        assert replace_brand("two NIKEs", pattern, "Nike") == "two Nikes"

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("NIKE'S shoes", "Nike's shoes"),
            ("NIKE’S shoes", "Nike’s shoes"),
            ("two NIKES", "two Nikes"),
        ],
    )
    def test_uppercase_suffix_is_lowercased(self, text, expected):
        """Suffix casing never leaks into the canonical spelling."""
        pattern = build_brand_pattern("nike")

        assert replace_brand(text, pattern, "Nike") == expected

    def test_canonical_possessive_unaffected(self):
        """Text already in canonical form is left as-is."""
        pattern = build_brand_pattern("Nike")

        assert replace_brand("Nike's shoes", pattern, "Nike") == "Nike's shoes"

    def test_boundary_characters_kept(self):
        """Punctuation around the brand is not consumed."""
        pattern = build_brand_pattern("nike")

        result = replace_brand("(nike), [NIKE]! -nike-", pattern, "Nike")

        assert result == "(Nike), [Nike]! -Nike-"

    def test_adjacent_mentions_all_replaced(self):
        """Mentions separated by a single space are each rewritten."""
        pattern = build_brand_pattern("nike")

        assert replace_brand("nike nike nike", pattern, "Nike") == "Nike Nike Nike"

    def test_no_match_returns_same_text(self):
        """Text without the brand is returned unchanged."""
        pattern = build_brand_pattern("Art")

        assert replace_brand("Article on Smartphones", pattern, "Art") == (
            "Article on Smartphones"
        )

    def test_multiword_whitespace_collapsed_to_canonical(self):
        """Irregular spacing inside a match becomes the canonical spacing."""
        pattern = build_brand_pattern("apple watch")

        result = replace_brand("APPLE\t\tWATCH strap", pattern, "Apple Watch")

        assert result == "Apple Watch strap"

    def test_metacharacter_brand_replaced(self):
        """Escaped brands are replaced literally."""
        pattern = build_brand_pattern("c++ gear")

        result = replace_brand("c++ gear backpack", pattern, "C++ Gear")

        assert result == "C++ Gear backpack"
