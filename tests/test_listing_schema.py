"""
Tests for listing.schema module.

Tests cover:
- ListingRequest validation (aliases, optional fields, number coercion)
- aiInput and facts blocks
- Response shaping (generated fields spread last)
"""

import pytest
from pydantic import ValidationError

from listing_writer.listing.schema import (
    AI_INPUT_FIELDS,
    FACT_FIELDS,
    ListingRequest,
    build_listing_response,
)


class TestListingRequest:
    """Tests for the ListingRequest model."""

    def test_all_fields_optional(self):
        """An empty payload is valid."""
        request = ListingRequest.model_validate({})

        assert request.brand is None
        assert request.main_text is None
        assert request.tpl is None

    def test_main_text_alias(self):
        """mainText in the payload populates main_text."""
        request = ListingRequest.model_validate({"mainText": "Worn twice"})

        assert request.main_text == "Worn twice"

    def test_populate_by_field_name(self):
        """The Python field name is accepted too."""
        request = ListingRequest(main_text="Worn twice", brand="nike")

        assert request.main_text == "Worn twice"
        assert request.brand == "nike"

    def test_unknown_keys_ignored(self):
        """Extra payload keys are dropped silently."""
        request = ListingRequest.model_validate({"brand": "nike", "sku": "X-1"})

        assert not hasattr(request, "sku")

    @pytest.mark.parametrize(("value", "expected"), [(1200, "1200"), (3.5, "3.5")])
    def test_numbers_coerced_to_text(self, value, expected):
        """Numeric text fields become strings."""
        request = ListingRequest.model_validate({"model": value})

        assert request.model == expected

    @pytest.mark.parametrize(("value", "expected"), [(True, "true"), (False, "false")])
    def test_booleans_coerced_to_json_text(self, value, expected):
        """Booleans render the way they are written in JSON."""
        request = ListingRequest.model_validate({"features": value})

        assert request.features == expected

    @pytest.mark.parametrize("value", [["a"], {"a": 1}])
    def test_non_text_values_rejected(self, value):
        """Nested structures are not text."""
        with pytest.raises(ValidationError, match="expected text"):
            ListingRequest.model_validate({"brand": value})

    def test_tpl_and_facts_pass_through(self):
        """tpl and shipping facts accept any JSON value."""
        request = ListingRequest.model_validate(
            {
                "tpl": {"id": 7},
                "handling_time": 1,
                "ships_from": "Austin, TX",
                "estimated_delivery": ["3", "5"],
            }
        )

        assert request.tpl == {"id": 7}
        assert request.facts() == {
            "handling_time": 1,
            "ships_from": "Austin, TX",
            "estimated_delivery": ["3", "5"],
        }

    def test_ai_input_uses_canonical_brand(self):
        """aiInput carries the canonical brand, not the raw one."""
        request = ListingRequest.model_validate(
            {"brand": "nike", "category": "Shoes", "mainText": "Worn twice"}
        )

        ai_input = request.ai_input("Nike")

        assert tuple(ai_input) == AI_INPUT_FIELDS
        assert ai_input["brand"] == "Nike"
        assert ai_input["category"] == "Shoes"
        assert ai_input["mainText"] == "Worn twice"
        assert ai_input["color"] is None

    def test_facts_keys(self):
        """facts() always has the three shipping keys."""
        assert tuple(ListingRequest().facts()) == FACT_FIELDS


class TestBuildListingResponse:
    """Tests for build_listing_response()."""

    def test_response_layout(self):
        """tpl, aiInput, facts and brand come first, then generated fields."""
        request = ListingRequest.model_validate({"tpl": "t1", "brand": "nike"})
        generated = {"Title": "Nike shoes", "mainText": "Body."}

        response = build_listing_response(request, "Nike", generated)

        assert list(response) == ["tpl", "aiInput", "facts", "brand", "Title", "mainText"]
        assert response["tpl"] == "t1"
        assert response["brand"] == "Nike"
        assert response["aiInput"]["brand"] == "Nike"
        assert response["Title"] == "Nike shoes"

    def test_generated_keys_win_on_collision(self):
        """Generated fields are spread last and override earlier keys."""
        request = ListingRequest.model_validate({"tpl": "t1", "brand": "nike"})

        response = build_listing_response(
            request, "Nike", {"brand": "generated", "tpl": "other"}
        )

        assert response["brand"] == "generated"
        assert response["tpl"] == "other"

    def test_empty_brand(self):
        """A request without a brand yields brand == ""."""
        response = build_listing_response(ListingRequest(), "", {})

        assert response["brand"] == ""
        assert response["aiInput"]["brand"] == ""
