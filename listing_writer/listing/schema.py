"""
Request and response shapes for listing generation.

ListingRequest validates the caller payload (the product data typed by the
seller); build_listing_response() shapes the result returned to the caller.

Response layout:
    {
        "tpl": <passed through>,
        "aiInput": {"category", "mainText", "brand" (canonical), "condition",
                    "model", "material", "color", "features"},
        "facts": {"handling_time", "ships_from", "estimated_delivery"},
        "brand": <canonical brand>,
        ...generated listing fields (spread last, win on key collision)
    }
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

AI_INPUT_FIELDS = (
    "category",
    "mainText",
    "brand",
    "condition",
    "model",
    "material",
    "color",
    "features",
)

FACT_FIELDS = ("handling_time", "ships_from", "estimated_delivery")


class ListingRequest(BaseModel):
    """
    Product data submitted by the caller.

    Every field is optional. Text fields accept numbers and booleans too (a
    model number typed as 1200 becomes "1200", true becomes "true"); unknown
    keys are ignored. tpl and the fact fields are not used for generation and
    are passed through as-is.

    Attributes:
        tpl: Caller template identifier (opaque)
        category: Product category
        mainText: Free-form description typed by the seller
        brand: Brand as typed by the seller (raw, any casing)
        condition: Item condition (e.g., "New with box")
        model: Model name or number
        material: Main material
        color: Color
        features: Free-form feature list
        handling_time: Opaque shipping fact
        ships_from: Opaque shipping fact
        estimated_delivery: Opaque shipping fact
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    tpl: Any = None

    category: str | None = None
    main_text: str | None = Field(default=None, alias="mainText")
    brand: str | None = None
    condition: str | None = None
    model: str | None = None
    material: str | None = None
    color: str | None = None
    features: str | None = None

    handling_time: Any = None
    ships_from: Any = None
    estimated_delivery: Any = None

    @field_validator(
        "category",
        "main_text",
        "brand",
        "condition",
        "model",
        "material",
        "color",
        "features",
        mode="before",
    )
    @classmethod
    def coerce_text(cls, v: Any) -> str | None:
        """Accept scalars for text fields; reject nested structures."""
        if v is None or isinstance(v, str):
            return v
        # JSON spelling, as the value would appear in the request body
        if isinstance(v, bool):
            return "true" if v else "false"
        if not isinstance(v, int | float):
            raise ValueError(f"expected text, got {type(v).__name__}")
        return str(v)

    def ai_input(self, canonical_brand: str) -> dict[str, Any]:
        """Return the aiInput block with the brand replaced by its canonical form."""
        return {
            "category": self.category,
            "mainText": self.main_text,
            "brand": canonical_brand,
            "condition": self.condition,
            "model": self.model,
            "material": self.material,
            "color": self.color,
            "features": self.features,
        }

    def facts(self) -> dict[str, Any]:
        """Return the facts block (shipping data passed through untouched)."""
        return {
            "handling_time": self.handling_time,
            "ships_from": self.ships_from,
            "estimated_delivery": self.estimated_delivery,
        }


def build_listing_response(
    request: ListingRequest,
    canonical_brand: str,
    generated: Mapping[str, Any],
) -> dict[str, Any]:
    """
    Shape the final listing response.

    Args:
        request: Validated caller request
        canonical_brand: Resolved canonical brand ("" if none)
        generated: Canonicalized generator output (with mainText)

    Returns:
        Response dict; generated keys are spread last and win on collision
    """
    return {
        "tpl": request.tpl,
        "aiInput": request.ai_input(canonical_brand),
        "facts": request.facts(),
        "brand": canonical_brand,
        **generated,
    }
