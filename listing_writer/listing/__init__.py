"""
Listing generation: request model, prompts, mainText fallback and service.

Public API:
    - ListingRequest: Validated caller payload
    - build_listing_response: Shape the response dict
    - build_main_text: Assemble mainText from description paragraphs
    - build_system_prompt / build_user_prompt / compose_system_prompt: Prompts
    - generate_listing / handle_request: Run one request end to end
    - finalize_listing: Brand canonicalization + mainText fallback
    - parse_generated_content: Decode the generator's JSON output
"""

from listing_writer.listing.fields import LISTING_FIELDS, build_main_text
from listing_writer.listing.prompts import (
    build_system_prompt,
    build_user_prompt,
    compose_system_prompt,
)
from listing_writer.listing.schema import ListingRequest, build_listing_response
from listing_writer.listing.service import (
    finalize_listing,
    generate_listing,
    handle_request,
    parse_generated_content,
    parse_listing_request,
)

__all__ = [
    "LISTING_FIELDS",
    "ListingRequest",
    "build_listing_response",
    "build_main_text",
    "build_system_prompt",
    "build_user_prompt",
    "compose_system_prompt",
    "finalize_listing",
    "generate_listing",
    "handle_request",
    "parse_generated_content",
    "parse_listing_request",
]
