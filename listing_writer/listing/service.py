"""
Listing generation service.

Runs one listing request end to end:

1. resolve the canonical brand from the caller's raw brand
2. render the user prompt (with the canonical brand)
3. ask the text generator for the listing JSON
4. parse the generated content
5. rewrite every brand mention to the canonical form (three passes)
6. assemble mainText from the description paragraphs if it is missing
7. shape the response

The service is transport-agnostic: handle_request() takes the decoded
request payload and returns the response dict; exceptions from
listing_writer.exceptions signal failures to the caller.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from listing_writer.branding import canonicalize_brand, canonicalize_document
from listing_writer.config.constants import MAX_PROMPT_LENGTH
from listing_writer.exceptions import GeneratedContentError, ListingRequestError
from listing_writer.listing.fields import MAIN_TEXT_FIELD, build_main_text
from listing_writer.listing.prompts import build_user_prompt
from listing_writer.listing.schema import ListingRequest, build_listing_response
from listing_writer.llm_runner.models import LLMClient
from listing_writer.utils.logging import log_with_context
from listing_writer.utils.time import request_id_from_timestamp

logger = logging.getLogger(__name__)


def parse_generated_content(content: str | None) -> dict[str, Any]:
    """
    Parse the generator's message content into a listing dict.

    Args:
        content: Raw message content (JSON text). None or "" yields {}.

    Returns:
        Parsed listing fields

    Raises:
        GeneratedContentError: If content is not valid JSON or not a JSON object
    """
    if not content:
        return {}

    try:
        generated = json.loads(content)
    except json.JSONDecodeError as e:
        raise GeneratedContentError(
            f"Model returned non-JSON: {e}", raw_content=content
        ) from e

    if not isinstance(generated, dict):
        raise GeneratedContentError(
            f"Model returned JSON {type(generated).__name__}, expected an object",
            raw_content=content,
        )

    return generated


def finalize_listing(
    generated: dict[str, Any], raw_brand: str | None
) -> dict[str, Any]:
    """
    Canonicalize brand mentions and fill in mainText.

    Shared by generate_listing() and the offline `canonicalize` CLI command.

    Args:
        generated: Parsed generator output (mutated in place)
        raw_brand: Brand as typed by the caller

    Returns:
        The finalized listing fields
    """
    generated = canonicalize_document(generated, raw_brand).document

    if not generated.get(MAIN_TEXT_FIELD):
        generated[MAIN_TEXT_FIELD] = build_main_text(generated)

    return generated


async def generate_listing(
    request: ListingRequest, client: LLMClient
) -> dict[str, Any]:
    """
    Generate a listing for a validated request.

    Args:
        request: Validated listing request
        client: Text generator client (OpenAIClient, MockLLMClient, ...)

    Returns:
        Listing response dict (see listing.schema.build_listing_response)

    Raises:
        ListingRequestError: If the rendered prompt exceeds MAX_PROMPT_LENGTH
        GeneratedContentError: If the generator returns non-JSON content
        LLMProviderError: If the generator call fails permanently
        httpx.HTTPError: If the generator call fails after all retries
    """
    request_id = request_id_from_timestamp()
    canonical_brand = canonicalize_brand(request.brand)

    log_with_context(
        logger,
        logging.INFO,
        "Generating listing",
        context={
            "raw_brand": request.brand,
            "canonical_brand": canonical_brand,
            "category": request.category,
        },
        request_id=request_id,
    )

    user_prompt = build_user_prompt(request, canonical_brand)
    if len(user_prompt) > MAX_PROMPT_LENGTH:
        raise ListingRequestError(
            f"Listing request too long: prompt is {len(user_prompt):,} characters "
            f"(maximum {MAX_PROMPT_LENGTH:,})"
        )

    response = await client.generate_answer(user_prompt)

    try:
        generated = parse_generated_content(response.answer_text)
    except GeneratedContentError:
        log_with_context(
            logger,
            logging.ERROR,
            "Generator returned non-JSON content",
            context={"model": response.model_name},
            request_id=request_id,
        )
        raise

    generated = finalize_listing(generated, request.brand)

    log_with_context(
        logger,
        logging.INFO,
        "Listing generated",
        context={
            "model": response.model_name,
            "tokens_used": response.tokens_used,
            "fields": len(generated),
        },
        request_id=request_id,
    )

    return build_listing_response(request, canonical_brand, generated)


def parse_listing_request(payload: Mapping[str, Any] | None) -> ListingRequest:
    """
    Validate a decoded request payload.

    Args:
        payload: Request body as a mapping; None is treated as an empty request

    Returns:
        ListingRequest

    Raises:
        ListingRequestError: If the payload is not a mapping or fails validation
    """
    if payload is None:
        payload = {}

    if not isinstance(payload, Mapping):
        raise ListingRequestError(
            f"Request payload must be a JSON object, got {type(payload).__name__}"
        )

    try:
        return ListingRequest.model_validate(dict(payload))
    except ValidationError as e:
        error_messages = []
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            error_messages.append(f"  - {loc}: {error['msg']}")
        raise ListingRequestError(
            "Invalid listing request:\n" + "\n".join(error_messages)
        ) from e


async def handle_request(
    payload: Mapping[str, Any] | None, client: LLMClient
) -> dict[str, Any]:
    """
    Validate a raw request payload and generate the listing.

    Args:
        payload: Decoded request body
        client: Text generator client

    Returns:
        Listing response dict

    Raises:
        ListingRequestError: If the payload is invalid or too long
        GeneratedContentError: If the generator returns non-JSON content
        LLMProviderError: If the generator call fails permanently
    """
    request = parse_listing_request(payload)
    return await generate_listing(request, client)
