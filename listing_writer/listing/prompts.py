"""
Prompt composition for listing generation.

The system prompt comes from a bundled JSON prompt file (see system_prompts/)
followed by the JSON output template built from LISTING_FIELDS. The user
prompt is rendered with Jinja2 from the caller's product data and always
carries the canonical brand, never the raw one.
"""

import json

from jinja2 import Environment, StrictUndefined

from listing_writer.config.constants import DEFAULT_SYSTEM_PROMPT
from listing_writer.listing.fields import empty_listing_template
from listing_writer.listing.schema import ListingRequest
from listing_writer.system_prompts import load_prompt

USER_PROMPT_TEMPLATE = """
Generate an e-commerce product listing using the data below.

Category:
{{ category }}

User description:
{{ main_text }}

Structured data (authoritative):
Brand (canonical): {{ brand }}
Condition: {{ condition }}
Model: {{ model }}
Material: {{ material }}
Color: {{ color }}
Features: {{ features }}

Data priority rules:
- Structured fields are authoritative.
- If there is any conflict, trust structured fields.
- The user description is supplementary.
"""

# Plain text prompts: no HTML autoescaping, fail loudly on a missing variable
_env = Environment(
    autoescape=False, undefined=StrictUndefined, keep_trailing_newline=True
)
_user_template = _env.from_string(USER_PROMPT_TEMPLATE)


def build_output_format_instructions() -> str:
    """Return the JSON output template appended to the system prompt."""
    template = json.dumps(empty_listing_template(), indent=2)
    return "Return the result strictly in the following JSON format:\n\n" + template


def compose_system_prompt(instructions: str) -> str:
    """Append the JSON output template to prompt instructions."""
    return f"{instructions.strip()}\n\n{build_output_format_instructions()}\n"


def build_system_prompt(prompt_path: str = DEFAULT_SYSTEM_PROMPT) -> str:
    """
    Build the system prompt: prompt file text + JSON output template.

    Args:
        prompt_path: Relative prompt path (e.g., "listing/default")

    Returns:
        Complete system prompt text

    Raises:
        PromptNotFoundError: If the prompt file cannot be found
        ValueError: If the prompt file is invalid
    """
    return compose_system_prompt(load_prompt(prompt_path).prompt)


def build_user_prompt(request: ListingRequest, canonical_brand: str) -> str:
    """
    Render the user prompt for one listing request.

    Args:
        request: Validated caller request
        canonical_brand: Canonical brand (used instead of request.brand)

    Returns:
        Rendered prompt; missing values render as empty strings

    Example:
        >>> prompt = build_user_prompt(ListingRequest(brand="nike"), "Nike")
        >>> "Brand (canonical): Nike" in prompt
        True
    """
    return _user_template.render(
        category=request.category or "",
        main_text=request.main_text or "",
        brand=canonical_brand or "",
        condition=request.condition or "",
        model=request.model or "",
        material=request.material or "",
        color=request.color or "",
        features=request.features or "",
    )
