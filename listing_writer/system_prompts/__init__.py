"""System prompt files bundled with Listing Writer.

Prompts are JSON files grouped by use case (listing/default.json) and are
selected by name through the generator config.
"""

from listing_writer.system_prompts.prompt_loader import (
    PromptNotFoundError,
    SystemPrompt,
    load_prompt,
)

__all__ = [
    "SystemPrompt",
    "load_prompt",
    "PromptNotFoundError",
]
