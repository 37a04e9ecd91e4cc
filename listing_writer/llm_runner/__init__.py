"""
LLM runner module for Listing Writer.

Provides the client side of the external text generator:
- LLMClient protocol and LLMResponse dataclass
- OpenAIClient (Chat Completions, JSON mode)
- MockLLMClient for tests and offline runs
- build_client factory

Example:
    >>> from listing_writer.llm_runner import build_client
    >>> client = build_client("openai", "gpt-4o-mini", "sk-...", system_prompt="...")
    >>> response = await client.generate_answer("Generate a listing for ...")
"""

from .mock_client import MockLLMClient
from .models import LLMClient, LLMResponse, build_client
from .openai_client import OpenAIClient

__all__ = [
    "LLMClient",
    "LLMResponse",
    "MockLLMClient",
    "OpenAIClient",
    "build_client",
]
