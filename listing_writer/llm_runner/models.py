"""
LLM client abstraction and factory for Listing Writer.

This module provides a provider-agnostic interface for the external text
generator that drafts listings, through a Protocol-based design.

Key components:
- LLMResponse: Structured dataclass holding LLM response data
- LLMClient: Protocol defining provider-agnostic interface
- build_client: Factory function to create appropriate client instances

Example:
    >>> from listing_writer.llm_runner.models import build_client
    >>> client = build_client("openai", "gpt-4o-mini", api_key,
    ...     system_prompt="You are a professional e-commerce listing generator.")
    >>> response = await client.generate_answer("Generate a listing for ...")
    >>> print(response.answer_text)
"""

from dataclasses import dataclass
from typing import Protocol

from listing_writer.config.constants import DEFAULT_TEMPERATURE


@dataclass
class LLMResponse:
    """
    Structured response from an LLM query.

    Attributes:
        answer_text: The LLM's complete response text (JSON for listings)
        tokens_used: Total tokens consumed (prompt + completion)
        provider: Provider name (e.g., "openai")
        model_name: Specific model identifier (e.g., "gpt-4o-mini")
        timestamp_utc: ISO 8601 timestamp with 'Z' suffix when response was received
        prompt_tokens: Tokens in the prompt/input
        completion_tokens: Tokens in the completion/output

    Example:
        >>> response = LLMResponse(
        ...     answer_text='{"Title": "Nike Running Shoes"}',
        ...     tokens_used=450,
        ...     provider="openai",
        ...     model_name="gpt-4o-mini",
        ...     timestamp_utc="2025-11-02T08:30:45Z",
        ...     prompt_tokens=100,
        ...     completion_tokens=350,
        ... )
        >>> response.prompt_tokens + response.completion_tokens == response.tokens_used
        True
    """

    answer_text: str
    tokens_used: int
    provider: str
    model_name: str
    timestamp_utc: str
    prompt_tokens: int = 0
    completion_tokens: int = 0


class LLMClient(Protocol):
    """
    Provider-agnostic interface for LLM clients.

    All LLM provider implementations must conform to this Protocol.
    Credentials and model settings are passed at construction time;
    implementations never read the environment themselves.

    Note:
        Implementations MUST:
        - Use async/await for HTTP requests (httpx.AsyncClient)
        - Include automatic retry logic with exponential backoff
        - Never log API keys or sensitive credentials
        - Use UTC timestamps from utils.time module
    """

    async def generate_answer(self, prompt: str) -> LLMResponse:
        """
        Execute an LLM query asynchronously and return structured response.

        Args:
            prompt: User prompt to send to the LLM

        Returns:
            LLMResponse: Structured response with answer text and metadata

        Raises:
            LLMProviderError: On permanent failures (auth errors, invalid requests)
        """
        ...


def build_client(
    provider: str,
    model_name: str,
    api_key: str,
    system_prompt: str,
    temperature: float = DEFAULT_TEMPERATURE,
) -> LLMClient:
    """
    Factory function to create appropriate LLM client based on provider.

    Supported providers:
    - "openai": OpenAI Chat Completions API in JSON mode

    Args:
        provider: Provider identifier (lowercase string)
        model_name: Model identifier (e.g., "gpt-4o-mini")
        api_key: API key for authentication (NEVER logged or persisted)
        system_prompt: System message sent with every request
        temperature: Sampling temperature

    Returns:
        LLMClient: Provider-specific client implementing LLMClient protocol

    Raises:
        ValueError: If provider is not supported

    Example:
        >>> client = build_client("openai", "gpt-4o-mini", "sk-...",
        ...     system_prompt="You are a listing generator.")
        >>> client.model_name
        'gpt-4o-mini'
    """
    if provider == "openai":
        from listing_writer.llm_runner.openai_client import OpenAIClient

        return OpenAIClient(
            model_name=model_name,
            api_key=api_key,
            system_prompt=system_prompt,
            temperature=temperature,
        )

    raise ValueError(f"Unsupported provider: '{provider}'. Supported providers: openai")
