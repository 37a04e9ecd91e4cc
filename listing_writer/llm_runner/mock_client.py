"""
Mock LLM client for testing and offline runs.

Provides MockLLMClient that implements the LLMClient protocol without making
real API calls. Used for deterministic testing of the listing pipeline and
by the CLI --mock-response option.

Example:
    >>> from listing_writer.llm_runner.mock_client import MockLLMClient
    >>> client = MockLLMClient(default_response='{"Title": "NIKE shoes"}')
    >>> response = await client.generate_answer("any prompt")
    >>> response.answer_text
    '{"Title": "NIKE shoes"}'
"""

import logging
from dataclasses import dataclass, field

from listing_writer.llm_runner.models import LLMResponse
from listing_writer.utils.time import utc_timestamp

logger = logging.getLogger(__name__)


@dataclass
class MockLLMClient:
    """
    Mock LLM client that implements the LLMClient protocol.

    Attributes:
        responses: Dict mapping prompts to answers
        default_response: Answer returned when the prompt is not in responses.
            Defaults to an empty JSON object.
        model_name: Model identifier to return in responses
        provider: Provider name to return in responses
        tokens_per_response: Number of tokens to report for each response
        prompts: Every prompt received, in order (for assertions)
    """

    responses: dict[str, str] | None = None
    default_response: str = "{}"
    model_name: str = "mock-model"
    provider: str = "mock"
    tokens_per_response: int = 100
    prompts: list[str] = field(default_factory=list)

    def __post_init__(self):
        """Initialize responses dict if not provided."""
        if self.responses is None:
            self.responses = {}

        logger.info(
            f"Initialized MockLLMClient with {len(self.responses)} configured responses"
        )

    async def generate_answer(self, prompt: str) -> LLMResponse:
        """
        Return the configured answer for a prompt.

        Args:
            prompt: User prompt

        Returns:
            LLMResponse: Mock response with configured answer and metadata
        """
        self.prompts.append(prompt)
        answer_text = self.responses.get(prompt, self.default_response)

        logger.debug(f"MockLLMClient returning answer for prompt: {prompt[:50]}...")

        return LLMResponse(
            answer_text=answer_text,
            tokens_used=self.tokens_per_response,
            prompt_tokens=self.tokens_per_response // 2,
            completion_tokens=self.tokens_per_response // 2,
            provider=self.provider,
            model_name=self.model_name,
            timestamp_utc=utc_timestamp(),
        )
