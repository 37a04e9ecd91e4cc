"""
OpenAI API client implementation for Listing Writer.

Drafts listings through the OpenAI Chat Completions API in JSON mode
(response_format={"type": "json_object"}), with automatic retry logic and
error handling.

Key features:
- Async HTTP client (httpx.AsyncClient)
- Retry on transient failures (429, 5xx) with exponential backoff
- Fail fast on permanent errors (400, 401, 403, 404)
- UTC timestamp tracking
- Security: NEVER logs API keys

Example:
    >>> from listing_writer.llm_runner.openai_client import OpenAIClient
    >>> client = OpenAIClient("gpt-4o-mini", api_key="sk-...",
    ...     system_prompt="You are a professional e-commerce listing generator.")
    >>> response = await client.generate_answer("Generate a listing for ...")
    >>> print(response.answer_text)
    '{"Title": "...", ...}'
"""

import logging
from typing import Any

import httpx

from listing_writer.config.constants import DEFAULT_TEMPERATURE, MAX_PROMPT_LENGTH
from listing_writer.exceptions import LLMProviderError
from listing_writer.llm_runner.models import LLMResponse
from listing_writer.llm_runner.retry_config import (
    NO_RETRY_STATUS_CODES,
    REQUEST_TIMEOUT,
    create_retry_decorator,
    is_retryable_status,
)
from listing_writer.utils.time import utc_timestamp

# Suppress HTTPX request logging to prevent test interference
httpx_logger = logging.getLogger("httpx")
httpx_logger.setLevel(logging.WARNING)

OPENAI_API_URL = "https://api.openai.com/v1/chat/completions"

# Content used when the API returns no message content
EMPTY_JSON_CONTENT = "{}"

logger = logging.getLogger(__name__)


class OpenAIClient:
    """
    OpenAI Chat Completions client with async retry logic.

    Implements the LLMClient protocol. Every request carries the system
    prompt, the user prompt, the configured temperature and, in JSON mode,
    response_format={"type": "json_object"}.

    Attributes:
        model_name: OpenAI model identifier (e.g., "gpt-4o-mini")
        api_key: OpenAI API key for authentication (NEVER logged)
        system_prompt: System message sent with every request
        temperature: Sampling temperature
        json_mode: Request a JSON object response

    Retry behavior:
        - Retries on: 429, 500, 502, 503, 504, connection errors, timeouts
        - Fails immediately on: 400, 401, 403, 404 (LLMProviderError)
        - Max attempts: 3 (from retry_config.MAX_ATTEMPTS)
    """

    def __init__(
        self,
        model_name: str,
        api_key: str,
        system_prompt: str,
        temperature: float = DEFAULT_TEMPERATURE,
        json_mode: bool = True,
    ):
        """
        Initialize OpenAI client.

        Args:
            model_name: OpenAI model identifier (e.g., "gpt-4o-mini")
            api_key: OpenAI API key for authentication
            system_prompt: System message for context/instructions
            temperature: Sampling temperature (default 0.6)
            json_mode: If True, ask for a JSON object response

        Raises:
            ValueError: If model_name, api_key, or system_prompt is empty
        """
        # Validate inputs (never log api_key)
        if not model_name or model_name.isspace():
            raise ValueError("model_name cannot be empty")

        if not api_key or api_key.isspace():
            raise ValueError("api_key cannot be empty")

        if not system_prompt or system_prompt.isspace():
            raise ValueError("system_prompt cannot be empty")

        self.model_name = model_name
        self.api_key = api_key
        self.system_prompt = system_prompt
        self.temperature = temperature
        self.json_mode = json_mode

        logger.info(f"Initialized OpenAI client for model: {model_name}")

    def _build_payload(self, prompt: str) -> dict[str, Any]:
        """Build the Chat Completions request body."""
        payload: dict[str, Any] = {
            "model": self.model_name,
            "temperature": self.temperature,
            "messages": [
                {"role": "system", "content": self.system_prompt},
                {"role": "user", "content": prompt},
            ],
        }
        if self.json_mode:
            payload["response_format"] = {"type": "json_object"}
        return payload

    @create_retry_decorator()
    async def generate_answer(self, prompt: str) -> LLMResponse:
        """
        Send the prompt to OpenAI and return the generated content.

        Args:
            prompt: User prompt with the product data

        Returns:
            LLMResponse with the message content as answer_text. If the API
            returns no content, answer_text is "{}".

        Raises:
            ValueError: If prompt is empty or too long
            LLMProviderError: On non-retryable status codes or an unparseable
                response body
            httpx.HTTPStatusError: On retryable HTTP errors after retries exhausted
            httpx.ConnectError: On connection failures after retries exhausted
            httpx.TimeoutException: On timeout after retries exhausted
        """
        if not prompt or prompt.isspace():
            raise ValueError("Prompt cannot be empty")

        if len(prompt) > MAX_PROMPT_LENGTH:
            raise ValueError(
                f"Prompt exceeds maximum length of {MAX_PROMPT_LENGTH:,} characters "
                f"(received {len(prompt):,} characters)."
            )

        # Build headers (NEVER log api_key)
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        logger.debug(f"Sending request to OpenAI: model={self.model_name}")

        try:
            async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT) as client:
                response = await client.post(
                    OPENAI_API_URL,
                    json=self._build_payload(prompt),
                    headers=headers,
                )

                # Permanent errors fail immediately without retry
                if response.status_code in NO_RETRY_STATUS_CODES:
                    error_detail = self._extract_error_detail(response)
                    raise LLMProviderError(
                        f"OpenAI API error (non-retryable): "
                        f"status={response.status_code}, "
                        f"model={self.model_name}, "
                        f"detail={error_detail}"
                    )

                # Retryable errors (429, 5xx) are raised for the retry decorator
                response.raise_for_status()

        except httpx.HTTPStatusError as e:
            error_detail = self._extract_error_detail(e.response)
            logger.error(
                f"OpenAI API HTTP error: "
                f"status={e.response.status_code}, "
                f"retryable={is_retryable_status(e.response.status_code)}, "
                f"model={self.model_name}, "
                f"detail={error_detail}"
            )
            raise

        except httpx.ConnectError as e:
            logger.error(
                f"OpenAI API connection error: model={self.model_name}, error={e}"
            )
            raise

        except httpx.TimeoutException as e:
            logger.error(f"OpenAI API timeout: model={self.model_name}, error={e}")
            raise

        try:
            data = response.json()
        except ValueError as e:
            raise LLMProviderError(f"Failed to parse OpenAI response JSON: {e}") from e

        if not isinstance(data, dict):
            raise LLMProviderError("OpenAI response body is not a JSON object")

        answer_text = self._extract_answer_text(data)
        tokens_used, prompt_tokens, completion_tokens = self._extract_token_usage(data)

        return LLMResponse(
            answer_text=answer_text,
            tokens_used=tokens_used,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            provider="openai",
            model_name=self.model_name,
            timestamp_utc=utc_timestamp(),
        )

    def _extract_answer_text(self, data: dict[str, Any]) -> str:
        """
        Extract choices[0].message.content from a Chat Completions response.

        Returns:
            str: Message content, or "{}" if any part of the path is missing
        """
        choices = data.get("choices")
        if not isinstance(choices, list) or not choices:
            logger.warning(
                f"OpenAI response has no choices for model={self.model_name}"
            )
            return EMPTY_JSON_CONTENT

        first_choice = choices[0]
        message = first_choice.get("message") if isinstance(first_choice, dict) else None
        content = message.get("content") if isinstance(message, dict) else None

        if not content:
            logger.warning(
                f"OpenAI response has empty message content for model={self.model_name}"
            )
            return EMPTY_JSON_CONTENT

        return str(content)

    def _extract_token_usage(self, data: dict[str, Any]) -> tuple[int, int, int]:
        """
        Extract token usage breakdown from a Chat Completions response.

        Returns:
            tuple[int, int, int]: (total_tokens, prompt_tokens, completion_tokens)
                All values default to 0 if unavailable
        """
        usage = data.get("usage")
        if not usage or not isinstance(usage, dict):
            logger.warning(
                f"OpenAI response missing 'usage' data for model={self.model_name}"
            )
            return 0, 0, 0

        prompt_tokens = int(usage.get("prompt_tokens") or 0)
        completion_tokens = int(usage.get("completion_tokens") or 0)
        total_tokens = int(usage.get("total_tokens") or prompt_tokens + completion_tokens)

        logger.info(
            f"Token usage for {self.model_name}: "
            f"total={total_tokens}, prompt={prompt_tokens}, completion={completion_tokens}"
        )

        return total_tokens, prompt_tokens, completion_tokens

    def _extract_error_detail(self, response: httpx.Response) -> str:
        """
        Extract error detail from an OpenAI error response.

        Note:
            NEVER includes API keys in error messages.
            Only extracts error messages from response body.
        """
        try:
            error_data = response.json()
            error = error_data.get("error", {})
            message = error.get("message", "Unknown error")
            return str(message)
        except (ValueError, AttributeError):
            return f"HTTP {response.status_code}"
