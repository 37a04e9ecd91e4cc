"""
Retry configuration for text generator API calls.

Centralized retry policy using tenacity: exponential backoff on transient
failures (rate limits, server errors, network problems) and an immediate
failure on permanent ones (bad request, auth, not found).

Example:
    >>> from listing_writer.llm_runner.retry_config import create_retry_decorator
    >>> @create_retry_decorator()
    ... async def call_generator():
    ...     # Retried on httpx.HTTPStatusError, ConnectError, TimeoutException
    ...     ...
"""

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

# Total attempts = 1 initial + 2 retries
MAX_ATTEMPTS = 3

MIN_WAIT_SECONDS = 1
MAX_WAIT_SECONDS = 30

# 429: rate limit, 5xx: server errors
RETRY_STATUS_CODES = frozenset([429, 500, 502, 503, 504])

# Retrying cannot fix a malformed request, a bad key or a wrong endpoint
NO_RETRY_STATUS_CODES = frozenset([400, 401, 403, 404])

# Per-attempt HTTP timeout in seconds; a full listing takes a while to generate
REQUEST_TIMEOUT = 60.0

RETRYABLE_EXCEPTIONS = (
    httpx.HTTPStatusError,
    httpx.ConnectError,
    httpx.TimeoutException,
)


def is_retryable_status(status_code: int) -> bool:
    """Return True if an HTTP status code should be retried."""
    return status_code in RETRY_STATUS_CODES


def create_retry_decorator(max_attempts: int = MAX_ATTEMPTS):
    """
    Create a tenacity retry decorator for generator API calls.

    Args:
        max_attempts: Total number of attempts including the first one

    Returns:
        Retry decorator (works on sync and async callables)

    Note:
        The caller must check NO_RETRY_STATUS_CODES itself and raise a
        non-retryable exception (LLMProviderError) for them; only
        RETRYABLE_EXCEPTIONS trigger a retry. The last exception is
        re-raised once attempts are exhausted.
    """
    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(
            multiplier=1,
            min=MIN_WAIT_SECONDS,
            max=MAX_WAIT_SECONDS,
        ),
        retry=retry_if_exception_type(RETRYABLE_EXCEPTIONS),
        reraise=True,
    )
