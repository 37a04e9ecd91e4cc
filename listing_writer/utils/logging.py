"""
Structured JSON logging for Listing Writer.

Provides standardized logging with:
- JSON formatted output to stderr
- UTC timestamps
- Structured context fields and per-request correlation ids
- Secret redaction (OpenAI keys and bearer tokens never reach the logs)

All modules log through logging.getLogger(__name__); the CLI calls
setup_logging() once. stdout is reserved for the generated listing JSON.

Examples:
    >>> from listing_writer.utils.logging import setup_logging
    >>> setup_logging(verbose=True)
    >>> logger = logging.getLogger("listing_writer.listing.service")
    >>> logger.info("Listing generated", extra={"context": {"brand": "Nike"}})
"""

import json
import logging
import re
import sys
from typing import Any

from listing_writer.utils.time import utc_timestamp


class JSONFormatter(logging.Formatter):
    """
    Formatter that outputs each record as one JSON object.

    Fields:
    - timestamp: ISO 8601 UTC timestamp
    - level: Log level name
    - component: Logger name
    - message: Rendered log message
    - context: Structured data from extra={"context": {...}}
    - request_id: Correlation id from extra={"request_id": "..."}
    - exception: Formatted traceback, if any
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": utc_timestamp(),
            "level": record.levelname,
            "component": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "context") and isinstance(record.context, dict):
            log_entry["context"] = record.context

        if hasattr(record, "request_id"):
            log_entry["request_id"] = record.request_id

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False)


class SecretRedactingFilter(logging.Filter):
    """
    Logging filter that redacts API keys and bearer tokens.

    Replaces secrets with a redacted version showing only the last 4 chars:
    "sk-proj-abcdef123456..." -> "sk-...3456"
    "Bearer abc123xyz789..." -> "Bearer ***z789"
    """

    SECRET_PATTERNS = [
        (re.compile(r"\bsk-[a-zA-Z0-9_-]{20,}\b"), "sk-...{last4}"),
        (re.compile(r"\bBearer\s+[a-zA-Z0-9_-]{20,}\b"), "Bearer ***{last4}"),
        (re.compile(r"\b[a-zA-Z0-9_-]{32,}\b"), "***{last4}"),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        """Redact secrets in message, args and context; never drops a record."""
        record.msg = self._redact_secrets(str(record.msg))

        if record.args:
            if isinstance(record.args, dict):
                record.args = {
                    k: self._redact_secrets(str(v)) for k, v in record.args.items()
                }
            elif isinstance(record.args, tuple):
                record.args = tuple(
                    self._redact_secrets(str(arg)) for arg in record.args
                )

        if hasattr(record, "context") and isinstance(record.context, dict):
            record.context = self._redact_value(record.context)

        return True

    def _redact_secrets(self, text: str) -> str:
        for pattern, template in self.SECRET_PATTERNS:

            def redact_match(match: re.Match) -> str:
                return template.format(last4=match.group(0)[-4:])

            text = pattern.sub(redact_match, text)

        return text

    def _redact_value(self, value: Any) -> Any:
        """Recursively redact secrets in nested dicts and lists."""
        if isinstance(value, str):
            return self._redact_secrets(value)
        if isinstance(value, dict):
            return {key: self._redact_value(item) for key, item in value.items()}
        if isinstance(value, list):
            return [self._redact_value(item) for item in value]
        return value


def setup_logging(verbose: bool = False) -> None:
    """
    Configure structured JSON logging on stderr.

    Args:
        verbose: If True, set log level to DEBUG. Otherwise, use INFO.
    """
    level = logging.DEBUG if verbose else logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove any existing handlers (prevents duplicate logs)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(SecretRedactingFilter())

    root_logger.addHandler(handler)


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    context: dict[str, Any] | None = None,
    request_id: str | None = None,
) -> None:
    """
    Log a message with structured context and optional request_id.

    Equivalent to
    logger.log(level, message, extra={"context": {...}, "request_id": "..."}).

    Example:
        >>> log_with_context(
        ...     logger,
        ...     logging.INFO,
        ...     "Brand canonicalized",
        ...     context={"raw_brand": "nike", "canonical_brand": "Nike"},
        ...     request_id="req-20251102T083045Z-1a2b3c",
        ... )
    """
    extra = {}

    if context is not None:
        extra["context"] = context

    if request_id is not None:
        extra["request_id"] = request_id

    logger.log(level, message, extra=extra if extra else None)
