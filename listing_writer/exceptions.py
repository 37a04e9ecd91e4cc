"""
Custom exceptions for Listing Writer.

This module provides a hierarchy of exceptions that enable type-safe error
handling throughout the application. All exceptions inherit from the base
ListingWriterError for consistent catching.

Brand canonicalization itself never raises: empty brands and non-string
values degrade to no-ops. These exceptions cover the plumbing around it
(configuration, request validation, the text generator).

Exception Hierarchy:
    ListingWriterError (base)
    ├── ConfigurationError
    │   ├── ConfigFileNotFoundError
    │   ├── ConfigValidationError
    │   └── APIKeyMissingError
    ├── ListingRequestError
    └── LLMProviderError
        └── GeneratedContentError

Usage:
    from listing_writer.exceptions import ConfigurationError

    try:
        config = load_config(path)
    except ConfigFileNotFoundError as e:
        logger.error(f"Config file not found: {e}")
        sys.exit(1)
"""


class ListingWriterError(Exception):
    """
    Base exception for all Listing Writer errors.

    All custom exceptions in this application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ============================================================================
# Configuration Errors
# ============================================================================


class ConfigurationError(ListingWriterError):
    """
    Base class for configuration-related errors.

    Raised when configuration loading, parsing, or validation fails.
    Should be caught and result in exit code 1 (configuration error).
    """

    pass


class ConfigFileNotFoundError(ConfigurationError):
    """
    Configuration file does not exist at the specified path.

    Example:
        raise ConfigFileNotFoundError("/path/to/listing.config.yaml")
    """

    pass


class ConfigValidationError(ConfigurationError):
    """
    Configuration file is invalid (schema validation failed).

    Should include details about which field(s) failed validation.

    Example:
        raise ConfigValidationError("generator.temperature: must be between 0 and 2")
    """

    pass


class APIKeyMissingError(ConfigurationError):
    """
    Required API key environment variable is not set.

    Example:
        raise APIKeyMissingError("OPENAI_API_KEY missing in env")
    """

    pass


# ============================================================================
# Request Errors
# ============================================================================


class ListingRequestError(ListingWriterError):
    """
    Listing request payload could not be validated.

    Example:
        raise ListingRequestError("Request payload must be a JSON object")
    """

    pass


# ============================================================================
# LLM Provider Errors
# ============================================================================


class LLMProviderError(ListingWriterError):
    """
    Text generator API call failed permanently.

    Raised for non-retryable HTTP status codes (400, 401, 404) and for
    malformed API responses. Transient failures are retried first and then
    re-raised as the underlying httpx exception.

    Example:
        raise LLMProviderError("OpenAI API error (non-retryable): status=401")
    """

    pass


class GeneratedContentError(LLMProviderError):
    """
    Text generator returned content that is not a JSON object.

    Attributes:
        raw_content: The content exactly as returned by the generator

    Example:
        raise GeneratedContentError("Model returned non-JSON", raw_content="Sure! ...")
    """

    def __init__(self, message: str, raw_content: str | None = None):
        super().__init__(message)
        self.raw_content = raw_content
