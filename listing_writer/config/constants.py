"""
Configuration constants for Listing Writer.

This module contains global constants used across the application
to avoid tight coupling between modules.
"""

# Maximum prompt length to prevent excessive API costs
# ~25k tokens at 4 chars/token average
MAX_PROMPT_LENGTH = 100_000

DEFAULT_PROVIDER = "openai"
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TEMPERATURE = 0.6
DEFAULT_ENV_API_KEY = "OPENAI_API_KEY"

# Relative path of the bundled system prompt (see system_prompts/)
DEFAULT_SYSTEM_PROMPT = "listing/default"
