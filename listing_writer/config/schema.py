"""
Configuration schema models for Listing Writer.

This module defines Pydantic models for validating and parsing the
listing.config.yaml file. All models use Pydantic v2 field validators.

Models:
    GeneratorConfig: Text generator settings (provider, model, API key env var)
    ListingConfig: Root configuration model (validates entire YAML)
    RuntimeGeneratorConfig: Generator settings with resolved API key and prompt
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from listing_writer.config.constants import (
    DEFAULT_ENV_API_KEY,
    DEFAULT_MODEL,
    DEFAULT_PROVIDER,
    DEFAULT_SYSTEM_PROMPT,
    DEFAULT_TEMPERATURE,
)


class GeneratorConfig(BaseModel):
    """
    Text generator configuration from listing.config.yaml.

    Specifies which LLM drafts the listing and where to find its API key
    in the environment.

    Attributes:
        provider: LLM provider name (only "openai" is implemented)
        model_name: Specific model identifier (e.g., "gpt-4o-mini")
        env_api_key: Environment variable name containing the API key
        temperature: Sampling temperature sent with every request
        system_prompt: Relative path to the system prompt JSON
                      (e.g., "listing/default")
    """

    provider: Literal["openai"] = DEFAULT_PROVIDER
    model_name: str = DEFAULT_MODEL
    env_api_key: str = DEFAULT_ENV_API_KEY
    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0.0, le=2.0)
    system_prompt: str = DEFAULT_SYSTEM_PROMPT

    @field_validator("model_name")
    @classmethod
    def validate_model_name(cls, v: str) -> str:
        """Validate model_name is non-empty."""
        if not v or v.isspace():
            raise ValueError("model_name cannot be empty")
        return v

    @field_validator("env_api_key")
    @classmethod
    def validate_env_api_key(cls, v: str) -> str:
        """Validate env_api_key is non-empty."""
        if not v or v.isspace():
            raise ValueError("env_api_key cannot be empty")
        return v

    @field_validator("system_prompt")
    @classmethod
    def validate_system_prompt(cls, v: str) -> str:
        """Validate system_prompt path is non-empty."""
        if not v or v.isspace():
            raise ValueError("system_prompt cannot be empty")
        return v


class ListingConfig(BaseModel):
    """
    Root configuration model for listing.config.yaml.

    Attributes:
        generator: Text generator settings (defaults to OpenAI gpt-4o-mini)

    Example:
        generator:
          provider: "openai"
          model_name: "gpt-4o-mini"
          env_api_key: "OPENAI_API_KEY"
          temperature: 0.6
    """

    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)


class RuntimeGeneratorConfig(BaseModel):
    """
    Resolved generator configuration with API key and system prompt text.

    Created at runtime after loading the API key from the environment and
    the system prompt from its JSON file. This is what build_client() uses.

    Attributes:
        provider: LLM provider name
        model_name: Specific model identifier
        api_key: Resolved API key from environment (NEVER log this)
        system_prompt: Complete system prompt (instructions + JSON template)
        temperature: Sampling temperature
    """

    provider: str
    model_name: str
    api_key: str = Field(repr=False)
    system_prompt: str
    temperature: float = DEFAULT_TEMPERATURE

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        """Validate provider is non-empty."""
        if not v or v.isspace():
            raise ValueError("provider cannot be empty")
        return v

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate API key is non-empty."""
        if not v or v.isspace():
            raise ValueError("API key cannot be empty")
        return v

    @field_validator("system_prompt")
    @classmethod
    def validate_system_prompt(cls, v: str) -> str:
        """Validate system prompt is non-empty."""
        if not v or v.isspace():
            raise ValueError("System prompt cannot be empty")
        return v
