"""
Configuration loader for Listing Writer.

This module loads YAML configuration files, validates them with Pydantic models,
and resolves the generator API key from the environment to create a
RuntimeGeneratorConfig.

The API key is resolved once, here, and then passed explicitly to the
generator client at construction time. Nothing downstream reads the
environment.

Functions:
    load_generator_settings: Load and validate listing.config.yaml (no secrets)
    load_config: Load settings and resolve API key + system prompt
    resolve_generator_config: Helper to resolve a GeneratorConfig for runtime use
"""

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from listing_writer.exceptions import (
    APIKeyMissingError,
    ConfigFileNotFoundError,
    ConfigValidationError,
)
from listing_writer.listing.prompts import build_system_prompt
from listing_writer.system_prompts import PromptNotFoundError

from .schema import GeneratorConfig, ListingConfig, RuntimeGeneratorConfig

logger = logging.getLogger(__name__)


def load_generator_settings(config_path: str | Path | None = None) -> GeneratorConfig:
    """
    Load listing.config.yaml and validate it, without resolving secrets.

    Args:
        config_path: Path to the YAML file. None uses built-in defaults
            (OpenAI gpt-4o-mini, OPENAI_API_KEY).

    Returns:
        Validated GeneratorConfig

    Raises:
        ConfigFileNotFoundError: If config file doesn't exist at the specified path
        ConfigValidationError: If YAML is invalid, empty, or fails validation

    Security:
        - Uses yaml.safe_load() to prevent code injection
    """
    if config_path is None:
        logger.debug("No config file given, using default generator settings")
        return ListingConfig().generator

    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigFileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with config_path.open(encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigValidationError(
            f"Failed to read configuration file {config_path}: {e}"
        ) from e

    if raw_config is None:
        raise ConfigValidationError(f"Configuration file is empty: {config_path}")

    try:
        listing_config = ListingConfig.model_validate(raw_config)
    except ValidationError as e:
        # Format validation errors in a user-friendly way
        error_messages = []
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            msg = error["msg"]
            error_messages.append(f"  - {loc}: {msg}")

        raise ConfigValidationError(
            f"Configuration validation failed in {config_path}:\n"
            + "\n".join(error_messages)
        ) from e

    logger.info(f"Loaded configuration from {config_path}")
    return listing_config.generator


def resolve_generator_config(settings: GeneratorConfig) -> RuntimeGeneratorConfig:
    """
    Resolve the API key environment variable and system prompt for runtime use.

    Args:
        settings: Validated generator settings

    Returns:
        RuntimeGeneratorConfig with resolved API key and the complete system
        prompt (prompt file text followed by the listing JSON template)

    Raises:
        APIKeyMissingError: If the environment variable is not set or blank
        ConfigValidationError: If the system prompt file cannot be loaded

    Security:
        - NEVER logs API keys (not even partial values)
        - Fails fast if environment variable is missing
    """
    env_var_name = settings.env_api_key
    api_key = os.environ.get(env_var_name)

    if not api_key:
        raise APIKeyMissingError(
            f"{env_var_name} missing in env "
            f"(required for {settings.provider}/{settings.model_name}). "
            f"Please set it in your environment or .env file."
        )

    if api_key.isspace():
        raise APIKeyMissingError(
            f"Environment variable ${env_var_name} is empty or whitespace "
            f"(required for {settings.provider}/{settings.model_name})"
        )

    try:
        system_prompt_text = build_system_prompt(settings.system_prompt)
    except (PromptNotFoundError, ValueError) as e:
        raise ConfigValidationError(
            f"Failed to load system prompt '{settings.system_prompt}': {e}"
        ) from e

    return RuntimeGeneratorConfig(
        provider=settings.provider,
        model_name=settings.model_name,
        api_key=api_key,
        system_prompt=system_prompt_text,
        temperature=settings.temperature,
    )


def load_config(config_path: str | Path | None = None) -> RuntimeGeneratorConfig:
    """
    Load listing.config.yaml and resolve the API key from the environment.

    Args:
        config_path: Path to the YAML file, or None for defaults

    Returns:
        RuntimeGeneratorConfig ready for build_client()

    Raises:
        ConfigFileNotFoundError: If config file doesn't exist at the specified path
        ConfigValidationError: If YAML is invalid or config validation fails
        APIKeyMissingError: If the API key is missing from the environment

    Example:
        >>> config = load_config("examples/listing.config.yaml")
        >>> config.model_name
        'gpt-4o-mini'
    """
    settings = load_generator_settings(config_path)
    return resolve_generator_config(settings)
