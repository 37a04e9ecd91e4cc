"""
Tests for config.loader and config.schema modules.

This module tests configuration loading, validation, and API key resolution:
- YAML loading and parsing
- Pydantic schema validation (all validators)
- Environment variable resolution for the generator API key
- Error handling for missing files, invalid YAML, and missing env vars
"""

import pytest
import yaml
from pydantic import ValidationError

from listing_writer.config.loader import (
    load_config,
    load_generator_settings,
    resolve_generator_config,
)
from listing_writer.config.schema import (
    GeneratorConfig,
    ListingConfig,
    RuntimeGeneratorConfig,
)
from listing_writer.exceptions import (
    APIKeyMissingError,
    ConfigFileNotFoundError,
    ConfigurationError,
    ConfigValidationError,
)

# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def write_config(tmp_path):
    """Write a config dict (or raw text) to listing.config.yaml."""

    def _write(data):
        config_file = tmp_path / "listing.config.yaml"
        if isinstance(data, str):
            config_file.write_text(data, encoding="utf-8")
        else:
            config_file.write_text(yaml.safe_dump(data), encoding="utf-8")
        return config_file

    return _write


@pytest.fixture
def api_key(monkeypatch):
    """Set OPENAI_API_KEY for the test."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test-key-123")
    return "sk-test-key-123"


# ============================================================================
# Schema Tests
# ============================================================================


class TestGeneratorConfig:
    """Tests for the GeneratorConfig model."""

    def test_defaults(self):
        """Defaults target OpenAI gpt-4o-mini at temperature 0.6."""
        config = GeneratorConfig()

        assert config.provider == "openai"
        assert config.model_name == "gpt-4o-mini"
        assert config.env_api_key == "OPENAI_API_KEY"
        assert config.temperature == 0.6
        assert config.system_prompt == "listing/default"

    def test_unsupported_provider(self):
        """Only the openai provider is accepted."""
        with pytest.raises(ValidationError):
            GeneratorConfig(provider="anthropic")

    @pytest.mark.parametrize("temperature", [-0.1, 2.5])
    def test_temperature_range(self, temperature):
        """Temperature must be within [0, 2]."""
        with pytest.raises(ValidationError):
            GeneratorConfig(temperature=temperature)

    @pytest.mark.parametrize("field", ["model_name", "env_api_key", "system_prompt"])
    def test_blank_strings_rejected(self, field):
        """Required strings cannot be blank."""
        with pytest.raises(ValidationError, match="cannot be empty"):
            GeneratorConfig(**{field: "   "})

    def test_listing_config_default_generator(self):
        """The generator block is optional."""
        assert ListingConfig().generator == GeneratorConfig()


class TestRuntimeGeneratorConfig:
    """Tests for the RuntimeGeneratorConfig model."""

    def test_api_key_hidden_from_repr(self):
        """The API key never appears in repr()."""
        runtime = RuntimeGeneratorConfig(
            provider="openai",
            model_name="gpt-4o-mini",
            api_key="sk-secret-value",
            system_prompt="Write listings.",
        )

        assert "sk-secret-value" not in repr(runtime)

    def test_blank_api_key_rejected(self):
        """A blank API key fails validation."""
        with pytest.raises(ValidationError, match="API key cannot be empty"):
            RuntimeGeneratorConfig(
                provider="openai",
                model_name="gpt-4o-mini",
                api_key=" ",
                system_prompt="Write listings.",
            )


# ============================================================================
# Loader Tests
# ============================================================================


class TestLoadGeneratorSettings:
    """Tests for load_generator_settings()."""

    def test_none_uses_defaults(self):
        """No config path means built-in defaults."""
        assert load_generator_settings(None) == GeneratorConfig()

    def test_loads_yaml(self, write_config):
        """Values from YAML override the defaults."""
        path = write_config(
            {
                "generator": {
                    "model_name": "gpt-4o",
                    "env_api_key": "LISTING_KEY",
                    "temperature": 0.3,
                }
            }
        )

        settings = load_generator_settings(path)

        assert settings.model_name == "gpt-4o"
        assert settings.env_api_key == "LISTING_KEY"
        assert settings.temperature == 0.3
        assert settings.provider == "openai"

    def test_accepts_string_path(self, write_config):
        """str paths work as well as Path objects."""
        path = write_config({"generator": {"model_name": "gpt-4o"}})

        assert load_generator_settings(str(path)).model_name == "gpt-4o"

    def test_missing_file(self, tmp_path):
        """A missing file raises ConfigFileNotFoundError."""
        with pytest.raises(ConfigFileNotFoundError, match="not found"):
            load_generator_settings(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, write_config):
        """Broken YAML raises ConfigValidationError."""
        path = write_config("generator: [unclosed")

        with pytest.raises(ConfigValidationError, match="Invalid YAML syntax"):
            load_generator_settings(path)

    def test_empty_file(self, write_config):
        """An empty file is a configuration error."""
        path = write_config("")

        with pytest.raises(ConfigValidationError, match="empty"):
            load_generator_settings(path)

    def test_validation_errors_listed(self, write_config):
        """Field errors are reported with their location."""
        path = write_config({"generator": {"temperature": 9}})

        with pytest.raises(ConfigValidationError) as exc_info:
            load_generator_settings(path)

        assert "generator.temperature" in str(exc_info.value)

    def test_errors_share_base_class(self, tmp_path):
        """All loader errors are ConfigurationErrors."""
        with pytest.raises(ConfigurationError):
            load_generator_settings(tmp_path / "missing.yaml")


class TestResolveGeneratorConfig:
    """Tests for resolve_generator_config() and load_config()."""

    def test_resolves_key_and_prompt(self, api_key):
        """The key comes from the environment, the prompt from its file."""
        runtime = resolve_generator_config(GeneratorConfig())

        assert runtime.api_key == api_key
        assert runtime.provider == "openai"
        assert runtime.model_name == "gpt-4o-mini"
        assert runtime.temperature == 0.6
        assert "e-commerce listing generator" in runtime.system_prompt
        assert runtime.system_prompt.count("Return the result strictly") == 1
        assert '"seo_long_tail_paragraph": ""' in runtime.system_prompt

    def test_missing_key(self, monkeypatch):
        """A missing env var raises APIKeyMissingError naming the variable."""
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)

        with pytest.raises(APIKeyMissingError, match="OPENAI_API_KEY missing in env"):
            resolve_generator_config(GeneratorConfig())

    def test_whitespace_key(self, monkeypatch):
        """A whitespace-only key is treated as missing."""
        monkeypatch.setenv("OPENAI_API_KEY", "   ")

        with pytest.raises(APIKeyMissingError, match="empty or whitespace"):
            resolve_generator_config(GeneratorConfig())

    def test_custom_env_var(self, monkeypatch):
        """env_api_key selects the variable to read."""
        monkeypatch.setenv("LISTING_KEY", "sk-custom")

        runtime = resolve_generator_config(GeneratorConfig(env_api_key="LISTING_KEY"))

        assert runtime.api_key == "sk-custom"

    def test_unknown_system_prompt(self, api_key):
        """A missing prompt file is a configuration error."""
        settings = GeneratorConfig(system_prompt="listing/nope")

        with pytest.raises(ConfigValidationError, match="Failed to load system prompt"):
            resolve_generator_config(settings)

    def test_load_config(self, write_config, api_key):
        """load_config() loads YAML and resolves the key in one step."""
        path = write_config({"generator": {"model_name": "gpt-4o"}})

        runtime = load_config(path)

        assert runtime.model_name == "gpt-4o"
        assert runtime.api_key == api_key

    def test_key_never_in_error(self, monkeypatch):
        """Error messages never contain a key value."""
        monkeypatch.setenv("OPENAI_API_KEY", "  ")

        with pytest.raises(APIKeyMissingError) as exc_info:
            load_config(None)

        assert "sk-" not in str(exc_info.value)
