"""Bundled system prompt files for listing generation.

Prompt files live next to this module, one JSON file per prompt, addressed
by a name relative to this directory ("listing/default"). The config's
generator.system_prompt selects one; nothing outside the package is read.
"""

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ValidationError, field_validator

logger = logging.getLogger(__name__)

PROMPTS_DIR = Path(__file__).parent


class PromptNotFoundError(Exception):
    """Raised when no bundled prompt file matches the requested name."""


class SystemPrompt(BaseModel):
    """A prompt file: instructions for the generator plus descriptive fields.

    The listing JSON template is not stored here; listing.prompts appends it.
    """

    name: str
    description: str
    prompt: str
    compatible_models: list[str] | None = None
    metadata: dict[str, str] | None = None

    @field_validator("name", "prompt")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


def prompt_file_path(name: str) -> Path:
    """Map a prompt name to its JSON file inside PROMPTS_DIR.

    Raises:
        PromptNotFoundError: If the name points outside PROMPTS_DIR or the
            file does not exist
    """
    filename = name if name.endswith(".json") else f"{name}.json"
    root = PROMPTS_DIR.resolve()
    path = (root / filename).resolve()

    if not path.is_relative_to(root):
        raise PromptNotFoundError(f"Prompt name escapes the prompt library: {name}")
    if not path.is_file():
        raise PromptNotFoundError(f"System prompt not found: {name} ({path})")

    return path


def load_prompt(name: str) -> SystemPrompt:
    """Load and validate a bundled prompt file.

    Raises:
        PromptNotFoundError: If no prompt file matches the name
        ValueError: If the file is not valid JSON or fails validation
    """
    path = prompt_file_path(name)

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in prompt file {path}: {e}") from e
    except OSError as e:
        raise ValueError(f"Failed to read prompt file {path}: {e}") from e

    try:
        prompt = SystemPrompt.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid prompt file {path}: {e}") from e

    logger.debug(f"Loaded system prompt '{prompt.name}' from {path}")
    return prompt
