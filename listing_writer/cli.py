"""
CLI entrypoint for Listing Writer.

Provides a dual-mode command-line interface with:
- Human-friendly output: Rich spinner, status lines and a summary table on
  stderr, the listing JSON on stdout
- Agent-friendly output: a single JSON object on stdout

Commands:
    generate: Draft a listing with the text generator and canonicalize its brand
    canonicalize: Canonicalize brand mentions in an existing listing JSON (offline)
    validate: Validate configuration and API key resolution

Exit codes:
    0: Success
    1: Configuration error (invalid YAML, missing API key)
    2: Invalid input (request or document file)
    3: Generator failure (HTTP error, non-JSON content)

Examples:
    # Generate a listing (OPENAI_API_KEY from environment or .env)
    listing-writer generate --request examples/listing.request.json

    # Offline run against a canned generator response
    listing-writer generate -r request.json --mock-response generated.json

    # Rewrite brand mentions in an existing listing
    listing-writer canonicalize --document listing.json --brand "nike"

Security:
    - API keys are loaded from environment variables only
    - Errors may contain file paths but never API keys
"""

import asyncio
import json
from pathlib import Path
from typing import Any

import httpx
import typer
from dotenv import load_dotenv
from rich.traceback import install as install_rich_traceback

from listing_writer.branding import canonicalize_brand, canonicalize_document
from listing_writer.config.loader import (
    load_config,
    load_generator_settings,
    resolve_generator_config,
)
from listing_writer.exceptions import (
    ConfigurationError,
    GeneratedContentError,
    ListingRequestError,
    LLMProviderError,
)
from listing_writer.listing.service import finalize_listing, handle_request
from listing_writer.llm_runner.mock_client import MockLLMClient
from listing_writer.llm_runner.models import LLMClient, build_client
from listing_writer.utils.console import (
    console,
    error,
    info,
    output_mode,
    print_json_document,
    print_listing_summary,
    spinner,
    success,
    warning,
)
from listing_writer.utils.logging import setup_logging

# Install Rich tracebacks for better error messages
install_rich_traceback(show_locals=False)

# Exit codes
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 1
EXIT_INPUT_ERROR = 2
EXIT_GENERATOR_ERROR = 3

app = typer.Typer(
    name="listing-writer",
    help="Draft e-commerce listings with consistent brand spelling",
    add_completion=False,
)


def _read_json_file(path: Path, what: str) -> Any:
    """Read a JSON file, raising ListingRequestError on failure."""
    try:
        with path.open(encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ListingRequestError(f"Invalid JSON in {what} file {path}: {e}") from e
    except OSError as e:
        raise ListingRequestError(f"Failed to read {what} file {path}: {e}") from e


def _write_json_file(path: Path, document: Any) -> None:
    """Write a JSON document to a file (UTF-8, indented)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(document, f, indent=2, ensure_ascii=False)
        f.write("\n")


def _emit_document(key: str, document: Any, output: Path | None) -> None:
    """Write the result to a file, or to stdout in the current output mode."""
    if output is not None:
        _write_json_file(output, document)
        info(f"Wrote {output}")
        if output_mode.is_agent():
            output_mode.add_json("output", str(output))
        return

    if output_mode.is_agent():
        output_mode.add_json(key, document)
    else:
        print_json_document(document)


def _fail(message: str, error_type: str, exit_code: int) -> typer.Exit:
    """Report an error in the current output mode and return the Exit to raise."""
    error(message)
    if output_mode.is_agent():
        output_mode.add_json("error_type", error_type)
        output_mode.flush_json()
    return typer.Exit(exit_code)


def _build_generator(config: Path | None, mock_response: Path | None) -> LLMClient:
    """Create the generator client from config, or a mock from a canned response."""
    settings = load_generator_settings(config)

    if mock_response is not None:
        try:
            canned = mock_response.read_text(encoding="utf-8")
        except OSError as e:
            raise ListingRequestError(
                f"Failed to read mock response file {mock_response}: {e}"
            ) from e
        warning("Using mock generator response (no API call)")
        return MockLLMClient(
            default_response=canned, model_name=settings.model_name
        )

    runtime = resolve_generator_config(settings)
    return build_client(
        provider=runtime.provider,
        model_name=runtime.model_name,
        api_key=runtime.api_key,
        system_prompt=runtime.system_prompt,
        temperature=runtime.temperature,
    )


@app.command()
def generate(
    request: Path = typer.Option(
        ...,
        "--request",
        "-r",
        help="Path to the listing request JSON (brand, category, mainText, ...)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to YAML configuration file (defaults: OpenAI gpt-4o-mini)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    mock_response: Path | None = typer.Option(
        None,
        "--mock-response",
        help="Use this file as the generator output instead of calling the API",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the listing JSON to this file instead of stdout",
    ),
    format: str = typer.Option(
        "text",
        "--format",
        "-f",
        help="Output format: 'text' or 'json'",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging (JSON logs on stderr)",
    ),
):
    """
    Generate a listing and canonicalize every brand mention in it.

    Exit codes:
      0: Listing generated
      1: Configuration error
      2: Invalid request file
      3: Generator failure
    """
    output_mode.format = format
    setup_logging(verbose=verbose)

    try:
        payload = _read_json_file(request, "request")
        client = _build_generator(config, mock_response)

        with spinner("Generating listing..."):
            listing = asyncio.run(handle_request(payload, client))

    except ConfigurationError as e:
        raise _fail(f"Configuration error: {e}", "config_error", EXIT_CONFIG_ERROR)
    except ListingRequestError as e:
        raise _fail(str(e), "request_error", EXIT_INPUT_ERROR)
    except GeneratedContentError as e:
        raise _fail(
            f"Model returned non-JSON: {e}",
            "generated_content_error",
            EXIT_GENERATOR_ERROR,
        )
    except LLMProviderError as e:
        raise _fail(f"Generator error: {e}", "provider_error", EXIT_GENERATOR_ERROR)
    except httpx.HTTPError as e:
        raise _fail(
            f"Generator request failed: {e}", "http_error", EXIT_GENERATOR_ERROR
        )

    success("Listing generated")
    print_listing_summary(listing, listing.get("brand", ""))
    _emit_document("listing", listing, output)
    output_mode.flush_json()


@app.command()
def canonicalize(
    document: Path = typer.Option(
        ...,
        "--document",
        "-d",
        help="Path to a generated listing JSON (any JSON value)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    brand: str = typer.Option(
        ...,
        "--brand",
        "-b",
        help="Brand as typed by the seller",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the result to this file instead of stdout",
    ),
    format: str = typer.Option(
        "text",
        "--format",
        "-f",
        help="Output format: 'text' or 'json'",
    ),
):
    """
    Canonicalize brand mentions in an existing listing document (no API call).

    Objects also get mainText assembled from the description paragraphs
    when it is missing; other JSON values are only brand-rewritten.
    """
    output_mode.format = format

    try:
        loaded = _read_json_file(document, "document")
    except ListingRequestError as e:
        raise _fail(str(e), "document_error", EXIT_INPUT_ERROR)

    if isinstance(loaded, dict):
        result = finalize_listing(loaded, brand)
    else:
        result = canonicalize_document(loaded, brand).document

    canonical_brand = canonicalize_brand(brand)
    if not canonical_brand:
        warning("Brand is empty, document left unchanged")
    else:
        success(f"Canonical brand: {canonical_brand}")

    if output_mode.is_agent():
        output_mode.add_json("brand", canonical_brand)
    _emit_document("document", result, output)
    output_mode.flush_json()


@app.command()
def validate(
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to YAML configuration file",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    format: str = typer.Option(
        "text",
        "--format",
        "-f",
        help="Output format: 'text' or 'json'",
    ),
):
    """
    Validate configuration, API key resolution and the system prompt.

    Exit codes:
      0: Configuration is valid
      1: Configuration is invalid
    """
    output_mode.format = format

    try:
        runtime = load_config(config)
    except ConfigurationError as e:
        raise _fail(f"Validation failed: {e}", "config_error", EXIT_CONFIG_ERROR)

    success("Configuration is valid")
    info(f"Provider: {runtime.provider}")
    info(f"Model: {runtime.model_name}")
    info(f"Temperature: {runtime.temperature}")

    if output_mode.is_agent():
        output_mode.add_json("valid", True)
        output_mode.add_json("provider", runtime.provider)
        output_mode.add_json("model_name", runtime.model_name)
        output_mode.add_json("temperature", runtime.temperature)
        output_mode.flush_json()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
):
    """
    Listing Writer - draft e-commerce listings with consistent brand spelling.
    """
    # Mirror `.env` into the environment before any config is resolved
    load_dotenv()

    if version:
        console.print(
            f"[bold cyan]listing-writer[/bold cyan] version {_read_version()}"
        )
        raise typer.Exit(EXIT_SUCCESS)

    if ctx.invoked_subcommand is None:
        console.print("[yellow]Use --help to see available commands[/yellow]")
        console.print()
        console.print("Commands:")
        console.print("  generate      Draft a listing and canonicalize its brand")
        console.print("  canonicalize  Rewrite brand mentions in an existing listing")
        console.print("  validate      Validate configuration without calling the API")


def _read_version() -> str:
    """Read version from package metadata."""
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("listing-writer")
    except PackageNotFoundError:
        # Package metadata is unavailable when running from a source checkout
        return "0.1.0"


if __name__ == "__main__":
    app()
