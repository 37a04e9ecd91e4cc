"""
Rich console utilities for dual-mode CLI output.

Provides readable terminal output for humans and structured JSON for
scripts and agents. All output functions adapt to the global output_mode.

Human Mode (--format text):
    - Rich spinner and colored status lines on stderr
    - Listing summary table on stderr
    - The listing JSON itself on stdout (pipe-friendly)

Agent Mode (--format json):
    - One JSON object on stdout: {"status": ..., "listing": ...}
    - No ANSI codes or spinners

Examples:
    >>> output_mode.format = "text"
    >>> with spinner("Generating listing..."):
    ...     listing = asyncio.run(handle_request(payload, client))
    >>> success("Listing generated")
"""

from __future__ import annotations

import json
import sys
from collections.abc import Mapping
from contextlib import contextmanager
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table

PREVIEW_LENGTH = 60


class OutputMode:
    """
    Output mode configuration for dual-mode CLI.

    Attributes:
        format: Output format - "text" (human) or "json" (agent)
        _json_buffer: Internal buffer for JSON output in agent mode
    """

    def __init__(self, format_type: str = "text"):
        """
        Initialize output mode.

        Raises:
            ValueError: If format_type is not "text" or "json"
        """
        if format_type not in ["text", "json"]:
            raise ValueError(f"Invalid format: {format_type}. Must be 'text' or 'json'")

        self.format = format_type
        self._json_buffer: dict[str, Any] = {}

    def is_human(self) -> bool:
        """Return True if format is "text"."""
        return self.format == "text"

    def is_agent(self) -> bool:
        """Return True if format is "json"."""
        return self.format == "json"

    def add_json(self, key: str, value: Any) -> None:
        """Add key-value pair to the JSON buffer (flushed by flush_json)."""
        self._json_buffer[key] = value

    def flush_json(self) -> None:
        """
        Output buffered JSON to stdout and clear buffer.

        Only outputs in agent mode. In human mode, this is a no-op.
        """
        if self.is_agent() and self._json_buffer:
            json.dump(self._json_buffer, sys.stdout, indent=2, ensure_ascii=False)
            sys.stdout.write("\n")
            sys.stdout.flush()
            self._json_buffer.clear()


# Global output mode instance (set by CLI flags)
output_mode = OutputMode()

# stdout carries the listing JSON; status output goes to stderr
console = Console()
console_err = Console(stderr=True)


@contextmanager
def spinner(message: str):
    """
    Show a spinner on stderr during an operation (human mode only).

    Yields:
        Status context in human mode, None in agent mode
    """
    if output_mode.is_human():
        with console_err.status(f"[bold blue]{message}", spinner="dots") as status:
            yield status
    else:
        yield None


def success(message: str) -> None:
    """Print a success message (human) or buffer status=success (agent)."""
    if output_mode.is_human():
        console_err.print(f"[green]✓[/green] {message}")
    elif output_mode.is_agent():
        output_mode.add_json("status", "success")
        output_mode.add_json("message", message)


def error(message: str) -> None:
    """Print an error message (human) or buffer status=error (agent)."""
    if output_mode.is_human():
        console_err.print(f"[red]✗[/red] {message}", style="red")
    elif output_mode.is_agent():
        output_mode.add_json("status", "error")
        output_mode.add_json("error", message)


def warning(message: str) -> None:
    """Print a warning message (human) or buffer it (agent)."""
    if output_mode.is_human():
        console_err.print(f"[yellow]⚠[/yellow] {message}", style="yellow")
    elif output_mode.is_agent():
        output_mode.add_json("warning", message)


def info(message: str) -> None:
    """Print an info message (human mode only)."""
    if output_mode.is_human():
        console_err.print(f"[blue]ℹ[/blue] {message}")


def _preview(value: Any) -> str:
    text = " ".join(str(value).split())
    if len(text) > PREVIEW_LENGTH:
        return text[: PREVIEW_LENGTH - 1] + "…"
    return text


def print_listing_summary(listing: Mapping[str, Any], canonical_brand: str) -> None:
    """
    Print a table of the generated text fields with brand mention counts.

    Human mode: Rich table on stderr
    Agent mode: Silent (the listing itself is emitted as JSON)

    Args:
        listing: Listing fields (top-level string values are shown)
        canonical_brand: Canonical brand, counted verbatim in each field
    """
    if not output_mode.is_human():
        return

    table = Table(title=f"Listing ({canonical_brand or 'no brand'})", box=box.ROUNDED)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Chars", justify="right")
    table.add_column("Brand", justify="right", style="magenta")
    table.add_column("Preview")

    for field, value in listing.items():
        if not isinstance(value, str):
            continue
        mentions = value.count(canonical_brand) if canonical_brand else 0
        table.add_row(field, str(len(value)), str(mentions), _preview(value))

    console_err.print(table)


def print_json_document(document: Any) -> None:
    """Write a JSON document to stdout (both modes, no Rich markup)."""
    json.dump(document, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    sys.stdout.flush()
