"""
Entry point for running Listing Writer as a module.

Enables execution via:
    python -m listing_writer [command] [options]

This is equivalent to running the installed CLI:
    listing-writer [command] [options]

Examples:
    python -m listing_writer --help
    python -m listing_writer generate --request examples/listing.request.json
    python -m listing_writer canonicalize -d listing.json -b "nike"
    python -m listing_writer validate --config examples/listing.config.yaml
"""

from listing_writer.cli import app

if __name__ == "__main__":
    app()
