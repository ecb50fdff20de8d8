"""ProWriter CLI."""

from prowriter.cli.main import cli, main

__all__ = ["cli", "main"]
