"""Command-line interface for divirpc."""

from divirpc.cli.commands import main

__all__ = ["main"]
