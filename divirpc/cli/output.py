"""Rich-based output utilities for the divirpc CLI."""

import json
from collections.abc import Iterable
from typing import Any

from rich.console import Console
from rich.markup import escape as rich_escape
from rich.table import Table

from divirpc.rpc.catalogue import MethodDescriptor

# stdout carries results only; diagnostics go to stderr
console = Console()
err_console = Console(stderr=True)


def print_json(data: Any) -> None:
    """Print data as formatted JSON to stdout (unwrapped, so it stays parseable)."""
    print(json.dumps(data, indent=2))


def print_error(message: str) -> None:
    """Print an error message in red to stderr."""
    err_console.print(f"[bold red]Error:[/bold red] {rich_escape(message)}", highlight=False)


def print_methods(descriptors: Iterable[MethodDescriptor]) -> None:
    """Print catalogue entries as a table."""
    table = Table(title="Divi RPC methods")
    table.add_column("Method", style="cyan", no_wrap=True)
    table.add_column("Arity", justify="right")
    table.add_column("Parameters")
    for descriptor in sorted(descriptors, key=lambda d: d.name):
        table.add_row(descriptor.name, str(descriptor.arity), descriptor.signature or "-")
    console.print(table)
