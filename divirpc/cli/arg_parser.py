"""Argument parsing for the divirpc CLI."""

import argparse
from pathlib import Path


def add_connection_args(parser: argparse.ArgumentParser) -> None:
    """Add daemon connection arguments to a parser.

    Every default is None so that unset flags fall through to the config
    file and environment in load_config().
    """
    group = parser.add_argument_group("connection")
    group.add_argument("--host", help="Daemon host (default: 127.0.0.1)")
    group.add_argument("--port", "-p", type=int, help="Daemon RPC port (default: 51473)")
    group.add_argument(
        "--user",
        dest="username",
        help="RPC username (default: $RPC_USER or 'user')",
    )
    group.add_argument(
        "--password",
        dest="secret",
        help="RPC password (default: $RPC_PASS or 'pass')",
    )
    group.add_argument(
        "--https",
        dest="scheme",
        action="store_const",
        const="https",
        help="Connect over TLS",
    )
    group.add_argument(
        "--insecure",
        dest="verify_tls",
        action="store_const",
        const=False,
        help="Skip TLS certificate validation",
    )
    group.add_argument(
        "--no-keep-alive",
        dest="keep_alive",
        action="store_const",
        const=False,
        help="Open a new connection for every request",
    )
    group.add_argument("--timeout", type=float, help="Request timeout in seconds")
    group.add_argument("--config", type=Path, help="Path to a JSON config file")
    group.add_argument(
        "--log",
        dest="log_preset",
        choices=["none", "normal", "debug"],
        help="Logging preset (default: normal)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level parser."""
    parser = argparse.ArgumentParser(
        prog="divirpc",
        description="Call Divi daemon JSON-RPC methods",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser(
        "methods",
        help="List the supported RPC methods and their parameters",
    )

    call_parser = subparsers.add_parser(
        "call",
        help="Call one RPC method and print its result as JSON",
    )
    call_parser.add_argument("method", help="RPC method name, e.g. getblockcount")
    call_parser.add_argument(
        "params",
        nargs="*",
        help="Positional parameters; JSON values are decoded, anything else is a string",
    )
    add_connection_args(call_parser)

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return build_parser().parse_args(argv)
