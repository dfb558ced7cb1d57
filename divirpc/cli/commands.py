"""CLI commands: thin wrappers around RpcClient.

Each command prints to stdout and returns an exit code:
    divirpc methods                    # list catalogue entries
    divirpc call getblockcount         # call a method, print result as JSON
    divirpc call getblock <hash> true
"""

import argparse
import asyncio
import json
import logging
from typing import Any

from divirpc.cli.arg_parser import parse_args
from divirpc.cli.output import print_error, print_json, print_methods
from divirpc.client import RpcClient
from divirpc.config.loader import load_config
from divirpc.core.errors import DiviRpcError
from divirpc.core.log import configure_logging
from divirpc.rpc.catalogue import CATALOGUE

logger = logging.getLogger(__name__)

_CONNECTION_FIELDS = (
    "host",
    "port",
    "username",
    "secret",
    "scheme",
    "verify_tls",
    "keep_alive",
    "timeout",
    "log_preset",
)


def parse_param(text: str) -> Any:
    """Decode a command-line parameter.

    JSON literals (numbers, true/false/null, arrays, objects, quoted strings)
    are decoded; anything else is passed through as a plain string.
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def cmd_methods() -> int:
    """List catalogue entries."""
    print_methods(CATALOGUE.values())
    return 0


async def cmd_call(args: argparse.Namespace) -> int:
    """Call one method and print its result."""
    overrides = {name: getattr(args, name) for name in _CONNECTION_FIELDS}
    try:
        config = load_config(args.config, **overrides)
        if config.log_preset is None:
            configure_logging("normal")
        params = [parse_param(p) for p in args.params]
        async with RpcClient(config) as client:
            result = await client.call(args.method, *params)
    except DiviRpcError as e:
        print_error(str(e))
        return 1

    print_json(result)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``divirpc`` console script."""
    args = parse_args(argv)
    if args.command == "methods":
        return cmd_methods()
    return asyncio.run(cmd_call(args))
