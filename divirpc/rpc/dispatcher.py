"""Request dispatch: build, send, classify.

The Dispatcher never raises for exchange failures. It reports every result
as an Outcome, and the public facade decides whether to raise it or hand it
to a completion handler (see complete()).
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from divirpc.core.errors import DiviRpcError, ProtocolError, RpcError
from divirpc.rpc.protocol import (
    classify_response,
    parse_batch_response,
    parse_response,
    serialize_request,
)
from divirpc.rpc.transport import HttpTransport
from divirpc.rpc.types import Outcome, Request

logger = logging.getLogger(__name__)

# Completion handler: called as handler(error, result); may be sync or async
Callback = Callable[[DiviRpcError | None, Any], Awaitable[None] | None]


class Dispatcher:
    """Sends requests through a transport and classifies the replies.

    Holds no per-call state, so any number of execute() calls may be in
    flight at once.
    """

    def __init__(self, transport: HttpTransport) -> None:
        self._transport = transport

    @property
    def transport(self) -> HttpTransport:
        return self._transport

    async def _exchange(self, payload: Request | Sequence[Request]) -> tuple[Outcome, int]:
        try:
            raw = await self._transport.post(serialize_request(payload))
        except RpcError as e:
            return Outcome.failure(e), 0
        return classify_response(raw.status_code, raw.reason, raw.body), raw.status_code

    async def execute(self, request: Request) -> Outcome:
        """Perform one call and return its result value.

        Returns:
            Outcome with the ``result`` member of the daemon's reply, or the error.
        """
        logger.debug("RPC call: method=%s, id=%s", request.method, request.id)
        outcome, status_code = await self._exchange(request)
        if not outcome.ok:
            logger.warning("RPC %s failed: %s", request.method, outcome.error)
            return outcome

        try:
            response = parse_response(outcome.value, status_code=status_code)
        except ProtocolError as e:
            logger.warning("RPC %s returned an unexpected body: %s", request.method, e)
            return Outcome.failure(e)

        if response.id != request.id:
            logger.debug("Response id %r does not match request id %r", response.id, request.id)
        return Outcome.success(response.result)

    async def execute_batch(self, requests: Sequence[Request]) -> Outcome:
        """Send several requests as one JSON array.

        Returns:
            Outcome with a list of Response in submission order, or the error.
            Per-item daemon errors stay inside their Response.
        """
        logger.debug("RPC batch: %d requests", len(requests))
        outcome, status_code = await self._exchange(list(requests))
        if not outcome.ok:
            logger.warning("RPC batch of %d failed: %s", len(requests), outcome.error)
            return outcome

        try:
            return Outcome.success(
                parse_batch_response(outcome.value, requests, status_code=status_code)
            )
        except ProtocolError as e:
            logger.warning("RPC batch returned an unexpected body: %s", e)
            return Outcome.failure(e)


async def complete(outcome: Outcome, callback: Callback | None) -> Any:
    """Deliver an Outcome at the public boundary.

    Without a callback, the value is returned and a failure is raised. With a
    callback, it is called as ``callback(error, value)`` (and awaited if it
    returns an awaitable). The value is returned, or None on failure.

    Exceptions raised by the callback itself propagate to the caller.
    """
    if callback is None:
        return outcome.unwrap()

    result = callback(outcome.error, outcome.value if outcome.ok else None)
    if inspect.isawaitable(result):
        await result
    return outcome.value if outcome.ok else None


def split_callback(
    arity: int,
    args: tuple[Any, ...],
    callback: Callback | None,
) -> tuple[tuple[Any, ...], Callback | None]:
    """Separate declared arguments from a trailing positional completion handler.

    A callable last argument is the handler when no explicit callback was
    given; it never counts toward the arity. Any other values beyond the
    arity are dropped.
    """
    if callback is None and args and callable(args[-1]):
        callback = args[-1]
        args = args[:-1]
    if len(args) > arity:
        logger.debug("Dropping %d argument(s) beyond declared arity %d", len(args) - arity, arity)
        args = args[:arity]
    return args, callback
