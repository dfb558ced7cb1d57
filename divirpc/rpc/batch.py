"""Batch mode: collect several calls and send them in one HTTP exchange.

Usage:
    async with client.batch() as batch:
        batch.getblockcount()
        batch.getblockhash(0)
        batch.getbestblockhash()
    count, genesis, best = (r.unwrap() for r in batch.results)

Calls on the collector only queue a request and return None. The queued
requests go out as one JSON array when the ``async with`` block exits
normally, or when submit() is awaited.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from divirpc.core.errors import BatchError, DiviRpcError
from divirpc.rpc.catalogue import MethodDescriptor, bind_catalogue
from divirpc.rpc.dispatcher import Callback, Dispatcher, complete, split_callback
from divirpc.rpc.protocol import build_request, new_request_id
from divirpc.rpc.types import Outcome, Request, Response

logger = logging.getLogger(__name__)


class BatchContext:
    """Ordered pending requests plus an open/closed flag.

    Correlation ids are unique within the context. Once closed, the context
    accepts no more requests.
    """

    def __init__(self) -> None:
        self._requests: list[Request] = []
        self._ids: set[int] = set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def requests(self) -> tuple[Request, ...]:
        return tuple(self._requests)

    def __len__(self) -> int:
        return len(self._requests)

    def append(self, descriptor: MethodDescriptor, args: Sequence[Any]) -> Request:
        """Build a request with a batch-unique id and queue it.

        Raises:
            BatchError: If the context is already closed.
            ArityError: If too few arguments were supplied.
        """
        if self._closed:
            raise BatchError(f"Cannot add {descriptor.name}: batch is already closed")
        request = build_request(descriptor, args, request_id=new_request_id(self._ids))
        self._ids.add(request.id)
        self._requests.append(request)
        return request

    def close(self) -> tuple[Request, ...]:
        """Close the context and return its requests.

        Raises:
            BatchError: If the context was already closed.
        """
        if self._closed:
            raise BatchError("Batch is already closed")
        self._closed = True
        return tuple(self._requests)


@bind_catalogue
class BatchCollector:
    """Batch-building handle returned by RpcClient.batch().

    Has one synchronous method per catalogue entry. Each queues a request
    instead of performing an exchange.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        release: Callable[[], None],
        callback: Callback | None = None,
    ) -> None:
        """Initialize the collector.

        Args:
            dispatcher: Dispatcher used for the single batch exchange.
            release: Called once when the batch stops occupying its client.
            callback: Optional ``callback(error, results)`` for the batch as a whole.
        """
        self._dispatcher = dispatcher
        self._release = release
        self._released = False
        self._callback = callback
        self._context = BatchContext()
        self._outcome: Outcome | None = None

    @classmethod
    def _make_call(cls, descriptor: MethodDescriptor) -> Callable[..., None]:
        def call(self: BatchCollector, *args: Any) -> None:
            params, handler = split_callback(descriptor.arity, args, None)
            if handler is not None:
                logger.debug("Ignoring per-call handler for %s inside a batch", descriptor.name)
            self._context.append(descriptor, params)

        return call

    @property
    def context(self) -> BatchContext:
        return self._context

    @property
    def results(self) -> list[Response] | None:
        """Responses in submission order, or None before a successful submit."""
        if self._outcome is None or not self._outcome.ok:
            return None
        return self._outcome.value

    @property
    def error(self) -> DiviRpcError | None:
        """The batch exchange's error, if it failed."""
        return self._outcome.error if self._outcome is not None else None

    def _finish(self) -> None:
        if not self._released:
            self._released = True
            self._release()

    async def submit(self) -> list[Response] | None:
        """Close the batch and send it as one exchange.

        An empty batch sends nothing and yields an empty list.

        Returns:
            Responses in submission order. With a callback, None if the exchange failed.

        Raises:
            BatchError: If the batch was already submitted or discarded.
            RpcError: If the exchange failed and no callback was given.
        """
        requests = self._context.close()
        try:
            if requests:
                outcome = await self._dispatcher.execute_batch(requests)
            else:
                logger.debug("Empty batch, nothing to send")
                outcome = Outcome.success([])
        finally:
            self._finish()

        self._outcome = outcome
        return await complete(outcome, self._callback)

    def discard(self) -> None:
        """Close the batch without sending anything."""
        if not self._context.closed:
            self._context.close()
            logger.debug("Batch discarded with %d pending requests", len(self._context))
        self._finish()

    async def __aenter__(self) -> BatchCollector:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if exc_type is not None:
            self.discard()
            return
        if not self._context.closed:
            await self.submit()
