"""Async client for the Divi daemon's JSON-RPC interface."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Coroutine
from typing import Any

import httpx

from divirpc.config.loader import load_config
from divirpc.config.schema import ClientConfig
from divirpc.core.errors import BatchError
from divirpc.core.log import configure_logging
from divirpc.rpc.batch import BatchCollector
from divirpc.rpc.catalogue import MethodDescriptor, bind_catalogue, get_descriptor
from divirpc.rpc.dispatcher import Callback, Dispatcher, complete, split_callback
from divirpc.rpc.protocol import build_request
from divirpc.rpc.transport import HttpTransport
from divirpc.rpc.types import Response

logger = logging.getLogger(__name__)


@bind_catalogue
class RpcClient:
    """Async client with one coroutine method per daemon RPC.

    Usage:
        async with RpcClient(host="127.0.0.1", port=51473) as client:
            height = await client.getblockcount()
            block = await client.getblock(await client.getblockhash(height), True)

    Every catalogue method takes its declared positional arguments plus an
    optional completion handler, either as ``callback=`` or as a trailing
    callable:

        await client.getblockcount(lambda err, result: print(err, result))

    Without a handler, failures raise a DiviRpcError subclass. With one, the
    handler receives ``(error, result)`` and nothing is raised.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        **overrides: Any,
    ) -> None:
        """Initialize the client.

        Args:
            config: Complete connection settings. If None, settings are built
                by load_config() from ``overrides``, $DIVIRPC_CONFIG and the
                RPC_USER/RPC_PASS environment variables.
            transport: Optional httpx transport override (tests use httpx.MockTransport).
            **overrides: ClientConfig fields (host, port, username, secret, ...).
                Not allowed together with ``config``.

        Raises:
            ConfigError: If the settings are invalid.
            TypeError: If both config and overrides are given.
        """
        if config is not None and overrides:
            raise TypeError("Pass either config or keyword overrides, not both")
        self._config = config if config is not None else load_config(**overrides)
        if self._config.log_preset is not None:
            configure_logging(self._config.log_preset)
        self._dispatcher = Dispatcher(HttpTransport(self._config, transport=transport))
        self._batch_open = False
        logger.debug("RpcClient initialized: url=%s", self._config.base_url)

    @classmethod
    def _make_call(
        cls, descriptor: MethodDescriptor
    ) -> Callable[..., Coroutine[Any, Any, Any]]:
        async def call(self: RpcClient, *args: Any, callback: Callback | None = None) -> Any:
            return await self._invoke(descriptor, args, callback)

        return call

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def __aenter__(self) -> RpcClient:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release the underlying HTTP connection."""
        await self._dispatcher.transport.aclose()

    async def _invoke(
        self,
        descriptor: MethodDescriptor,
        args: tuple[Any, ...],
        callback: Callback | None,
    ) -> Any:
        params, callback = split_callback(descriptor.arity, args, callback)
        request = build_request(descriptor, params)
        outcome = await self._dispatcher.execute(request)
        return await complete(outcome, callback)

    async def call(self, method: str, *args: Any, callback: Callback | None = None) -> Any:
        """Call a catalogue method by name.

        Raises:
            UnknownMethodError: If the method is not in the catalogue.
        """
        return await self._invoke(get_descriptor(method), args, callback)

    # Batching

    def _release_batch(self) -> None:
        self._batch_open = False

    def batch(self, callback: Callback | None = None) -> BatchCollector:
        """Open a batch on this client.

        Args:
            callback: Optional ``callback(error, results)`` run after the exchange.

        Returns:
            A BatchCollector; use it as an async context manager or call submit().

        Raises:
            BatchError: If a batch is already open on this client.
        """
        if self._batch_open:
            raise BatchError("A batch is already open on this client")
        self._batch_open = True
        return BatchCollector(self._dispatcher, self._release_batch, callback)

    async def run_batch(
        self,
        build: Callable[[BatchCollector], Any],
        callback: Callback | None = None,
    ) -> list[Response] | None:
        """Collect calls with ``build`` and send them in one exchange.

        Args:
            build: Called with the collector; may be sync or async.
            callback: Optional ``callback(error, results)``.

        Returns:
            Responses in call order (None if the exchange failed and a callback was given).
        """
        collector = self.batch(callback)
        try:
            built = build(collector)
            if inspect.isawaitable(built):
                await built
        except BaseException:
            collector.discard()
            raise
        return await collector.submit()
