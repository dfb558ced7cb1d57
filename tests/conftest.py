"""Shared pytest fixtures and configuration for pytest."""

import json
import logging
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from divirpc.client import RpcClient
from divirpc.config.schema import ClientConfig

Reply = httpx.Response | Callable[[Any], httpx.Response]


class RecordingHandler:
    """httpx.MockTransport handler that records requests and replies from a script.

    ``reply`` is either a fixed httpx.Response or a callable taking the
    decoded JSON payload and returning one.
    """

    def __init__(self, reply: Reply) -> None:
        self.reply = reply
        self.requests: list[httpx.Request] = []

    @property
    def payloads(self) -> list[Any]:
        return [json.loads(r.content) for r in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.reply, httpx.Response):
            return self.reply
        return self.reply(json.loads(request.content))


def _echo_result(result: Any) -> Callable[[Any], httpx.Response]:
    def reply(payload: Any) -> httpx.Response:
        return httpx.Response(200, json={"result": result, "error": None, "id": payload["id"]})

    return reply


@pytest.fixture
def recorder() -> Callable[[Reply], RecordingHandler]:
    """Factory for RecordingHandler instances."""
    return RecordingHandler


@pytest.fixture
def echo_result() -> Callable[[Any], Callable[[Any], httpx.Response]]:
    """Reply builder: success carrying a fixed result and the request's own id."""
    return _echo_result


@pytest.fixture
def config() -> ClientConfig:
    """Client settings matching a default local daemon."""
    return ClientConfig(host="127.0.0.1", port=51473, username="alice", secret="s3cret")


@pytest.fixture
def make_client(config: ClientConfig) -> Callable[..., RpcClient]:
    """Factory for clients whose HTTP traffic goes to a RecordingHandler."""

    def factory(handler: RecordingHandler, **changes: Any) -> RpcClient:
        cfg = config.model_copy(update=changes) if changes else config
        return RpcClient(cfg, transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture(autouse=True)
def reset_divirpc_logger():
    """Undo configure_logging() so caplog sees divirpc records in every test."""
    yield
    root = logging.getLogger("divirpc")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.NOTSET)
    root.propagate = True
