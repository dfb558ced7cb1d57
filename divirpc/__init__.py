"""divirpc - async JSON-RPC client for the Divi daemon."""

from divirpc.client import RpcClient
from divirpc.config import ClientConfig, load_config
from divirpc.core.errors import (
    ApplicationError,
    ArityError,
    AuthError,
    BatchError,
    ConfigError,
    DiviRpcError,
    OverloadError,
    ProtocolError,
    RpcError,
    TransportError,
    UnknownMethodError,
)
from divirpc.core.log import configure_logging

__version__ = "0.1.0"

__all__ = [
    "RpcClient",
    "ClientConfig",
    "load_config",
    "configure_logging",
    "DiviRpcError",
    "ConfigError",
    "ArityError",
    "BatchError",
    "UnknownMethodError",
    "RpcError",
    "TransportError",
    "AuthError",
    "OverloadError",
    "ProtocolError",
    "ApplicationError",
]
