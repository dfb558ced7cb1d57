"""Core errors and logging setup."""

from divirpc.core.errors import (
    ApplicationError,
    ArityError,
    AuthError,
    BatchError,
    CatalogueError,
    ConfigError,
    DiviRpcError,
    OverloadError,
    ProtocolError,
    RpcError,
    TransportError,
    UnknownMethodError,
)
from divirpc.core.log import configure_logging

__all__ = [
    "ApplicationError",
    "ArityError",
    "AuthError",
    "BatchError",
    "CatalogueError",
    "ConfigError",
    "DiviRpcError",
    "OverloadError",
    "ProtocolError",
    "RpcError",
    "TransportError",
    "UnknownMethodError",
    "configure_logging",
]
