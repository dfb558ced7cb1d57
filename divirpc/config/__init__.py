"""Configuration loading and validation."""

from divirpc.config.loader import load_config
from divirpc.config.schema import DEFAULT_HOST, DEFAULT_PORT, ClientConfig

__all__ = [
    "ClientConfig",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "load_config",
]
