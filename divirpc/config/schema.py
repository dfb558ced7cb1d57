"""Pydantic models for divirpc client configuration."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 51473

Scheme = Literal["http", "https"]
LogPresetName = Literal["none", "normal", "debug"]


class ClientConfig(BaseModel):
    """Connection settings for one RpcClient.

    Immutable once constructed; each client owns its own instance.

    Example config.json:
        {
            "host": "10.0.0.5",
            "port": 51473,
            "username": "divi",
            "secret": "hunter2",
            "scheme": "https",
            "verify_tls": false
        }
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    host: str = DEFAULT_HOST
    """Daemon host name or address."""

    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    """Daemon RPC port."""

    username: str = "user"
    """RPC username (falls back to RPC_USER when loaded through load_config)."""

    secret: str = Field(default="pass", repr=False)
    """RPC password (falls back to RPC_PASS when loaded through load_config)."""

    scheme: Scheme = "http"
    """Plaintext ("http") or TLS ("https") transport."""

    verify_tls: bool = True
    """Validate the server certificate for https."""

    keep_alive: bool = True
    """Reuse one HTTP connection across calls."""

    timeout: float | None = Field(default=None, gt=0)
    """Request timeout in seconds. None keeps the HTTP client's default."""

    log_preset: LogPresetName | None = None
    """Logger preset applied when the client is built: none, normal or debug.
    None leaves the divirpc loggers as the application configured them."""

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        """Reject empty hosts."""
        v = v.strip()
        if not v:
            raise ValueError("host must not be empty")
        return v

    @property
    def base_url(self) -> str:
        """Endpoint URL for every request (always the root path)."""
        return f"{self.scheme}://{self.host}:{self.port}/"
