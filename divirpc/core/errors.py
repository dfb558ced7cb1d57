"""Typed exception hierarchy for divirpc."""

from __future__ import annotations

from typing import Any


class DiviRpcError(Exception):
    """Base class for all divirpc errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigError(DiviRpcError):
    """Raised for configuration issues (missing file, invalid JSON, validation failure)."""


class CatalogueError(DiviRpcError):
    """Raised when the method catalogue cannot be built or bound."""


class UnknownMethodError(CatalogueError):
    """Raised when a method name is not in the catalogue."""

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Unknown RPC method: {method}")


class ArityError(DiviRpcError):
    """Raised locally when a call supplies fewer arguments than the method declares.

    Never sent over the wire.
    """

    def __init__(self, method: str, required: int, received: int) -> None:
        self.method = method
        self.required = required
        self.received = received
        super().__init__(
            f"Method {method} requires {required} arguments, but got {received}"
        )


class BatchError(DiviRpcError):
    """Raised for batch misuse (nested batches, appending after close)."""


# === Exchange failures ===


class RpcError(DiviRpcError):
    """Base class for failures of an exchange with the daemon."""


class TransportError(RpcError):
    """Network-level failure before any response was received."""


class AuthError(RpcError):
    """The daemon rejected the credentials (HTTP 401/403)."""

    def __init__(self, status_code: int, reason: str) -> None:
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"Connection Rejected: {status_code} {reason}")


class OverloadError(RpcError):
    """The daemon's work queue is full. Back off and retry later.

    status_code is 429 (Too Many Requests), a hint for rate-limit handling.
    """

    status_code = 429

    def __init__(self, message: str = "Work queue depth exceeded") -> None:
        super().__init__(message)


class ProtocolError(RpcError):
    """The response body was not valid JSON or had an unexpected shape."""

    def __init__(self, reason: str, body: str, status_code: int) -> None:
        self.reason = reason
        self.body = body
        self.status_code = status_code
        super().__init__(f"Error Parsing JSON: {reason}")


class ApplicationError(RpcError):
    """The daemon reported a failure inside a well-formed response."""

    def __init__(self, message: str, code: int | None = None, data: Any = None) -> None:
        self.code = code
        self.data = data
        super().__init__(message)

    @classmethod
    def from_error(cls, error: Any) -> ApplicationError:
        """Build from the ``error`` member of a JSON-RPC response.

        Args:
            error: Either a ``{"code", "message", "data"}`` object or a bare value.

        Returns:
            ApplicationError carrying the error's code, message and data.
        """
        if isinstance(error, dict):
            message = error.get("message")
            if not isinstance(message, str):
                message = str(error)
            code = error.get("code")
            return cls(message, code=code if isinstance(code, int) else None, data=error.get("data"))
        return cls(str(error))

    def __str__(self) -> str:
        if self.code is not None:
            return f"RPC error {self.code}: {self.message}"
        return self.message
