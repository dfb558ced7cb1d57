"""JSON-RPC 2.0 types for divirpc."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from divirpc.core.errors import ApplicationError, DiviRpcError


@dataclass(frozen=True)
class Request:
    """JSON-RPC 2.0 request.

    Attributes:
        method: Name of the method to invoke.
        params: Positional parameters, already truncated to the method's arity.
        id: Correlation identifier.
        jsonrpc: Protocol version, always "2.0".
    """

    method: str
    params: list[Any] = field(default_factory=list)
    id: int = 0
    jsonrpc: str = "2.0"


@dataclass(frozen=True)
class Response:
    """JSON-RPC 2.0 response.

    Attributes:
        id: Correlation identifier from the original request.
        result: Result of the method call (meaningful only when error is None).
        error: Daemon-reported error member, or None on success.
    """

    id: int | str | None
    result: Any = None
    error: Any = None

    @property
    def ok(self) -> bool:
        return not self.error

    def unwrap(self) -> Any:
        """Return the result, or raise the daemon's error.

        Raises:
            ApplicationError: If the response carries an error.
        """
        if self.error:
            raise ApplicationError.from_error(self.error)
        return self.result


@dataclass(frozen=True)
class RawResponse:
    """HTTP status line and body as received by the transport."""

    status_code: int
    reason: str
    body: str


@dataclass(frozen=True)
class Outcome:
    """Success or failure of one exchange.

    Exactly one of value/error is meaningful: error is None on success.
    """

    value: Any = None
    error: DiviRpcError | None = None

    @classmethod
    def success(cls, value: Any) -> Outcome:
        return cls(value=value)

    @classmethod
    def failure(cls, error: DiviRpcError) -> Outcome:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the value, or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.value
