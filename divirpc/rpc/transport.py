"""HTTP transport: one authenticated POST per exchange."""

from __future__ import annotations

import base64
import logging
from typing import Any

import httpx

from divirpc.config.schema import ClientConfig
from divirpc.core.errors import TransportError
from divirpc.rpc.types import RawResponse

logger = logging.getLogger(__name__)


def basic_auth_header(username: str, secret: str) -> str:
    """Build the value of an ``Authorization: Basic`` header."""
    token = base64.b64encode(f"{username}:{secret}".encode()).decode("ascii")
    return f"Basic {token}"


class HttpTransport:
    """Sends serialized JSON-RPC payloads to the daemon over HTTP(S).

    With ``config.keep_alive`` one httpx.AsyncClient is created lazily and
    reused until aclose(). Without it every exchange gets its own client and
    a ``Connection: close`` header.

    No retries: each post() is exactly one HTTP request.
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            config: Connection settings.
            transport: Optional httpx transport override (e.g. httpx.MockTransport).
        """
        self._config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._auth = basic_auth_header(config.username, config.secret)

    @property
    def url(self) -> str:
        return self._config.base_url

    def _client_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"verify": self._config.verify_tls}
        if self._config.timeout is not None:
            kwargs["timeout"] = self._config.timeout
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return kwargs

    def _headers(self, content: bytes) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Content-Length": str(len(content)),
            "Authorization": self._auth,
        }
        if not self._config.keep_alive:
            headers["Connection"] = "close"
        return headers

    async def post(self, payload: str) -> RawResponse:
        """POST a payload to the daemon's root path.

        Args:
            payload: Serialized JSON-RPC request or batch.

        Returns:
            Status code, reason phrase and full body text.

        Raises:
            TransportError: On any network-level failure (DNS, refused, reset, timeout).
        """
        content = payload.encode("utf-8")
        headers = self._headers(content)

        try:
            if self._config.keep_alive:
                if self._client is None:
                    self._client = httpx.AsyncClient(**self._client_kwargs())
                response = await self._client.post(self.url, content=content, headers=headers)
            else:
                async with httpx.AsyncClient(**self._client_kwargs()) as client:
                    response = await client.post(self.url, content=content, headers=headers)
        except httpx.RequestError as e:
            logger.warning("Request to %s failed: %s", self.url, e)
            raise TransportError(f"Request Error: {e}") from e

        logger.debug("HTTP %d from %s (%d bytes)", response.status_code, self.url, len(response.content))
        return RawResponse(
            status_code=response.status_code,
            reason=response.reason_phrase,
            body=response.text,
        )

    async def aclose(self) -> None:
        """Close the shared HTTP client, if one was opened."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
