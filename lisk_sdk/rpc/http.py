"""
HTTP transport (async) for the node API.

The dispatcher only needs something that turns a `RequestDescriptor` into a
parsed JSON body, or raises `TransportError`. `HttpxTransport` does that over
`httpx.AsyncClient`; tests and embedders can pass any object implementing
the `Transport` protocol.

Example:
    async with HttpxTransport(timeout=5.0) as transport:
        body = await transport.send(request)
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, runtime_checkable

import httpx

from ..errors import TransportError
from .request import RequestDescriptor

log = logging.getLogger(__name__)

__all__ = ["Transport", "HttpxTransport"]


@runtime_checkable
class Transport(Protocol):
    async def send(self, request: RequestDescriptor) -> Any:
        """Return the parsed response body or raise TransportError."""
        ...


class HttpxTransport:
    """
    `Transport` backed by `httpx.AsyncClient`.

    Non-2xx statuses, timeouts, connection failures, malformed URLs and
    non-JSON bodies all surface as `TransportError`. A client passed in is
    borrowed, not closed.
    """

    def __init__(
        self,
        *,
        timeout: float = 10.0,
        user_agent: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._timeout = timeout
        self._user_agent = user_agent
        self._client = client
        self._owns_client = client is None

    # ---------- lifecycle ----------

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            headers = {"Accept": "application/json"}
            if self._user_agent:
                headers["User-Agent"] = self._user_agent
            self._client = httpx.AsyncClient(timeout=self._timeout, headers=headers)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpxTransport":
        self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # ---------- transport ----------

    async def send(self, request: RequestDescriptor) -> Any:
        client = self._ensure_client()
        kwargs: dict = {"headers": request.headers}
        if request.has_body:
            kwargs["json"] = request.body
        try:
            resp = await client.request(request.method, request.url, **kwargs)
        except httpx.TimeoutException as exc:
            raise TransportError("request timed out", url=request.url) from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"network error: {exc}", url=request.url) from exc
        except (httpx.InvalidURL, ValueError) as exc:
            # bad host or port (e.g. "node:7000" plus a port), or IDNA failure
            raise TransportError("invalid request URL", url=request.url) from exc

        log.debug("%s %s -> %s", request.method, request.url, resp.status_code)
        if not resp.is_success:
            raise TransportError(
                "unexpected HTTP status",
                url=request.url,
                status=resp.status_code,
                body=resp.text[:256],
            )
        try:
            return resp.json()
        except ValueError as exc:
            raise TransportError(
                "non-JSON response from node",
                url=request.url,
                status=resp.status_code,
                body=resp.text[:256],
            ) from exc
