"""
Request construction for the node HTTP API.

A `RequestDescriptor` fully determines what the transport sends. It is built
fresh for every attempt from the session's current peer, port, SSL flag and
network identity headers.

    GET  -> http(s)://host[:port]/api/<resource>[?<query>]   body {}
    POST -> http(s)://host[:port]/api/<resource>             body <params>
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from ..utils.query import serialise_http_data, trim

__all__ = [
    "GET",
    "POST",
    "RequestDescriptor",
    "url_prefix",
    "full_url",
    "build_request",
    "build_peer_request",
]

GET = "GET"
POST = "POST"


@dataclass(frozen=True)
class RequestDescriptor:
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Dict[str, Any] = field(default_factory=dict)

    @property
    def has_body(self) -> bool:
        return self.method != GET


def url_prefix(ssl: bool) -> str:
    return "https" if ssl else "http"


def full_url(peer: str, port: Optional[str], ssl: bool) -> str:
    """Scheme and authority; the port is omitted when empty."""
    node = f"{peer}:{port}" if port else peer
    return f"{url_prefix(ssl)}://{node}"


def build_request(
    method: Optional[str],
    resource: str,
    params: Optional[Mapping[str, Any]] = None,
    *,
    peer: str,
    port: Optional[str],
    ssl: bool,
    headers: Mapping[str, str],
) -> RequestDescriptor:
    method = (method or GET).upper()
    params = params or {}
    url = f"{full_url(peer, port, ssl)}/api/{resource}"
    if method == GET:
        if params:
            url += serialise_http_data(params)
        body: Dict[str, Any] = {}
    else:
        body = trim(params)
    return RequestDescriptor(method=method, url=url, headers=dict(headers), body=body)


def build_peer_request(
    resource: str,
    params: Mapping[str, Any],
    *,
    peer: str,
    port: Optional[str],
    ssl: bool,
    headers: Mapping[str, str],
) -> RequestDescriptor:
    """POST to the peer-to-peer surface (``/peer/<resource>``), body untrimmed."""
    return RequestDescriptor(
        method=POST,
        url=f"{full_url(peer, port, ssl)}/peer/{resource}",
        headers=dict(headers),
        body=dict(params),
    )
