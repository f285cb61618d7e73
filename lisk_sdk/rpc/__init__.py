"""
lisk_sdk.rpc
------------

Request construction and HTTP transport.

This package exposes:
- RequestDescriptor / build_request: what gets sent (see .request)
- Transport / HttpxTransport: how it gets sent (see .http)
"""

from __future__ import annotations

from .http import HttpxTransport, Transport
from .request import GET, POST, RequestDescriptor, build_peer_request, build_request

__all__ = [
    "GET",
    "POST",
    "RequestDescriptor",
    "build_request",
    "build_peer_request",
    "Transport",
    "HttpxTransport",
]
