"""
Typed error classes for the Python SDK.

Transport failures never escape `LiskClient.send_request`: the dispatcher turns
them into a failover or a structured failure object. `ParameterError` and
`ConfigError` signal caller mistakes and propagate normally. All of them can
be caught through the base `LiskSdkError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

__all__ = [
    "LiskSdkError",
    "TransportError",
    "ParameterError",
    "ConfigError",
]


class LiskSdkError(Exception):
    """Base class for all SDK errors."""


@dataclass(slots=True)
class TransportError(LiskSdkError):
    """
    Raised by a transport when a request could not produce a usable body.

    Fields:
      - message: human-readable description
      - url: request URL, if known
      - status: HTTP status for non-2xx responses
      - body: leading part of the response text for diagnostics
    """

    message: str
    url: Optional[str] = None
    status: Optional[int] = None
    body: Optional[str] = None

    def __str__(self) -> str:
        parts = [self.message]
        if self.status is not None:
            parts.append(f"http={self.status}")
        if self.url:
            parts.append(f"url={self.url}")
        return " ".join(parts)


@dataclass(slots=True)
class ParameterError(LiskSdkError):
    """Raised when a request parameter holds an unusable value (None or NaN)."""

    parameter: str
    value: Any = None

    def __str__(self) -> str:
        return f'parameter value "{self.parameter}" should not be {self.value!r}'


class ConfigError(LiskSdkError, ValueError):
    """Raised for malformed configuration values."""
