"""
Query-string helpers for the node HTTP API.

- `trim` normalizes request parameters: strips whitespace from strings (keys
  included), walks nested mappings and sequences, and renders integers as
  decimal strings.
- `to_query_string` serializes a flat mapping into ``k1=v1&k2=v2``. Keys are
  encoded strictly (component encoding) while values keep URI-reserved
  characters, matching what the node expects.

Example:
    >>> to_query_string(trim({"obj": " myval", "key": "my2ndval "}))
    'obj=myval&key=my2ndval'
"""

from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import quote

__all__ = ["trim", "to_query_string", "serialise_http_data"]

# Characters left untouched by component encoding (besides alphanumerics).
_COMPONENT_SAFE = "-_.!~*'()"
# URI encoding additionally keeps reserved characters and '#'.
_URI_SAFE = _COMPONENT_SAFE + ";,/?:@&=+$#"


def _trim_scalar(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return value


def trim(value: Any) -> Any:
    """
    Return a trimmed copy of `value`. The input is never mutated.
    """
    if isinstance(value, Mapping):
        return {trim(k): trim(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [trim(v) for v in value]
    return _trim_scalar(value)


def _render(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (list, tuple)):
        return ",".join(_render(v) for v in value)
    return str(value)


def to_query_string(params: Mapping[str, Any]) -> str:
    """Serialize `params` preserving insertion order; empty mapping -> ""."""
    parts = [
        f"{quote(_render(k), safe=_COMPONENT_SAFE)}={quote(_render(v), safe=_URI_SAFE)}"
        for k, v in params.items()
    ]
    return "&".join(parts)


def serialise_http_data(params: Mapping[str, Any]) -> str:
    """Trim and serialize `params` as a ``?``-prefixed query string."""
    return "?" + to_query_string(trim(params))
