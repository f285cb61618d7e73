"""
Utility helpers for the Python SDK.

Re-exports:
- query: parameter trimming and query-string serialization
"""

from .query import serialise_http_data, to_query_string, trim

__all__ = [
    "trim",
    "to_query_string",
    "serialise_http_data",
]
