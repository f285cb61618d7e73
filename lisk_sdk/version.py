"""
Version helpers for the Lisk Python SDK.
"""

from __future__ import annotations

# Bump this when publishing
__version__ = "0.4.0"


def version() -> str:
    """Human-friendly string, e.g. 'lisk-sdk-py 0.4.0'."""
    return f"lisk-sdk-py {__version__}"


__all__ = ["__version__", "version"]
