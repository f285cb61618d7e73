"""
lisk_sdk.cli
============

Command-line interface for the Lisk Python SDK, exposed as the `lisk-sdk`
console script. Typer is only imported when the CLI is actually used.

    >>> from lisk_sdk.cli import run
    >>> run(["peers"])
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, List, Optional

__all__: List[str] = ["run", "app"]

_SUBMODULE = "lisk_sdk.cli.main"


def __getattr__(name: str) -> Any:
    if name == "app":
        return import_module(_SUBMODULE).app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def run(argv: Optional[list[str]] = None) -> int:
    return import_module(_SUBMODULE).main(argv)
