"""
lisk_sdk.cli.main
=================

`lisk-sdk`: a small command-line interface over `LiskClient`.

Examples
--------
    $ lisk-sdk peers
    $ lisk-sdk --testnet nethash
    $ lisk-sdk get blocks/getHeight
    $ lisk-sdk get transactions -p limit=5 -p offset=10
    $ lisk-sdk --node localhost --port 7000 account 12345L
    $ lisk-sdk address "my secret passphrase"

Configuration
-------------
Flags override the environment (`LISK_*`, see `ClientConfig.from_env`).
Log level: `--log-level` or env `LISK_LOG_LEVEL` (default: WARNING).
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from dataclasses import asdict, dataclass, is_dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional

import typer

from ..client import LiskClient
from ..config import ClientConfig
from ..errors import LiskSdkError
from ..version import version as sdk_version

app = typer.Typer(
    name="lisk-sdk",
    help="Lisk SDK CLI: query nodes with automatic peer failover.",
    no_args_is_help=True,
    add_completion=False,
)

__all__ = ["app", "main", "run"]


@dataclass
class Ctx:
    config: ClientConfig


def _jsonable(obj: Any) -> Any:
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    return str(obj)


def _print_json(obj: Any) -> None:
    typer.echo(json.dumps(obj, indent=2, ensure_ascii=False, default=_jsonable))


def _parse_params(pairs: List[str]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"expected key=value, got {pair!r}")
        out[key.strip()] = value
    return out


def _client(ctx: typer.Context) -> LiskClient:
    c: Ctx = ctx.obj
    return LiskClient(c.config)


def _run(ctx: typer.Context, call: Callable[[LiskClient], Awaitable[Any]]) -> Any:
    async def _go() -> Any:
        async with _client(ctx) as client:
            return await call(client)

    return asyncio.run(_go())


@app.callback()
def _root(
    ctx: typer.Context,
    node: Optional[str] = typer.Option(None, "--node", help="Pin a node host."),
    testnet: Optional[bool] = typer.Option(None, "--testnet/--mainnet", help="Target network."),
    ssl: Optional[bool] = typer.Option(None, "--ssl/--no-ssl", help="Use https."),
    port: Optional[str] = typer.Option(None, "--port", help="Node port ('' for scheme default)."),
    nethash: Optional[str] = typer.Option(None, "--nethash", help="Custom network hash."),
    random_peer: Optional[bool] = typer.Option(
        None, "--random-peer/--no-random-peer", help="Fail over to pool peers."
    ),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="HTTP timeout in seconds."),
    log_level: str = typer.Option("WARNING", "--log-level", envvar="LISK_LOG_LEVEL", help="Logging level."),
) -> None:
    """
    Build the effective configuration for this CLI process.
    """
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        config = ClientConfig.with_overrides(
            ClientConfig.from_env(),
            node=node,
            testnet=testnet,
            ssl=ssl,
            port=port,
            nethash=nethash,
            random_peer=random_peer,
            timeout=timeout,
        )
    except LiskSdkError as e:
        raise typer.BadParameter(str(e)) from e
    ctx.obj = Ctx(config=config)


@app.command("version")
def version() -> None:
    """Print the SDK CLI version."""
    typer.echo(sdk_version())


@app.command("peers")
def peers(ctx: typer.Context) -> None:
    """List the configured peer pools."""
    _print_json(_client(ctx).list_peers())


@app.command("nethash")
def nethash(ctx: typer.Context) -> None:
    """Show the network identity headers sent with every request."""
    client = _client(ctx)
    _print_json(
        {
            "network": client.identity.network.value,
            "peer": client.current_peer,
            "headers": client.session.headers(),
        }
    )


@app.command("get")
def get(
    ctx: typer.Context,
    resource: str = typer.Argument(..., help="API resource, e.g. blocks/getHeight"),
    param: List[str] = typer.Option([], "--param", "-p", help="Query parameter key=value (repeatable)."),
) -> None:
    """GET an arbitrary API resource."""
    params = _parse_params(param)
    _print_json(_run(ctx, lambda c: c.send_request("GET", resource, params)))


@app.command("account")
def account(
    ctx: typer.Context,
    address: str = typer.Argument(..., help="Account address, e.g. 12345L"),
) -> None:
    """Fetch an account by address."""
    _print_json(_run(ctx, lambda c: c.get_account(address)))


@app.command("address")
def address(
    ctx: typer.Context,
    secret: str = typer.Argument(..., help="Account secret passphrase"),
) -> None:
    """Derive the address and public key for a secret (offline)."""
    _print_json(_client(ctx).get_address_from_secret(secret))


# --- Entrypoints --------------------------------------------------------------


def main(argv: Optional[list[str]] = None) -> int:
    """
    Run the CLI. Returns an integer exit code.
    """
    try:
        app(prog_name="lisk-sdk", standalone_mode=False, args=argv)
        return 0
    except typer.Exit as e:
        return int(e.exit_code)
    except Exception as e:
        typer.echo(f"error: {e}", err=True)
        return 1


def run(argv: Optional[list[str]] = None) -> int:
    """Alias for :func:`main`."""
    return main(argv)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
