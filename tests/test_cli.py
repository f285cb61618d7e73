import json

import pytest
from typer.testing import CliRunner

from lisk_sdk.cli import run as cli_run
from lisk_sdk.client import LiskClient
from lisk_sdk.version import __version__

import lisk_sdk.cli.main as cli_main

from conftest import ScriptedTransport

runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("NODE", "TESTNET", "SSL", "PORT", "NETHASH", "PEERS", "RANDOM_PEER", "LOG_LEVEL"):
        monkeypatch.delenv(f"LISK_{key}", raising=False)


@pytest.fixture
def scripted(monkeypatch):
    transport = ScriptedTransport(lambda r: {"success": True, "height": 10})
    monkeypatch.setattr(
        cli_main, "_client", lambda ctx: LiskClient(ctx.obj.config, transport=transport)
    )
    return transport


def test_version():
    res = runner.invoke(cli_main.app, ["version"])
    assert res.exit_code == 0
    assert res.output.strip() == f"lisk-sdk-py {__version__}"


def test_peers_lists_pools():
    res = runner.invoke(cli_main.app, ["peers"])
    assert res.exit_code == 0, res.output
    data = json.loads(res.output)
    assert set(data) == {"official", "ssl", "testnet"}
    assert data["testnet"] == [{"node": "testnet.lisk.io", "ssl": False, "testnet": True}]


def test_nethash_reflects_flags():
    res = runner.invoke(cli_main.app, ["--testnet", "--node", "localhost", "nethash"])
    assert res.exit_code == 0, res.output
    data = json.loads(res.output)
    assert data["network"] == "testnet"
    assert data["peer"] == "localhost"
    assert data["headers"]["port"] == "7000"


def test_get_sends_params(scripted):
    res = runner.invoke(
        cli_main.app, ["--node", "localhost", "get", "transactions", "-p", "limit=2", "-p", "offset=4"]
    )
    assert res.exit_code == 0, res.output
    assert json.loads(res.output) == {"success": True, "height": 10}
    assert scripted.requests[0].url == "http://localhost:8000/api/transactions?limit=2&offset=4"


def test_account(scripted):
    res = runner.invoke(cli_main.app, ["--node", "localhost", "account", "12345L"])
    assert res.exit_code == 0, res.output
    assert scripted.requests[0].url.endswith("/api/accounts?address=12345L")


def test_get_rejects_malformed_param(scripted):
    res = runner.invoke(cli_main.app, ["get", "blocks", "-p", "nokey"])
    assert res.exit_code != 0
    assert scripted.requests == []


def test_address_is_offline():
    res = runner.invoke(cli_main.app, ["address", "my secret"])
    assert res.exit_code == 0, res.output
    data = json.loads(res.output)
    assert data["address"].endswith("L")
    assert len(data["publicKey"]) == 64


def test_bad_env_port_is_reported(monkeypatch):
    monkeypatch.setenv("LISK_PORT", "abc")
    res = runner.invoke(cli_main.app, ["peers"])
    assert res.exit_code != 0


def test_main_returns_exit_code():
    assert cli_main.main(["version"]) == 0
    assert cli_run(["version"]) == 0
