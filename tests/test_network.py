from lisk_sdk.network import (
    CUSTOM_VERSION,
    MAINNET,
    MAINNET_NETHASH,
    TESTNET,
    TESTNET_NETHASH,
    Network,
    network_for_hash,
    resolve_identity,
)


def test_flag_selects_well_known_identity():
    assert resolve_identity(False) is MAINNET
    assert resolve_identity(True) is TESTNET
    assert MAINNET.nethash == MAINNET.broadhash == MAINNET_NETHASH
    assert TESTNET.nethash == TESTNET.broadhash == TESTNET_NETHASH


def test_headers_carry_identity_and_port():
    headers = MAINNET.headers("8000")
    assert headers == {
        "Content-Type": "application/json",
        "nethash": MAINNET_NETHASH,
        "broadhash": MAINNET_NETHASH,
        "os": "lisk-js-api",
        "version": "1.0.0",
        "minVersion": ">=0.5.0",
        "port": "8000",
    }
    assert TESTNET.headers(None)["port"] == ""
    assert TESTNET.headers(7000)["port"] == "7000"


def test_custom_hash_forces_placeholder_version():
    ident = resolve_identity(False, "123abc")
    assert ident.network is Network.CUSTOM
    assert ident.is_custom
    assert ident.nethash == "123abc"
    assert ident.broadhash == MAINNET_NETHASH
    assert ident.version == CUSTOM_VERSION


def test_known_explicit_hash_keeps_its_network():
    ident = resolve_identity(False, TESTNET_NETHASH)
    assert ident.network is Network.TESTNET
    assert not ident.is_custom
    assert ident.version == CUSTOM_VERSION


def test_network_for_hash():
    assert network_for_hash(None) is None
    assert network_for_hash("") is None
    assert network_for_hash(MAINNET_NETHASH) is Network.MAINNET
    assert network_for_hash(TESTNET_NETHASH.upper()) is Network.TESTNET
    assert network_for_hash("deadbeef") is Network.CUSTOM
