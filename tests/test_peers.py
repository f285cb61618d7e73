from hypothesis import given, strategies as st

from lisk_sdk.config import MAINNET_PEERS, TESTNET_PEERS
from lisk_sdk.peers import PeerDirectory, PeerRecord


def test_default_pools():
    d = PeerDirectory()
    assert d.official == MAINNET_PEERS
    assert d.ssl == MAINNET_PEERS
    assert d.testnet == TESTNET_PEERS
    assert d.banned == []


def test_supplied_peers_replace_every_pool():
    d = PeerDirectory(["a", "b"])
    assert d.official == d.ssl == d.testnet == ("a", "b")
    # empty list means "not supplied"
    assert PeerDirectory([]).official == MAINNET_PEERS


def test_pool_precedence_testnet_over_ssl():
    d = PeerDirectory(mainnet=["m1"], testnet=["t1"])
    assert d.pool(ssl=False, testnet=False) == ("m1",)
    assert d.pool(ssl=True, testnet=False) == ("m1",)
    assert d.pool(ssl=True, testnet=True) == ("t1",)


def test_list_peers_tags_records():
    d = PeerDirectory(mainnet=["m1"], testnet=["t1"])
    assert d.list_peers() == {
        "official": [PeerRecord("m1")],
        "ssl": [PeerRecord("m1", ssl=True)],
        "testnet": [PeerRecord("t1", testnet=True)],
    }


def test_ban_and_clear():
    d = PeerDirectory(["a", "b", "c"], banned=["a"])
    assert not d.is_peer_available("a")
    d.ban("b")
    assert d.available(d.official) == ["c"]
    assert not d.all_banned(d.official)
    d.ban("c")
    assert d.all_banned(d.official)
    d.clear_bans()
    assert d.banned == []
    assert d.is_peer_available("a")


def test_empty_pool_counts_as_all_banned():
    assert PeerDirectory().all_banned(())


@given(st.lists(st.sampled_from(["a", "b", "c", "d"]), max_size=20))
def test_ban_is_idempotent(hosts):
    d = PeerDirectory(["a", "b", "c", "d"])
    for host in hosts:
        d.ban(host)
    assert d.banned == list(dict.fromkeys(hosts))
    assert sorted(d.available(d.official) + d.banned) == ["a", "b", "c", "d"]
