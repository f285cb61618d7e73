"""
Network identity: which chain a session talks to.

Every request carries the identity as headers (``nethash``, ``broadhash``,
``version``, ...). Nodes compare them with their own and refuse requests
aimed at another network, so the identity doubles as a handshake.

Two networks are well known (mainnet and testnet). Any other hash supplied
explicitly is treated as a custom network: the hash is sent as-is and version
negotiation is skipped by sending the placeholder version.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Optional, Union

__all__ = [
    "Network",
    "NetworkIdentity",
    "MAINNET_NETHASH",
    "TESTNET_NETHASH",
    "CUSTOM_VERSION",
    "MAINNET",
    "TESTNET",
    "network_for_hash",
    "resolve_identity",
]

MAINNET_NETHASH = "ed14889723f24ecc54871d058d98ce91ff2f973192075c0155ba2b7b70ad2511"
TESTNET_NETHASH = "da3ed6a45429278bac2666961289ca17ad86595d33b31037615d4b8e8f158bba"

CLIENT_OS = "lisk-js-api"
CLIENT_VERSION = "1.0.0"
MIN_NODE_VERSION = ">=0.5.0"
CUSTOM_VERSION = "0.0.0a"


class Network(str, Enum):
    MAINNET = "mainnet"
    TESTNET = "testnet"
    CUSTOM = "custom"


@dataclass(frozen=True)
class NetworkIdentity:
    network: Network
    nethash: str
    broadhash: str
    version: str = CLIENT_VERSION
    min_version: str = MIN_NODE_VERSION
    os: str = CLIENT_OS

    @property
    def is_custom(self) -> bool:
        return self.network is Network.CUSTOM

    def headers(self, port: Union[str, int, None] = "") -> Dict[str, str]:
        """Request headers announcing this identity (and the client's port)."""
        return {
            "Content-Type": "application/json",
            "nethash": self.nethash,
            "broadhash": self.broadhash,
            "os": self.os,
            "version": self.version,
            "minVersion": self.min_version,
            "port": "" if port is None else str(port),
        }


MAINNET = NetworkIdentity(Network.MAINNET, MAINNET_NETHASH, MAINNET_NETHASH)
TESTNET = NetworkIdentity(Network.TESTNET, TESTNET_NETHASH, TESTNET_NETHASH)

_KNOWN: Dict[str, NetworkIdentity] = {
    MAINNET_NETHASH: MAINNET,
    TESTNET_NETHASH: TESTNET,
}


def network_for_hash(nethash: Optional[str]) -> Optional[Network]:
    """
    Map an explicit hash onto a known network, `Network.CUSTOM` for anything
    else, or None when no hash is given.
    """
    if not nethash:
        return None
    known = _KNOWN.get(nethash.strip().lower())
    return known.network if known is not None else Network.CUSTOM


def resolve_identity(testnet: bool, nethash: Optional[str] = None) -> NetworkIdentity:
    """
    Pick the identity for a session.

    The testnet flag selects between the well-known identities. A non-empty
    explicit `nethash` overrides the hash and forces the placeholder version,
    whatever the flag says.
    """
    base = TESTNET if testnet else MAINNET
    if not nethash:
        return base
    return replace(
        base,
        network=network_for_hash(nethash) or Network.CUSTOM,
        nethash=nethash,
        version=CUSTOM_VERSION,
    )
