"""
Peer directory: the configured peer pools and the set of banned peers.

Three pools exist (official, ssl, testnet). They are fixed at construction;
only the banned set changes. A ban lasts until it is cleared, which happens
whenever the session switches network or SSL mode.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .config import MAINNET_PEERS, TESTNET_PEERS

__all__ = ["PeerRecord", "PeerDirectory"]


@dataclass(frozen=True)
class PeerRecord:
    node: str
    ssl: bool = False
    testnet: bool = False


class PeerDirectory:
    """
    Holds the official / ssl / testnet pools and the banned set.

    Caller-supplied `peers` replace all three pools identically.
    """

    def __init__(
        self,
        peers: Optional[Sequence[str]] = None,
        *,
        mainnet: Sequence[str] = MAINNET_PEERS,
        testnet: Sequence[str] = TESTNET_PEERS,
        banned: Iterable[str] = (),
    ) -> None:
        if peers:
            mainnet = testnet = peers
        self.official: Tuple[str, ...] = tuple(mainnet)
        self.ssl: Tuple[str, ...] = tuple(mainnet)
        self.testnet: Tuple[str, ...] = tuple(testnet)
        # dict keeps insertion order and rejects duplicates
        self._banned: Dict[str, None] = dict.fromkeys(banned)

    # --- pools ----------------------------------------------------------------

    def pool(self, *, ssl: bool, testnet: bool) -> Tuple[str, ...]:
        """The pool matching the given flags; testnet takes precedence."""
        if testnet:
            return self.testnet
        if ssl:
            return self.ssl
        return self.official

    def list_peers(self) -> Dict[str, List[PeerRecord]]:
        return {
            "official": [PeerRecord(node) for node in self.official],
            "ssl": [PeerRecord(node, ssl=True) for node in self.ssl],
            "testnet": [PeerRecord(node, testnet=True) for node in self.testnet],
        }

    # --- bans -----------------------------------------------------------------

    @property
    def banned(self) -> List[str]:
        return list(self._banned)

    def is_peer_available(self, host: str) -> bool:
        return host not in self._banned

    def ban(self, host: str) -> None:
        self._banned.setdefault(host, None)

    def clear_bans(self) -> None:
        self._banned.clear()

    def available(self, pool: Sequence[str]) -> List[str]:
        return [host for host in pool if host not in self._banned]

    def all_banned(self, pool: Sequence[str]) -> bool:
        """True when every host of `pool` is banned (an empty pool counts)."""
        return all(host in self._banned for host in pool)
