"""
Session state and node selection.

A `Session` is the long-lived, mutable half of a client: the current peer, the
network/SSL flags, the port, the network identity, and the peer directory with
its banned set. All mutation goes through methods that hold the session lock,
so a ban followed by re-selection is atomic even when several requests (or
threads) fail over at the same time.

Selection rules:
- a pinned node (configured, or set with `set_node(host)`) always wins;
- otherwise a peer is drawn uniformly from the active pool, skipping banned
  hosts; when every host is banned any pool member is returned and callers are
  expected to have checked `check_redial()` first.
"""

from __future__ import annotations

import logging
import random
import threading
from typing import Any, List, Mapping, Optional, Tuple

from .config import ClientConfig, default_port
from .errors import ConfigError
from .network import Network, NetworkIdentity, network_for_hash, resolve_identity
from .peers import PeerDirectory
from .rpc.request import RequestDescriptor, build_peer_request, build_request

log = logging.getLogger(__name__)

__all__ = ["Session"]


class Session:
    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        rng: Optional[random.Random] = None,
    ) -> None:
        config = config or ClientConfig()
        self._lock = threading.RLock()
        self._rng = rng or random.Random()

        self.directory = PeerDirectory(config.peers, banned=config.banned_peers)
        self.ssl: bool = bool(config.ssl)
        self.testnet: bool = bool(config.testnet)
        self.random_peer: bool = config.effective_random_peer
        self.port: str = config.effective_port
        self.nethash: str = config.nethash
        self.identity: NetworkIdentity = resolve_identity(self.testnet, self.nethash)
        self._pinned: Optional[str] = config.node or None
        self.current_peer: str = self.select_node()

    # --- read-only views ------------------------------------------------------

    @property
    def pinned_node(self) -> Optional[str]:
        return self._pinned

    @property
    def banned_peers(self) -> List[str]:
        return self.directory.banned

    @property
    def active_pool(self) -> Tuple[str, ...]:
        return self.directory.pool(ssl=self.ssl, testnet=self.testnet)

    def is_peer_available(self, host: str) -> bool:
        return self.directory.is_peer_available(host)

    def headers(self) -> dict:
        return self.identity.headers(self.port)

    # --- selection ------------------------------------------------------------

    def select_node(self) -> str:
        with self._lock:
            if self._pinned:
                return self._pinned
            pool = self.active_pool
            if not pool:
                raise ConfigError("no peers configured for the active network")
            candidates = self.directory.available(pool) or list(pool)
            return self._rng.choice(candidates)

    def set_node(self, host: Optional[str] = None) -> str:
        """Pin `host`, or re-select when omitted. Returns the current peer."""
        with self._lock:
            if host:
                self._pinned = host
                self.current_peer = host
            else:
                self.current_peer = self.select_node()
            log.debug("current peer set to %s", self.current_peer)
            return self.current_peer

    def set_testnet(self, testnet: bool) -> None:
        """
        Switch network. Bans are cleared, the port is reset to the network
        default and a new node is selected.

        Re-asserting the value already held drops the session to mainnet.
        """
        with self._lock:
            if self.testnet != testnet:
                self.testnet = bool(testnet)
            else:
                self.testnet = False
            self.directory.clear_bans()
            self.port = default_port(testnet=self.testnet, ssl=self.ssl)
            self.identity = resolve_identity(self.testnet, self.nethash)
            self.current_peer = self.select_node()
            log.info("network set to %s, peer %s", "testnet" if self.testnet else "mainnet", self.current_peer)

    def set_ssl(self, ssl: bool) -> None:
        """Switch SSL mode; bans are cleared and a new node is selected."""
        with self._lock:
            self.ssl = bool(ssl)
            self.directory.clear_bans()
            self.current_peer = self.select_node()
            log.info("ssl %s, peer %s", "on" if self.ssl else "off", self.current_peer)

    # --- failover -------------------------------------------------------------

    def ban(self, host: str) -> None:
        with self._lock:
            self.directory.ban(host)

    def check_redial(self) -> bool:
        """
        Whether a failed request may be retried on another peer.

        A custom network hash never redials; a well-known explicit hash first
        aligns the testnet flag with it.
        """
        with self._lock:
            if not self.random_peer:
                return False
            network = network_for_hash(self.nethash)
            if network is Network.CUSTOM:
                return False
            if network is not None and (network is Network.TESTNET) != self.testnet:
                self.set_testnet(network is Network.TESTNET)
            return not self.directory.all_banned(self.active_pool)

    def redial(self, failed_peer: str) -> str:
        """
        Ban `failed_peer` and move to another node.

        A pinned node that failed is unpinned so selection falls back to the
        pool. If another request already moved the session off `failed_peer`
        the current peer is kept.
        """
        with self._lock:
            self.directory.ban(failed_peer)
            if self._pinned == failed_peer:
                self._pinned = None
            if self.current_peer == failed_peer:
                self.current_peer = self.select_node()
            log.warning("banned peer %s, switching to %s", failed_peer, self.current_peer)
            return self.current_peer

    # --- request building -----------------------------------------------------

    def prepare(
        self,
        method: Optional[str],
        resource: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Tuple[str, RequestDescriptor]:
        """Build a request against the current peer; returns (peer, request)."""
        with self._lock:
            peer = self.current_peer
            request = build_request(
                method,
                resource,
                params,
                peer=peer,
                port=self.port,
                ssl=self.ssl,
                headers=self.headers(),
            )
            return peer, request

    def prepare_peer(self, resource: str, params: Mapping[str, Any]) -> RequestDescriptor:
        with self._lock:
            return build_peer_request(
                resource,
                params,
                peer=self.current_peer,
                port=self.port,
                ssl=self.ssl,
                headers=self.headers(),
            )
