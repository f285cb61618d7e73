"""
SDK configuration: peer lists, network selection, ports and timeouts.

- Ships the well-known peer lists and default ports for each network.
- Supports overrides via environment variables (LISK_*) and keyword arguments.
- Resolves the effective port and random-peer behavior for a session.
"""

from __future__ import annotations

import math
import os
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .errors import ConfigError
from .version import __version__

MAINNET_PEERS: Tuple[str, ...] = (
    "hub21.lisk.io",
    "hub22.lisk.io",
    "hub23.lisk.io",
    "hub24.lisk.io",
    "hub11.lisk.io",
    "hub12.lisk.io",
    "hub13.lisk.io",
    "hub14.lisk.io",
    "hub15.lisk.io",
    "hub16.lisk.io",
    "hub31.lisk.io",
    "hub32.lisk.io",
    "hub33.lisk.io",
    "hub34.lisk.io",
    "hub35.lisk.io",
    "hub36.lisk.io",
    "hub37.lisk.io",
    "hub38.lisk.io",
)
TESTNET_PEERS: Tuple[str, ...] = ("testnet.lisk.io",)

MAINNET_PORT = "8000"
TESTNET_PORT = "7000"
SSL_PORT = "443"

_TRUE = ("1", "true", "yes", "y", "on")
_FALSE = ("0", "false", "no", "n", "off")


def default_port(*, testnet: bool, ssl: bool) -> str:
    """Port used when none is configured: testnet wins over SSL."""
    if testnet:
        return TESTNET_PORT
    if ssl:
        return SSL_PORT
    return MAINNET_PORT


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    return v if v is not None else default


def _parse_bool(name: str, val: Optional[str], default: Optional[bool]) -> Optional[bool]:
    if val is None or val.strip() == "":
        return default
    s = val.strip().lower()
    if s in _TRUE:
        return True
    if s in _FALSE:
        return False
    raise ConfigError(f"{name} must be a boolean, got: {val!r}")


def _parse_float(name: str, val: Optional[str], default: float) -> float:
    if val is None or val.strip() == "":
        return default
    try:
        out = float(val)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got: {val!r}") from e
    if math.isnan(out) or out < 0:
        raise ConfigError(f"{name} must be a non-negative number, got: {val!r}")
    return out


def _parse_peers(val: Optional[str]) -> List[str]:
    if not val:
        return []
    return [p.strip() for p in val.split(",") if p.strip()]


def _normalize_port(port: Any) -> Optional[str]:
    if port is None:
        return None
    s = str(port).strip()
    if s and not s.isdigit():
        raise ConfigError(f"port must be numeric or empty, got: {port!r}")
    return s


@dataclass(slots=True)
class ClientConfig:
    # Peer selection
    node: str = ""
    random_peer: Optional[bool] = None
    peers: List[str] = field(default_factory=list)
    banned_peers: List[str] = field(default_factory=list)
    # Network
    testnet: bool = False
    ssl: bool = False
    port: Optional[str] = None
    nethash: str = ""
    # HTTP behavior
    timeout: float = 10.0
    redial_delay: float = 1.0
    user_agent: str = field(default_factory=lambda: f"lisk-sdk-py/{__version__}")

    def __post_init__(self) -> None:
        self.port = _normalize_port(self.port)
        self.peers = [str(p).strip() for p in self.peers if str(p).strip()]
        self.banned_peers = list(dict.fromkeys(self.banned_peers))

    @classmethod
    def from_env(cls, prefix: str = "LISK_") -> "ClientConfig":
        """
        Create config from environment variables:

        LISK_NODE           (host) pin a node
        LISK_RANDOM_PEER    (bool) fail over to pool peers
        LISK_PEERS          (csv) replace the built-in peer lists
        LISK_TESTNET        (bool)
        LISK_SSL            (bool)
        LISK_PORT           (int or empty for scheme default)
        LISK_NETHASH        (hex) custom network hash
        LISK_TIMEOUT        (float seconds, HTTP)
        LISK_REDIAL_DELAY   (float seconds before failing over)
        LISK_USER_AGENT     (str)
        """
        return cls(
            node=(_env(f"{prefix}NODE", "") or "").strip(),
            random_peer=_parse_bool(f"{prefix}RANDOM_PEER", _env(f"{prefix}RANDOM_PEER"), None),
            peers=_parse_peers(_env(f"{prefix}PEERS")),
            testnet=bool(_parse_bool(f"{prefix}TESTNET", _env(f"{prefix}TESTNET"), False)),
            ssl=bool(_parse_bool(f"{prefix}SSL", _env(f"{prefix}SSL"), False)),
            port=_env(f"{prefix}PORT"),
            nethash=(_env(f"{prefix}NETHASH", "") or "").strip(),
            timeout=_parse_float(f"{prefix}TIMEOUT", _env(f"{prefix}TIMEOUT"), 10.0),
            redial_delay=_parse_float(f"{prefix}REDIAL_DELAY", _env(f"{prefix}REDIAL_DELAY"), 1.0),
            user_agent=_env(f"{prefix}USER_AGENT") or f"lisk-sdk-py/{__version__}",
        )

    @classmethod
    def with_overrides(
        cls, base: Optional["ClientConfig"] = None, **overrides: Any
    ) -> "ClientConfig":
        """
        Build from an existing config plus keyword overrides.
        Unknown keys and None values are ignored.
        """
        base = base or cls()
        data = base.to_dict()
        data.update({k: v for k, v in overrides.items() if k in data and v is not None})
        return cls(**data)

    # --- derived values ---------------------------------------------------

    @property
    def effective_random_peer(self) -> bool:
        """Random peers are on unless a node is pinned, or set explicitly."""
        if self.random_peer is not None:
            return bool(self.random_peer)
        return not self.node

    @property
    def effective_port(self) -> str:
        if self.port is not None:
            return self.port
        return default_port(testnet=self.testnet, ssl=self.ssl)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = [
    "ClientConfig",
    "MAINNET_PEERS",
    "TESTNET_PEERS",
    "MAINNET_PORT",
    "TESTNET_PORT",
    "SSL_PORT",
    "default_port",
]
