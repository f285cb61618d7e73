"""
Lisk SDK for Python.
Convenience exports for the most common client APIs.
"""

from .version import __version__  # noqa: F401

# Core config & errors
from .config import ClientConfig  # noqa: F401
from .errors import ConfigError, LiskSdkError, ParameterError, TransportError  # noqa: F401

# Network identity & peers
from .network import Network, NetworkIdentity, resolve_identity  # noqa: F401
from .peers import PeerDirectory, PeerRecord  # noqa: F401
from .session import Session  # noqa: F401

# Requests & dispatch
from .rpc import HttpxTransport, RequestDescriptor, Transport  # noqa: F401
from .dispatcher import EXHAUSTED_MESSAGE, Dispatcher  # noqa: F401

# Keys
from .crypto import Ed25519Signer, KeyPair, get_address, get_keys  # noqa: F401

# Client
from .client import LiskClient  # noqa: F401

__all__ = [
    "__version__",
    # Core
    "ClientConfig",
    "LiskSdkError", "TransportError", "ParameterError", "ConfigError",
    # Network / peers
    "Network", "NetworkIdentity", "resolve_identity",
    "PeerDirectory", "PeerRecord", "Session",
    # Requests
    "RequestDescriptor", "Transport", "HttpxTransport",
    "Dispatcher", "EXHAUSTED_MESSAGE",
    # Keys
    "KeyPair", "Ed25519Signer", "get_keys", "get_address",
    # Client
    "LiskClient",
]
