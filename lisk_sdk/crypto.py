"""
Key derivation, addresses and signatures for Lisk accounts.

Keys
----
The secret passphrase is hashed with SHA-256 and the digest is used as the
Ed25519 seed. The private key is reported in the 64-byte ``seed || public``
form used by the node tooling.

Addresses
---------
    address = uint64_be(reverse(sha256(public_key)[:8])) || "L"

The client only consumes this as a capability (`Signer`); `Ed25519Signer`
is the default implementation, built on `cryptography`.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Protocol, Union, runtime_checkable

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

__all__ = [
    "KeyPair",
    "Signer",
    "Ed25519Signer",
    "get_keys",
    "get_address",
    "sign",
    "verify",
]

BytesOrHex = Union[bytes, bytearray, str]


@dataclass(frozen=True)
class KeyPair:
    public_key: str
    private_key: str


@runtime_checkable
class Signer(Protocol):
    def get_keys(self, secret: str) -> KeyPair: ...

    def get_address(self, public_key: BytesOrHex) -> str: ...


def _as_bytes(value: BytesOrHex) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return bytes.fromhex(value)


def _private_key(secret: str) -> Ed25519PrivateKey:
    seed = hashlib.sha256(secret.encode("utf-8")).digest()
    return Ed25519PrivateKey.from_private_bytes(seed)


def _raw_public(key: Ed25519PrivateKey) -> bytes:
    return key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)


def get_keys(secret: str) -> KeyPair:
    seed = hashlib.sha256(secret.encode("utf-8")).digest()
    public = _raw_public(Ed25519PrivateKey.from_private_bytes(seed))
    return KeyPair(public_key=public.hex(), private_key=(seed + public).hex())


def get_address(public_key: BytesOrHex) -> str:
    digest = hashlib.sha256(_as_bytes(public_key)).digest()
    return f"{int.from_bytes(digest[:8][::-1], 'big')}L"


def sign(message: Union[bytes, str], secret: str) -> str:
    """Detached Ed25519 signature (hex) of `message`."""
    data = message.encode("utf-8") if isinstance(message, str) else message
    return _private_key(secret).sign(data).hex()


def verify(message: Union[bytes, str], signature: BytesOrHex, public_key: BytesOrHex) -> bool:
    data = message.encode("utf-8") if isinstance(message, str) else message
    try:
        Ed25519PublicKey.from_public_bytes(_as_bytes(public_key)).verify(_as_bytes(signature), data)
    except (InvalidSignature, ValueError):
        return False
    return True


class Ed25519Signer:
    """Default `Signer`: module functions bundled for injection."""

    def get_keys(self, secret: str) -> KeyPair:
        return get_keys(secret)

    def get_address(self, public_key: BytesOrHex) -> str:
        return get_address(public_key)
