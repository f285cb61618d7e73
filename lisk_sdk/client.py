"""
lisk_sdk.client
===============

`LiskClient`, the public entry point. It owns a `Session` (peer selection and
bans), a `Dispatcher` (retry/failover) and a transport, and exposes thin
query helpers over the node's ``/api`` surface.

    async with LiskClient(testnet=True) as lsk:
        account = await lsk.get_account("12345L")
        height = await lsk.send_request("GET", "blocks/getHeight")

Every query helper accepts an optional ``callback`` which receives the final
result before it is returned (plain functions and coroutine functions both
work).

Configuration
-------------
Pass a `ClientConfig`, keyword overrides (``node=``, ``ssl=``, ``testnet=``,
``port=``, ``peers=``, ``nethash=``, ``random_peer=``...), or both. Without
either, defaults are read from the environment (see `ClientConfig.from_env`).
"""

from __future__ import annotations

import logging
import random
from typing import Any, Dict, List, Mapping, Optional

from .config import ClientConfig
from .crypto import Ed25519Signer, Signer
from .dispatcher import Callback, Dispatcher, deliver
from .errors import TransportError
from .network import NetworkIdentity, resolve_identity
from .peers import PeerRecord
from .rpc.http import HttpxTransport, Transport
from .rpc.request import GET, POST
from .session import Session

log = logging.getLogger(__name__)

__all__ = ["LiskClient", "STANDBY_DELEGATE_OFFSET"]

STANDBY_DELEGATE_OFFSET = 101


class LiskClient:
    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        transport: Optional[Transport] = None,
        signer: Optional[Signer] = None,
        rng: Optional[random.Random] = None,
        **overrides: Any,
    ) -> None:
        if config is None:
            config = ClientConfig.from_env()
        if overrides:
            config = ClientConfig.with_overrides(config, **overrides)
        self.config = config
        self.session = Session(config, rng=rng)
        self._owns_transport = transport is None
        self.transport: Transport = transport or HttpxTransport(
            timeout=config.timeout, user_agent=config.user_agent
        )
        self.signer: Signer = signer or Ed25519Signer()
        self.dispatcher = Dispatcher(self.session, self.transport, redial_delay=config.redial_delay)

    # --- lifecycle -------------------------------------------------------------

    async def aclose(self) -> None:
        if self._owns_transport and isinstance(self.transport, HttpxTransport):
            await self.transport.aclose()

    async def __aenter__(self) -> "LiskClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # --- session ---------------------------------------------------------------

    @property
    def current_peer(self) -> str:
        return self.session.current_peer

    @property
    def banned_peers(self) -> List[str]:
        return self.session.banned_peers

    @property
    def identity(self) -> NetworkIdentity:
        return self.session.identity

    def get_nethash(self, nethash: Optional[str] = None) -> NetworkIdentity:
        """Identity for the session's network, or for an explicit hash."""
        return resolve_identity(self.session.testnet, nethash)

    def list_peers(self) -> Dict[str, List[PeerRecord]]:
        return self.session.directory.list_peers()

    def select_node(self) -> str:
        return self.session.select_node()

    def set_node(self, node: Optional[str] = None) -> str:
        return self.session.set_node(node)

    def set_testnet(self, testnet: bool) -> None:
        self.session.set_testnet(testnet)

    def set_ssl(self, ssl: bool) -> None:
        self.session.set_ssl(ssl)

    # --- dispatch --------------------------------------------------------------

    async def send_request(
        self,
        method: str,
        resource: str,
        params: Optional[Mapping[str, Any]] = None,
        callback: Optional[Callback] = None,
    ) -> Any:
        """
        Send `method` `resource` with `params`, retrying on clock skew and
        failing over to other peers. Returns the response body or a
        ``{"success": False, ...}`` failure object; never raises for network
        failures.
        """
        return await self.dispatcher.dispatch(method, resource, params, callback)

    # --- accounts --------------------------------------------------------------

    def get_address_from_secret(self, secret: str) -> Dict[str, str]:
        keys = self.signer.get_keys(secret)
        return {
            "address": self.signer.get_address(keys.public_key),
            "publicKey": keys.public_key,
        }

    def generate_account(self, secret: str) -> Dict[str, str]:
        keys = self.signer.get_keys(secret)
        return {"privateKey": keys.private_key, "publicKey": keys.public_key}

    async def get_account(self, address: str, callback: Optional[Callback] = None) -> Any:
        return await self.send_request(GET, "accounts", {"address": address}, callback)

    async def list_votes(self, address: str, callback: Optional[Callback] = None) -> Any:
        return await self.send_request(GET, "accounts/delegates", {"address": address}, callback)

    # --- delegates -------------------------------------------------------------

    async def list_active_delegates(self, limit: int, callback: Optional[Callback] = None) -> Any:
        return await self.send_request(GET, "delegates/", {"limit": limit}, callback)

    async def list_standby_delegates(self, limit: int, callback: Optional[Callback] = None) -> Any:
        params = {"limit": limit, "orderBy": "rate:asc", "offset": STANDBY_DELEGATE_OFFSET}
        return await self.send_request(GET, "delegates/", params, callback)

    async def search_delegate_by_username(self, username: str, callback: Optional[Callback] = None) -> Any:
        return await self.send_request(GET, "delegates/search/", {"q": username}, callback)

    async def list_voters(self, public_key: str, callback: Optional[Callback] = None) -> Any:
        return await self.send_request(GET, "delegates/voters", {"publicKey": public_key}, callback)

    # --- blocks ----------------------------------------------------------------

    async def list_blocks(self, amount: int, callback: Optional[Callback] = None) -> Any:
        return await self.send_request(GET, "blocks", {"limit": amount}, callback)

    async def list_forged_blocks(self, public_key: str, callback: Optional[Callback] = None) -> Any:
        return await self.send_request(GET, "blocks", {"generatorPublicKey": public_key}, callback)

    async def get_block(self, height: int, callback: Optional[Callback] = None) -> Any:
        return await self.send_request(GET, "blocks", {"height": height}, callback)

    # --- transactions ----------------------------------------------------------

    async def list_transactions(
        self,
        address: str,
        limit: str = "20",
        offset: str = "0",
        callback: Optional[Callback] = None,
    ) -> Any:
        params = {
            "senderId": address,
            "recipientId": address,
            "limit": limit,
            "offset": offset,
            "orderBy": "timestamp:desc",
        }
        return await self.send_request(GET, "transactions", params, callback)

    async def get_transaction(self, transaction_id: str, callback: Optional[Callback] = None) -> Any:
        return await self.send_request(GET, "transactions/get", {"id": transaction_id}, callback)

    async def send_lsk(
        self,
        recipient: str,
        amount: int,
        secret: str,
        second_secret: Optional[str] = None,
        callback: Optional[Callback] = None,
    ) -> Any:
        params: Dict[str, Any] = {"recipientId": recipient, "amount": amount, "secret": secret}
        if second_secret is not None:
            params["secondSecret"] = second_secret
        return await self.send_request(POST, "transactions", params, callback)

    async def list_multisignature_transactions(self, callback: Optional[Callback] = None) -> Any:
        return await self.send_request(GET, "transactions/multisignatures", None, callback)

    async def get_multisignature_transaction(
        self, transaction_id: str, callback: Optional[Callback] = None
    ) -> Any:
        return await self.send_request(
            GET, "transactions/multisignatures/get", {"id": transaction_id}, callback
        )

    async def broadcast_signed_transaction(
        self, transaction: Mapping[str, Any], callback: Optional[Callback] = None
    ) -> Any:
        """
        Post an already signed transaction to the current peer's ``/peer``
        surface. Single attempt: no skew retry and no failover.
        """
        request = self.session.prepare_peer("transactions", {"transaction": dict(transaction)})
        try:
            result = await self.transport.send(request)
        except TransportError as exc:
            log.warning("broadcast to %s failed: %s", self.session.current_peer, exc)
            result = {"success": False, "error": exc, "message": str(exc)}
        await deliver(callback, result)
        return result
