"""
Shared pytest fixtures:
- ScriptedTransport: in-memory `Transport` that records requests and answers
  from a handler (return a body, or return/raise an exception to fail)
- Session / client factories with a seeded RNG and no redial delay
"""
from __future__ import annotations

import random
import typing as t

import httpx
import pytest

from lisk_sdk.client import LiskClient
from lisk_sdk.config import ClientConfig
from lisk_sdk.errors import TransportError
from lisk_sdk.rpc.request import RequestDescriptor
from lisk_sdk.session import Session

Handler = t.Callable[[RequestDescriptor], t.Any]


class ScriptedTransport:
    """Records every request; the handler decides what each one gets back."""

    def __init__(self, handler: t.Optional[Handler] = None) -> None:
        self.handler = handler or (lambda _req: {"success": True})
        self.requests: t.List[RequestDescriptor] = []

    async def send(self, request: RequestDescriptor) -> t.Any:
        self.requests.append(request)
        out = self.handler(request)
        if isinstance(out, BaseException):
            raise out
        return out

    @property
    def hosts(self) -> t.List[str]:
        return [httpx.URL(r.url).host for r in self.requests]


def unreachable(request: RequestDescriptor) -> TransportError:
    return TransportError("connection refused", url=request.url)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def make_config() -> t.Callable[..., ClientConfig]:
    def _make(**kw: t.Any) -> ClientConfig:
        kw.setdefault("redial_delay", 0.0)
        return ClientConfig(**kw)

    return _make


@pytest.fixture
def make_session(make_config, rng) -> t.Callable[..., Session]:
    def _make(**kw: t.Any) -> Session:
        return Session(make_config(**kw), rng=rng)

    return _make


@pytest.fixture
def make_client(make_config, rng) -> t.Callable[..., LiskClient]:
    def _make(transport: t.Any, **kw: t.Any) -> LiskClient:
        return LiskClient(make_config(**kw), transport=transport, rng=rng)

    return _make
