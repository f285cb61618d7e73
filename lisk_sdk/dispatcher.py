"""
Request dispatch with clock-skew retry and peer failover.

One logical request runs as a bounded loop over attempts:

    build request -> transport.send
      ok, "Timestamp is in the future", offset budget left
          -> timeOffset += 10, send again (same peer)
      ok, anything else
          -> return the body as-is (logical failures included)
      TransportError, redial allowed
          -> wait, ban the peer that failed, pick another, send again
      TransportError, redial not allowed
          -> return the "could not create http request" failure object

The skew offset is capped at 40 (four retries). Failover ends once every peer
of the active pool is banned. Nothing here raises to the caller for transport
problems; every outcome is a return value, also handed to the optional
callback.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union

from .errors import ParameterError, TransportError
from .rpc.http import Transport
from .session import Session

log = logging.getLogger(__name__)

__all__ = [
    "Callback",
    "RetryContext",
    "Dispatcher",
    "check_params",
    "deliver",
    "exhausted",
    "EXHAUSTED_MESSAGE",
    "SKEW_STEP",
    "MAX_TIME_OFFSET",
]

Callback = Callable[[Any], Union[None, Awaitable[None]]]

EXHAUSTED_MESSAGE = "could not create http request to any of the given peers"
SKEW_STEP = 10
MAX_TIME_OFFSET = 40
_SKEW_RE = re.compile(r"Timestamp is in the future")


def check_params(params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Copy `params`, rejecting None and NaN values."""
    out: Dict[str, Any] = {}
    for key, value in (params or {}).items():
        if value is None or (isinstance(value, float) and math.isnan(value)):
            raise ParameterError(parameter=str(key), value=value)
        out[key] = value
    return out


def _initial_offset(params: Dict[str, Any]) -> int:
    """Pop a caller-supplied `timeOffset` from `params`, as an integer."""
    value = params.pop("timeOffset", 0) or 0
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        raise ParameterError(parameter="timeOffset", value=value) from None


@dataclass
class RetryContext:
    """State carried across the attempts of one logical request."""

    method: str
    resource: str
    params: Dict[str, Any] = field(default_factory=dict)
    callback: Optional[Callback] = None
    time_offset: int = 0
    failovers: int = 0
    peer: Optional[str] = None

    def attempt_params(self) -> Dict[str, Any]:
        if not self.time_offset:
            return dict(self.params)
        return {**self.params, "timeOffset": self.time_offset}

    def can_retry_skew(self) -> bool:
        return self.time_offset + SKEW_STEP <= MAX_TIME_OFFSET


def _is_skew_failure(body: Any) -> bool:
    if not isinstance(body, Mapping) or body.get("success"):
        return False
    message = body.get("message")
    return isinstance(message, str) and _SKEW_RE.search(message) is not None


async def deliver(callback: Optional[Callback], result: Any) -> None:
    """Hand `result` to `callback`, awaiting it when it returns an awaitable."""
    if callback is None:
        return
    out = callback(result)
    if inspect.isawaitable(out):
        await out


def exhausted(error: TransportError) -> Dict[str, Any]:
    return {"success": False, "error": error, "message": EXHAUSTED_MESSAGE}


class Dispatcher:
    """
    Retry coordinator bound to a session and a transport.

    `redial_delay` is the pause (seconds) before failing over to another peer.
    """

    def __init__(
        self,
        session: Session,
        transport: Transport,
        *,
        redial_delay: float = 1.0,
    ) -> None:
        self.session = session
        self.transport = transport
        self.redial_delay = redial_delay

    async def dispatch(
        self,
        method: str,
        resource: str,
        params: Optional[Mapping[str, Any]] = None,
        callback: Optional[Callback] = None,
    ) -> Any:
        clean = check_params(params)
        ctx = RetryContext(
            method=(method or "GET").upper(),
            resource=resource,
            params=clean,
            callback=callback,
            time_offset=_initial_offset(clean),
        )
        result = await self._run(ctx)
        await deliver(ctx.callback, result)
        return result

    async def _run(self, ctx: RetryContext) -> Any:
        while True:
            ctx.peer, request = self.session.prepare(ctx.method, ctx.resource, ctx.attempt_params())
            log.debug("dispatch %s %s via %s", request.method, ctx.resource, ctx.peer)
            try:
                body = await self.transport.send(request)
            except TransportError as exc:
                if not self.session.check_redial():
                    log.warning(
                        "giving up on %s %s after %d failovers: %s", ctx.method, ctx.resource, ctx.failovers, exc
                    )
                    return exhausted(exc)
                ctx.failovers += 1
                log.warning("peer %s failed (%s), redialing", ctx.peer, exc)
                await asyncio.sleep(self.redial_delay)
                self.session.redial(ctx.peer)
                continue

            if _is_skew_failure(body) and ctx.can_retry_skew():
                ctx.time_offset += SKEW_STEP
                log.info("timestamp rejected by %s, retrying with timeOffset=%d", ctx.peer, ctx.time_offset)
                continue
            return body
