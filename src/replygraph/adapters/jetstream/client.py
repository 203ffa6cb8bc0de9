"""WebSocket subscriber for the Jetstream firehose."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

import httpx
from httpx_ws import HTTPXWSException, aconnect_ws

from replygraph.config import JetstreamConfig, get_jetstream_config

from .translator import MalformedEventError, parse_post_event

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from contextlib import AbstractAsyncContextManager

    from replygraph.domain.events import PostEvent

log = getLogger(__name__)

_CONNECTION_ERRORS: tuple[type[Exception], ...] = (httpx.HTTPError, HTTPXWSException, OSError)


class MessageSession(Protocol):
    """The part of a WebSocket session the subscriber reads from."""

    async def receive_text(self) -> str: ...


ConnectFactory = Callable[[str], "AbstractAsyncContextManager[MessageSession]"]


class JetstreamConnectionError(RuntimeError):
    """Raised when the subscriber gives up reconnecting."""

    def __init__(self, message: str, *, attempts: int) -> None:
        super().__init__(message)
        self.attempts = attempts


@asynccontextmanager
async def _default_connect(url: str) -> AsyncIterator[MessageSession]:
    async with httpx.AsyncClient() as client, aconnect_ws(url, client) as session:
        yield session


@dataclass(slots=True)
class JetstreamSubscriber:
    config: JetstreamConfig = field(default_factory=get_jetstream_config)
    connect: ConnectFactory = field(default=_default_connect)
    _stopped: asyncio.Event = field(default_factory=asyncio.Event, init=False, repr=False)
    dropped: int = field(default=0, init=False)

    def stop(self) -> None:
        self._stopped.set()

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()

    async def events(self) -> AsyncIterator[PostEvent]:
        """Yield eligible post events in delivery order until stopped.

        Connection loss triggers a reconnect after the configured delay. Messages
        already yielded are never replayed.
        """

        url = self.config.subscribe_url
        policy = self.config.reconnect
        failures = 0

        while not self.stopped:
            try:
                async with self.connect(url) as session:
                    log.info("Connected to Jetstream at %s", url)
                    failures = 0
                    while not self.stopped:
                        event = self._decode(await session.receive_text())
                        if event is not None:
                            yield event
            except _CONNECTION_ERRORS as exc:
                if self.stopped:
                    break
                failures += 1
                log.warning("Jetstream connection lost: %s (attempt %s)", exc, failures)
                if policy.max_attempts is not None and failures > policy.max_attempts:
                    msg = f"Giving up on Jetstream after {failures} failed connections"
                    raise JetstreamConnectionError(msg, attempts=failures) from exc
                await asyncio.sleep(policy.delay_seconds)

        log.info("Jetstream subscriber stopped")

    def _decode(self, raw: str) -> PostEvent | None:
        try:
            return parse_post_event(raw, collection=self.config.collection)
        except MalformedEventError as exc:
            self.dropped += 1
            log.warning("Dropping malformed Jetstream message: %s", exc)
            return None
