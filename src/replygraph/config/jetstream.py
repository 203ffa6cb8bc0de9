"""Jetstream subscription configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx

from .env import env_float, env_int, env_value
from .errors import InvalidConfigurationError

JETSTREAM_URL = "wss://jetstream2.us-west.bsky.network/subscribe"
POST_COLLECTION = "app.bsky.feed.post"
DEFAULT_RECONNECT_DELAY_SECONDS = 1.0


@dataclass(slots=True, frozen=True)
class ReconnectPolicy:
    """How the subscriber behaves after the socket drops.

    ``max_attempts`` counts consecutive failed reconnects; ``None`` retries forever.
    """

    delay_seconds: float = DEFAULT_RECONNECT_DELAY_SECONDS
    max_attempts: int | None = None


@dataclass(slots=True, frozen=True)
class JetstreamConfig:
    endpoint: str = JETSTREAM_URL
    collection: str = POST_COLLECTION
    reconnect: ReconnectPolicy = field(default_factory=ReconnectPolicy)

    @property
    def subscribe_url(self) -> str:
        url = httpx.URL(self.endpoint)
        return str(url.copy_merge_params({"wantedCollections": self.collection}))


def get_jetstream_config(
    *,
    endpoint: str | None = None,
    collection: str | None = None,
) -> JetstreamConfig:
    """Build the subscription config from the environment; explicit arguments win."""

    delay = env_float("REPLYGRAPH_RECONNECT_DELAY", DEFAULT_RECONNECT_DELAY_SECONDS)
    if delay < 0:
        raise InvalidConfigurationError(
            "REPLYGRAPH_RECONNECT_DELAY", str(delay), "a non-negative number"
        )
    max_attempts = env_int("REPLYGRAPH_MAX_RECONNECTS", None)
    if max_attempts is not None and max_attempts < 0:
        raise InvalidConfigurationError(
            "REPLYGRAPH_MAX_RECONNECTS", str(max_attempts), "a non-negative integer"
        )
    return JetstreamConfig(
        endpoint=endpoint or env_value("REPLYGRAPH_JETSTREAM_URL", JETSTREAM_URL),
        collection=collection or env_value("REPLYGRAPH_COLLECTION", POST_COLLECTION),
        reconnect=ReconnectPolicy(delay_seconds=delay, max_attempts=max_attempts),
    )
