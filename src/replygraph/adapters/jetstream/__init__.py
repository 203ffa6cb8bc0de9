"""Public interface for the Jetstream adapter."""

from __future__ import annotations

from .client import (
    ConnectFactory,
    JetstreamConnectionError,
    JetstreamSubscriber,
    MessageSession,
)
from .schema import CommitPayload, JetstreamMessage, PostRecordPayload, ReplyPayload
from .translator import MalformedEventError, parse_post_event

__all__ = [
    "CommitPayload",
    "ConnectFactory",
    "JetstreamConnectionError",
    "JetstreamMessage",
    "JetstreamSubscriber",
    "MalformedEventError",
    "MessageSession",
    "PostRecordPayload",
    "ReplyPayload",
    "parse_post_event",
]
