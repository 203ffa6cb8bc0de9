"""Translate Jetstream payloads into domain post events."""

from __future__ import annotations

from collections.abc import Mapping
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from replygraph.config import POST_COLLECTION
from replygraph.domain.events import PostEvent, ReplyReference

from .schema import JetstreamMessage, PostRecordPayload

if TYPE_CHECKING:
    from .schema import JetstreamMessageInput, ReplyPayload

log = getLogger(__name__)


class MalformedEventError(ValueError):
    """Raised when a payload cannot be turned into a post event."""


def _ensure_message(raw: JetstreamMessageInput) -> JetstreamMessage:
    if isinstance(raw, JetstreamMessage):
        return raw
    try:
        if isinstance(raw, (str, bytes)):
            return JetstreamMessage.model_validate_json(raw)
        return JetstreamMessage.model_validate(dict(raw))
    except ValidationError as exc:
        raise MalformedEventError(f"Unreadable Jetstream message: {exc}") from exc


def parse_post_event(
    raw: JetstreamMessageInput,
    *,
    collection: str = POST_COLLECTION,
) -> PostEvent | None:
    """Return the post event carried by ``raw``, or ``None`` when it is not one.

    Ineligible messages (other kinds, operations or collections) are not errors.
    An eligible message whose record does not validate raises ``MalformedEventError``.
    """

    message = _ensure_message(raw)
    commit = message.commit
    if commit is None or not message.is_post_creation(collection):
        return None

    if not isinstance(commit.record, Mapping):
        raise MalformedEventError(f"Post {commit.rkey} has no record")
    try:
        record = PostRecordPayload.model_validate(dict(commit.record))
    except ValidationError as exc:
        raise MalformedEventError(f"Invalid post record {commit.rkey}: {exc}") from exc

    return PostEvent(
        rkey=commit.rkey,
        text=record.text,
        created_at=record.created_at,
        reply=_reply_reference(record.reply, rkey=commit.rkey),
    )


def _reply_reference(reply: ReplyPayload | None, *, rkey: str) -> ReplyReference | None:
    if reply is None:
        return None
    parent_uri = reply.parent.uri if reply.parent is not None else None
    root_uri = reply.root.uri if reply.root is not None else None
    if parent_uri is None and root_uri is None:
        log.debug("Post %s has an empty reply reference", rkey)
        return None
    reference = ReplyReference(parent_uri=parent_uri, root_uri=root_uri)
    if not reference.is_complete:
        log.debug("Post %s has a partial reply reference: %s", rkey, reference)
    return reference
