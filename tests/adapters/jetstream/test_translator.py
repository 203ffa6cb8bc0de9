from __future__ import annotations

import json

import pytest

from replygraph.adapters.jetstream import (
    JetstreamMessage,
    MalformedEventError,
    parse_post_event,
)
from replygraph.domain.events import PostEvent, ReplyReference
from tests.support.posts import make_commit_message


def test_parse_root_post_from_json_text() -> None:
    raw = json.dumps(make_commit_message("3lbf2zv", text="first!"))

    event = parse_post_event(raw)

    assert event == PostEvent(
        rkey="3lbf2zv",
        text="first!",
        created_at="2024-11-20T12:00:00.000Z",
        reply=None,
    )


def test_parse_reply_keeps_parent_and_root_uris() -> None:
    message = make_commit_message(
        "3lbf2zw",
        parent="at://did:plc:a/app.bsky.feed.post/p1",
        root="at://did:plc:a/app.bsky.feed.post/p0",
    )

    event = parse_post_event(message)

    assert event is not None
    assert event.reply == ReplyReference(
        parent_uri="at://did:plc:a/app.bsky.feed.post/p1",
        root_uri="at://did:plc:a/app.bsky.feed.post/p0",
    )
    assert event.reply.is_complete


def test_parse_accepts_validated_message_models() -> None:
    message = JetstreamMessage.model_validate(make_commit_message("p1"))

    event = parse_post_event(message)

    assert event is not None
    assert event.rkey == "p1"


@pytest.mark.parametrize(
    "overrides",
    [
        {"kind": "identity"},
        {"kind": "account"},
        {"operation": "delete"},
        {"operation": "update"},
        {"collection": "app.bsky.feed.like"},
    ],
)
def test_ineligible_messages_are_skipped(overrides: dict[str, str]) -> None:
    message = make_commit_message("p1", **overrides)

    assert parse_post_event(message) is None


def test_message_without_commit_is_skipped() -> None:
    assert parse_post_event({"kind": "identity", "did": "did:plc:x", "identity": {}}) is None


def test_configured_collection_controls_eligibility() -> None:
    message = make_commit_message("p1", collection="com.example.post")

    assert parse_post_event(message) is None
    event = parse_post_event(message, collection="com.example.post")
    assert event is not None


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        "[]",
        json.dumps({"commit": {}}),
    ],
)
def test_unreadable_payloads_raise(raw: str) -> None:
    with pytest.raises(MalformedEventError):
        parse_post_event(raw)


def test_eligible_commit_without_record_raises() -> None:
    message = make_commit_message("p1")
    commit = message["commit"]
    assert isinstance(commit, dict)
    del commit["record"]

    with pytest.raises(MalformedEventError, match="no record"):
        parse_post_event(message)


def test_eligible_commit_with_invalid_record_raises() -> None:
    message = make_commit_message("p1")
    commit = message["commit"]
    assert isinstance(commit, dict)
    commit["record"] = {"text": "missing timestamp"}

    with pytest.raises(MalformedEventError, match="Invalid post record p1"):
        parse_post_event(message)


def test_partial_reply_keeps_known_side() -> None:
    message = make_commit_message("p2", parent="at://x/p1")

    event = parse_post_event(message)

    assert event is not None
    assert event.reply == ReplyReference(parent_uri="at://x/p1", root_uri=None)
    assert not event.reply.is_complete


def test_blank_or_empty_reply_refs_become_absent() -> None:
    message = make_commit_message("p2")
    commit = message["commit"]
    assert isinstance(commit, dict)
    record = commit["record"]
    assert isinstance(record, dict)
    record["reply"] = {"parent": {"uri": "  "}, "root": {}}

    event = parse_post_event(message)

    assert event is not None
    assert event.reply is None


def test_reply_uris_are_kept_verbatim() -> None:
    message = make_commit_message("p2", parent=" at://x/p1 ", root="at://x/p0")

    event = parse_post_event(message)

    assert event is not None
    assert event.reply == ReplyReference(parent_uri=" at://x/p1 ", root_uri="at://x/p0")
