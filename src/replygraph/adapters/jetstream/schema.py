"""Pydantic models describing Jetstream commit messages."""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class JetstreamBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class StrongRefPayload(JetstreamBaseModel):
    uri: str | None = None
    cid: str | None = None

    _normalize_uri = field_validator("uri", mode="before")(_blank_to_none)


class ReplyPayload(JetstreamBaseModel):
    parent: StrongRefPayload | None = None
    root: StrongRefPayload | None = None


class PostRecordPayload(JetstreamBaseModel):
    type: str | None = Field(default=None, alias="$type")
    text: str
    created_at: str = Field(alias="createdAt")
    reply: ReplyPayload | None = None
    langs: list[str] | None = None


class CommitPayload(JetstreamBaseModel):
    operation: str
    collection: str
    rkey: str
    rev: str | None = None
    cid: str | None = None
    record: Mapping[str, object] | None = None


class JetstreamMessage(JetstreamBaseModel):
    kind: str
    did: str | None = None
    time_us: int | None = None
    commit: CommitPayload | None = None

    def is_post_creation(self, collection: str) -> bool:
        return (
            self.kind == "commit"
            and self.commit is not None
            and self.commit.operation == "create"
            and self.commit.collection == collection
        )


JetstreamMessageInput = JetstreamMessage | Mapping[str, object] | str | bytes
