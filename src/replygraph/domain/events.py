"""Domain events consumed by the reply graph reconciler."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class ReplyReference:
    """Where a reply points.

    Either URI can be ``None`` when the upstream reply object was incomplete;
    the reconciler degrades instead of failing on such references.
    """

    parent_uri: str | None
    root_uri: str | None

    @property
    def is_complete(self) -> bool:
        return self.parent_uri is not None and self.root_uri is not None


@dataclass(slots=True, frozen=True)
class PostEvent:
    """One eligible post-creation event."""

    rkey: str
    text: str
    created_at: str
    reply: ReplyReference | None = None
