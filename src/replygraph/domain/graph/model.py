"""Immutable snapshot types for the reply graph.

A snapshot is never mutated after construction. Reconciliation produces a new
snapshot per event and the store swaps its reference, so readers can hold an
old snapshot while the next one is being built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

LinkKey = tuple[str, str]


@dataclass(slots=True, frozen=True)
class Node:
    id: str
    color: str
    text: str | None = None
    created_at: str | None = None

    @property
    def is_placeholder(self) -> bool:
        return self.text is None and self.created_at is None

    @property
    def label(self) -> str:
        return self.text or f"Post ID: {self.id}"


@dataclass(slots=True, frozen=True)
class Link:
    """Directed edge from a reply to the post it replies to."""

    source: str
    target: str

    @property
    def key(self) -> LinkKey:
        return (self.source, self.target)


@dataclass(slots=True, frozen=True)
class GraphSnapshot:
    nodes: tuple[Node, ...] = ()
    links: tuple[Link, ...] = ()
    _nodes_by_id: dict[str, Node] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_nodes_by_id", {node.id: node for node in self.nodes})

    @classmethod
    def empty(cls) -> GraphSnapshot:
        return cls()

    @classmethod
    def build(cls, nodes: Iterable[Node], links: Iterable[Link]) -> GraphSnapshot:
        return cls(nodes=tuple(nodes), links=tuple(links))

    @property
    def node_ids(self) -> frozenset[str]:
        return frozenset(self._nodes_by_id)

    @property
    def link_keys(self) -> frozenset[LinkKey]:
        return frozenset(link.key for link in self.links)

    def node_for(self, node_id: str) -> Node | None:
        return self._nodes_by_id.get(node_id)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes_by_id

    def validate_invariants(self) -> None:
        if len(self._nodes_by_id) != len(self.nodes):
            seen: set[str] = set()
            for node in self.nodes:
                if node.id in seen:
                    raise ValueError(f"Duplicate node id in snapshot: {node.id}")
                seen.add(node.id)

        seen_links: set[LinkKey] = set()
        for link in self.links:
            if link.key in seen_links:
                raise ValueError(f"Duplicate link in snapshot: {link.source} -> {link.target}")
            seen_links.add(link.key)
            self._assert_node_exists(link.source, role="source")
            self._assert_node_exists(link.target, role="target")

    def _assert_node_exists(self, node_id: str, *, role: str) -> None:
        if node_id not in self._nodes_by_id:
            raise ValueError(f"Link {role} does not exist in snapshot: {node_id}")
