"""Holder for the current reply graph snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field

from .model import GraphSnapshot


@dataclass(slots=True)
class GraphStore:
    """Single reference to the latest snapshot.

    Replacement is one attribute assignment on the event loop thread; readers
    keep whatever snapshot they fetched and must call ``get`` again to see
    later updates.
    """

    _snapshot: GraphSnapshot = field(default_factory=GraphSnapshot.empty)

    def get(self) -> GraphSnapshot:
        return self._snapshot

    def replace(self, snapshot: GraphSnapshot) -> None:
        self._snapshot = snapshot
