from __future__ import annotations

from replygraph.domain.graph import GraphSnapshot, GraphStore, Node, reconcile
from tests.support.posts import make_post_event


def test_store_starts_empty() -> None:
    assert GraphStore().get() == GraphSnapshot.empty()


def test_replace_swaps_snapshot_but_readers_keep_theirs() -> None:
    store = GraphStore()
    held = store.get()

    store.replace(reconcile(held, make_post_event("p1"), pick_color=lambda: "a"))

    assert held.nodes == ()
    assert store.get().nodes == (
        Node(id="p1", color="a", text="post p1", created_at="2024-11-20T12:00:00.000Z"),
    )
