"""Merge one post event into the reply graph.

The reconciler is the only place nodes and links are created. It reads the
previous snapshot, never mutates it, and returns a new one with:

- the posting node upserted (content refreshed, color kept),
- placeholder nodes for reply targets not seen yet,
- reply links appended only when their ``(source, target)`` pair is new.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .model import GraphSnapshot, Link, LinkKey, Node
from .palette import pick_color as default_pick_color

if TYPE_CHECKING:
    from replygraph.domain.events import PostEvent, ReplyReference

    from .palette import ColorPicker


def reconcile(
    graph: GraphSnapshot,
    event: PostEvent,
    *,
    pick_color: ColorPicker = default_pick_color,
) -> GraphSnapshot:
    """Return the snapshot that follows ``graph`` once ``event`` is applied."""

    # dict keeps first-insertion order, so upserts keep a node's position
    nodes: dict[str, Node] = {node.id: node for node in graph.nodes}
    link_keys: set[LinkKey] = {link.key for link in graph.links}
    new_links: list[Link] = []

    new_id = event.rkey
    existing = nodes.get(new_id)
    nodes[new_id] = Node(
        id=new_id,
        color=existing.color if existing is not None else pick_color(),
        text=event.text,
        created_at=event.created_at,
    )

    if event.reply is not None:
        _merge_reply(new_id, event.reply, nodes, link_keys, new_links, pick_color)

    return GraphSnapshot.build(nodes.values(), (*graph.links, *new_links))


def _merge_reply(
    new_id: str,
    reply: ReplyReference,
    nodes: dict[str, Node],
    link_keys: set[LinkKey],
    new_links: list[Link],
    pick_color: ColorPicker,
) -> None:
    parent_id = reply.parent_uri
    root_id = reply.root_uri

    for node_id in (parent_id, root_id):
        if node_id is not None and node_id not in nodes:
            nodes[node_id] = Node(id=node_id, color=pick_color())

    if parent_id is None:
        # both links start or end at the parent
        return
    _append_link(Link(source=new_id, target=parent_id), link_keys, new_links)
    if root_id is not None and root_id != parent_id:
        _append_link(Link(source=parent_id, target=root_id), link_keys, new_links)


def _append_link(link: Link, link_keys: set[LinkKey], new_links: list[Link]) -> None:
    if link.key in link_keys:
        return
    link_keys.add(link.key)
    new_links.append(link)
