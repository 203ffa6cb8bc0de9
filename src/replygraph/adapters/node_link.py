"""Node-link JSON export of reply graph snapshots.

The shape matches what force-directed graph renderers consume as ``graphData``:
``{"nodes": [{"id", "color", "label", ...}], "links": [{"source", "target"}]}``.
``label`` is the tooltip text: the post text, or its id for placeholders.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from replygraph.domain.graph import GraphSnapshot, Node

NodeLinkData = dict[str, list[dict[str, str]]]


def _node_to_dict(node: Node) -> dict[str, str]:
    data = {"id": node.id, "color": node.color, "label": node.label}
    if node.text is not None:
        data["text"] = node.text
    if node.created_at is not None:
        data["createdAt"] = node.created_at
    return data


def snapshot_to_node_link(snapshot: GraphSnapshot) -> NodeLinkData:
    return {
        "nodes": [_node_to_dict(node) for node in snapshot.nodes],
        "links": [{"source": link.source, "target": link.target} for link in snapshot.links],
    }


def write_snapshot(snapshot: GraphSnapshot, path: Path) -> Path:
    """Write ``snapshot`` as node-link JSON, creating parent directories."""

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(snapshot_to_node_link(snapshot), handle, ensure_ascii=False, indent=2)
    return path
