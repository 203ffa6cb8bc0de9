"""Reply graph snapshot model, reconciler, and store."""

from __future__ import annotations

from .model import GraphSnapshot, Link, LinkKey, Node
from .palette import PALETTE, ColorPicker, color_picker, pick_color
from .reconcile import reconcile
from .store import GraphStore

__all__ = [
    "PALETTE",
    "ColorPicker",
    "GraphSnapshot",
    "GraphStore",
    "Link",
    "LinkKey",
    "Node",
    "color_picker",
    "pick_color",
    "reconcile",
]
