from __future__ import annotations

import random

import pytest

from replygraph.domain.graph import PALETTE, color_picker, pick_color


def test_pick_color_draws_from_palette() -> None:
    rng = random.Random(7)

    colors = {pick_color(rng) for _ in range(200)}

    assert colors <= set(PALETTE)
    assert len(colors) > 1


def test_seeded_pickers_are_reproducible() -> None:
    first = color_picker(random.Random(42))
    second = color_picker(random.Random(42))

    assert [first() for _ in range(20)] == [second() for _ in range(20)]


def test_custom_palette_is_respected() -> None:
    picker = color_picker(random.Random(1), palette=("#000000",))

    assert picker() == "#000000"


def test_empty_palette_is_rejected() -> None:
    with pytest.raises(ValueError, match="at least one color"):
        pick_color(random.Random(1), palette=())
