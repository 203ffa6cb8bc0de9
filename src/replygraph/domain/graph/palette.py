"""Node color selection."""

from __future__ import annotations

import random
from collections.abc import Callable
from functools import partial
from typing import Final

PALETTE: Final[tuple[str, ...]] = (
    "#ff6b6b",
    "#4ecdc4",
    "#45b7d1",
    "#96ceb4",
    "#ffeead",
    "#ff9999",
)

ColorPicker = Callable[[], str]


def pick_color(rng: random.Random | None = None, *, palette: tuple[str, ...] = PALETTE) -> str:
    """Return one palette entry chosen by ``rng`` (the module RNG when omitted)."""

    if not palette:
        raise ValueError("Palette must contain at least one color")
    index = (rng or random).randrange(len(palette))
    return palette[index]


def color_picker(
    rng: random.Random | None = None,
    *,
    palette: tuple[str, ...] = PALETTE,
) -> ColorPicker:
    """Bind a random source into a zero-argument picker for ``reconcile``."""

    return partial(pick_color, rng, palette=palette)
