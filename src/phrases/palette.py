"""Colour assignment for ranked phrases."""
from __future__ import annotations

from collections.abc import Iterable, Sequence

from . import ColoredPhrase, RankedPhrase

__all__ = ["DARK_PALETTE", "LIGHT_PALETTE", "assign_colors", "palette_for"]

LIGHT_PALETTE: tuple[str, ...] = (
    "#1d70b8",  # blue
    "#003078",  # dark blue
    "#0b0c0c",  # black
    "#144e81",  # mid blue
    "#00437b",  # navy
    "#2e3133",  # dark grey
    "#004d40",  # dark teal
    "#3b3b3b",  # charcoal
    "#4c2c92",  # purple
    "#006435",  # dark green
)

DARK_PALETTE: tuple[str, ...] = (
    "#b1d7ff",  # light blue
    "#ffffff",  # white
    "#e5e5e5",  # light grey
    "#d5e8f3",  # pale blue
    "#e7eaed",  # pale grey
    "#85994b",  # light green
    "#f499be",  # light pink
    "#f47738",  # orange
)

_PALETTES: dict[str, tuple[str, ...]] = {"light": LIGHT_PALETTE, "dark": DARK_PALETTE}


def palette_for(mode: str) -> tuple[str, ...]:
    try:
        return _PALETTES[mode.strip().lower()]
    except KeyError as exc:
        raise ValueError(f"Unknown palette mode '{mode}'. Expected one of: {', '.join(sorted(_PALETTES))}") from exc


def assign_colors(
    entries: Iterable[RankedPhrase],
    palette: Sequence[str],
    *,
    start: int = 0,
) -> list[ColoredPhrase]:
    """Colour entries by position, cycling through ``palette`` from ``start``."""

    if not palette:
        raise ValueError("Palette must contain at least one colour.")
    size = len(palette)
    return [
        ColoredPhrase(phrase=entry.phrase, weight=entry.weight, color=palette[(start + index) % size])
        for index, entry in enumerate(entries)
    ]
