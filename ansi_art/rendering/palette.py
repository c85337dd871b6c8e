#!/usr/bin/env python3
# ansi_art/rendering/palette.py
"""
Color policies and the xterm 256-color palette.

- FIXED: the cell color comes from the user foreground/background only.
- TRUECOLOR: the sampled RGB triple is emitted unchanged (24-bit).
- PALETTE: the sampled RGB triple is replaced by the index of the closest
  palette entry (Euclidean distance in RGB, first minimum in index order).
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import List, Tuple, Union

import numpy as np

RGB = Tuple[int, int, int]
Color = Union[RGB, int]

__all__ = [
    "RGB",
    "Color",
    "ColorMode",
    "XTERM_256",
    "nearest_index",
    "palette_rgb",
    "to_color",
]


class ColorMode(Enum):
    FIXED = "fixed"
    TRUECOLOR = "truecolor"
    PALETTE = "palette"


def _build_xterm_256() -> np.ndarray:
    table: List[RGB] = [
        (0, 0, 0), (128, 0, 0), (0, 128, 0), (128, 128, 0),
        (0, 0, 128), (128, 0, 128), (0, 128, 128), (192, 192, 192),
        (128, 128, 128), (255, 0, 0), (0, 255, 0), (255, 255, 0),
        (0, 0, 255), (255, 0, 255), (0, 255, 255), (255, 255, 255),
    ]
    levels = (0, 95, 135, 175, 215, 255)
    table.extend((r, g, b) for r in levels for g in levels for b in levels)
    table.extend((v, v, v) for v in range(8, 248, 10))
    return np.asarray(table, dtype=np.int32)


XTERM_256 = _build_xterm_256()


@lru_cache(maxsize=65536)
def nearest_index(r: int, g: int, b: int) -> int:
    """Index (0-255) of the closest palette entry to (r, g, b)."""
    d = XTERM_256 - np.array((r, g, b), dtype=np.int32)
    return int(np.argmin((d * d).sum(axis=1)))


def palette_rgb(index: int) -> RGB:
    r, g, b = XTERM_256[index]
    return int(r), int(g), int(b)


def to_color(rgb: RGB, mode: ColorMode) -> Color:
    """Color value carried by a cell style for a sampled pixel."""
    r, g, b = (int(c) for c in rgb)
    if mode is ColorMode.PALETTE:
        return nearest_index(r, g, b)
    return (r, g, b)
