#!/usr/bin/env python3
# ansi_art/rendering/sextant_mode.py
"""
Sextant (2x3 block) renderer.
Uses the Symbols for Legacy Computing sextants (U+1FB00..U+1FB3B) to encode
six subpixels per cell.

The sextant block leaves out the four patterns that already exist as
older block elements (empty, left half, right half, full), so those
offsets map to legacy glyphs instead.
"""

from __future__ import annotations

from ansi_art.preprocess import PreparedImage
from ansi_art.rendering.backend import RenderBackend
from ansi_art.rendering.render_config import RenderConfig
from ansi_art.rendering.result import RenderResult
from ansi_art.rendering.windowing import Window

# Bits: row-major, little-endian
#  1 2
#  3 4
#  5 6
SEXTANT_BITS = (
    (0x01, 0x02),
    (0x04, 0x08),
    (0x10, 0x20),
)

LEFT_HALF = "▌"
FULL_BLOCK = "█"

# 42 is the right half pattern; it maps to the left half glyph too.
_RESERVED = {
    0: " ",
    21: LEFT_HALF,
    42: LEFT_HALF,
    63: FULL_BLOCK,
}


def sextant_char(offset: int) -> str:
    if offset in _RESERVED:
        return _RESERVED[offset]
    # skip the reserved offsets below this one
    skipped = sum(1 for r in (0, 21, 42) if r < offset)
    return chr(0x1FB00 + offset - skipped)


def window_bits(win: Window) -> int:
    bits = 0
    for ry in range(3):
        for cx in range(2):
            if win.get_pixel(cx, ry) == 255:
                bits |= SEXTANT_BITS[ry][cx]
    return bits


class SextantRenderer(RenderBackend):
    name = "sextant"

    def render(self, prepared: PreparedImage, cfg: RenderConfig) -> RenderResult:
        luma = self._binarized(prepared, cfg)
        colors = self._color_grid(prepared, cfg)
        grid = self._cells(luma, 2, 3)

        fixed = cfg.fixed_style()
        result = RenderResult()
        for y, row in enumerate(grid.rows()):
            for x, win in enumerate(row):
                style = fixed if colors is None else cfg.sample_style(colors[y, x])
                result.append(sextant_char(window_bits(win)), style)
            result.end_row()
        return result.seal()
