#!/usr/bin/env python3
# ansi_art/rendering/braille_mode.py
"""
Braille (2x4) renderer.
Encodes eight subpixels per terminal cell using Unicode Braille patterns.
The luma image is binarized (manual or Otsu threshold) and every white
subpixel raises its dot.
"""

from __future__ import annotations

from ansi_art.preprocess import PreparedImage
from ansi_art.rendering.backend import RenderBackend
from ansi_art.rendering.render_config import RenderConfig
from ansi_art.rendering.result import RenderResult
from ansi_art.rendering.windowing import Window

BRAILLE_BASE = 0x2800

# Braille bit positions:
#  dots: 1 4
#        2 5
#        3 6
#        7 8
# Unicode = 0x2800 | bits
DOT_BITS = (
    (0x01, 0x08),  # row 0: col 0 -> dot1, col 1 -> dot4
    (0x02, 0x10),  # row 1: col 0 -> dot2, col 1 -> dot5
    (0x04, 0x20),  # row 2: col 0 -> dot3, col 1 -> dot6
    (0x40, 0x80),  # row 3: col 0 -> dot7, col 1 -> dot8
)


def braille_char(bits: int) -> str:
    return chr(BRAILLE_BASE + bits)


def window_bits(win: Window) -> int:
    """Dot pattern of a binarized 2x4 window; 255 marks a raised dot."""
    bits = 0
    for ry in range(4):
        for cx in range(2):
            if win.get_pixel(cx, ry) == 255:
                bits |= DOT_BITS[ry][cx]
    return bits


class BrailleRenderer(RenderBackend):
    name = "braille"

    def render(self, prepared: PreparedImage, cfg: RenderConfig) -> RenderResult:
        luma = self._binarized(prepared, cfg)
        colors = self._color_grid(prepared, cfg)
        grid = self._cells(luma, 2, 4)

        fixed = cfg.fixed_style()
        result = RenderResult()
        for y, row in enumerate(grid.rows()):
            for x, win in enumerate(row):
                style = fixed if colors is None else cfg.sample_style(colors[y, x])
                result.append(braille_char(window_bits(win)), style)
            result.end_row()
        return result.seal()
