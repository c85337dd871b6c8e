#!/usr/bin/env python3
# ansi_art/rendering/ascii_mode.py
"""
ASCII renderer.

- Gradient: one luma pixel per cell mapped linearly onto the character set.
- Pattern: each cell reads a 5x7 luma window and picks the character whose
  font bitmap fits best, by quadrance or by structural similarity.

Glyphs are colored from the image resized to one pixel per cell.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from ansi_art.preprocess import PreparedImage
from ansi_art.rendering.backend import RenderBackend
from ansi_art.rendering.font import (
    GLYPH_H,
    GLYPH_W,
    build_font_set,
    gradient_char,
    maximize_structural_similarity,
    minimize_quadrance,
    printable,
)
from ansi_art.rendering.render_config import RenderConfig, RenderMode
from ansi_art.rendering.result import RenderResult

log = logging.getLogger(__name__)


class AsciiRenderer(RenderBackend):
    name = "ascii"

    @staticmethod
    def _pixel(grid: Optional[np.ndarray], x: int, y: int):
        return None if grid is None else grid[y, x]

    def render(self, prepared: PreparedImage, cfg: RenderConfig) -> RenderResult:
        luma = self._luma(prepared)
        colors = self._color_grid(prepared, cfg)
        if cfg.mode is RenderMode.ASCII_GRADIENT:
            return self._gradient(prepared, cfg, luma, colors)
        return self._pattern(prepared, cfg, luma, colors)

    def _gradient(self, prepared, cfg, luma, colors) -> RenderResult:
        cols, rows = prepared.size
        chars = list(printable(cfg.charset))
        result = RenderResult()
        for y in range(rows):
            for x in range(cols):
                ch = gradient_char(luma[y, x], chars)
                result.append(ch, cfg.sample_style(self._pixel(colors, x, y)))
            result.end_row()
        return result.seal()

    def _pattern(self, prepared, cfg, luma, colors) -> RenderResult:
        font_set = build_font_set(cfg.charset)
        log.debug("font set of %d glyphs: %r", len(font_set), font_set.chars)
        if cfg.mode is RenderMode.ASCII_SSIM:
            match = maximize_structural_similarity
        else:
            match = minimize_quadrance

        grid = self._cells(luma, GLYPH_W, GLYPH_H)

        result = RenderResult()
        for y, row in enumerate(grid.rows()):
            for x, win in enumerate(row):
                ch = match(win.samples(), font_set)
                result.append(ch, cfg.sample_style(self._pixel(colors, x, y)))
            result.end_row()
        return result.seal()
