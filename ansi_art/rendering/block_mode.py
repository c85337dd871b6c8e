#!/usr/bin/env python3
# ansi_art/rendering/block_mode.py
"""
Colored block renderer.

- Half: each cell covers two vertical pixels, drawn as "▀" with the upper
  pixel as foreground and the lower pixel as background.
- Whole: one pixel per cell, drawn as a space on the pixel's background.

Blocks have no shape of their own, so color is always emitted: palette mode
reduces to the 256-color table, everything else is passed through as RGB.
"""

from __future__ import annotations

import numpy as np

from ansi_art.preprocess import PreparedImage
from ansi_art.rendering.backend import RenderBackend
from ansi_art.rendering.render_config import RenderConfig, RenderMode
from ansi_art.rendering.result import RenderResult

UPPER_HALF = "▀"
BLACK = (0, 0, 0)


class BlockRenderer(RenderBackend):
    name = "block"

    def render(self, prepared: PreparedImage, cfg: RenderConfig) -> RenderResult:
        rgb = np.asarray(prepared.scaled, dtype=np.uint8)
        if cfg.mode is RenderMode.BLOCK_HALF:
            return self._half(rgb, cfg)
        return self._whole(rgb, cfg)

    @staticmethod
    def _half(rgb: np.ndarray, cfg: RenderConfig) -> RenderResult:
        grid = BlockRenderer._cells(rgb, 1, 2)
        result = RenderResult()
        for row in grid.rows():
            for win in row:
                style = cfg.block_style(win.get_pixel(0, 0), win.get_pixel(0, 1))
                result.append(UPPER_HALF, style)
            result.end_row()
        return result.seal()

    @staticmethod
    def _whole(rgb: np.ndarray, cfg: RenderConfig) -> RenderResult:
        h, w = rgb.shape[:2]
        result = RenderResult()
        for y in range(h):
            for x in range(w):
                result.append(" ", cfg.block_style(BLACK, rgb[y, x]))
            result.end_row()
        return result.seal()
