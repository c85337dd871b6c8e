#!/usr/bin/env python3
# ansi_art/rendering/backend.py
"""Interface and shared sampling helpers for the render backends."""

from __future__ import annotations

from typing import Optional

import numpy as np

from ansi_art.preprocess import PreparedImage
from ansi_art.rendering import binarize
from ansi_art.rendering.palette import ColorMode
from ansi_art.rendering.render_config import RenderConfig
from ansi_art.rendering.result import RenderResult
from ansi_art.rendering.windowing import ImageWindow, to_windows_exact

__all__ = ["RenderBackend"]


class RenderBackend:
    """Interface for all renderers."""
    name: str = "base"

    def render(self, prepared: PreparedImage, cfg: RenderConfig) -> RenderResult:
        raise NotImplementedError

    @staticmethod
    def _luma(prepared: PreparedImage) -> np.ndarray:
        return np.asarray(prepared.scaled.convert("L"), dtype=np.uint8)

    @staticmethod
    def _binarized(prepared: PreparedImage, cfg: RenderConfig) -> np.ndarray:
        """Black/white luma at working resolution, inverted after binarizing."""
        luma = RenderBackend._luma(prepared)
        if cfg.threshold is None:
            luma = binarize.otsu_threshold(luma)
        else:
            luma = binarize.threshold(luma, cfg.threshold)
        if cfg.invert:
            luma = binarize.invert(luma)
        return luma

    @staticmethod
    def _color_grid(prepared: PreparedImage, cfg: RenderConfig) -> Optional[np.ndarray]:
        """
        RGB at one pixel per output cell, or None when the color policy
        ignores sampled pixels.
        """
        if cfg.color is ColorMode.FIXED:
            return None
        img = prepared.scaled
        if img.size != prepared.size:
            img = img.resize(prepared.size, cfg.resample)
        return np.asarray(img, dtype=np.uint8)

    @staticmethod
    def _cells(buf: np.ndarray, width: int, height: int) -> ImageWindow:
        """Split buf into width x height cells; RuntimeError if it doesn't tile exactly."""
        grid = to_windows_exact(buf, width, height)
        if grid is None:
            h, w = buf.shape[:2]
            raise RuntimeError(f"working image {w}x{h} is not a whole number of {width}x{height} cells")
        return grid
