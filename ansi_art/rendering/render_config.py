#!/usr/bin/env python3
# ansi_art/rendering/render_config.py
"""
Immutable render configuration.

Every setter returns a new RenderConfig; nothing is modified in place:

    cfg = RenderConfig().braille().set_threshold(90).set_size(80, 0).set_style(bold=True)

The render mode fixes the sampling scale (pixels per output cell), so the
scale is always a positive pair.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Optional, Tuple

from ansi_art.preprocess import DEFAULT_FILTER, FILTERS, resample_filter
from ansi_art.rendering.font import PRINTABLE
from ansi_art.rendering.palette import RGB, ColorMode, to_color
from ansi_art.styles import CellStyle
from ansi_art.terminal import get_terminal_size

__all__ = ["RenderMode", "RenderConfig", "SCALES", "DEFAULT_CHARSET"]

DEFAULT_CHARSET = PRINTABLE


class RenderMode(Enum):
    ASCII_GRADIENT = "ascii_gradient"
    ASCII_QUADRANCE = "ascii_quadrance"
    ASCII_SSIM = "ascii_ssim"
    BRAILLE = "braille"
    SEXTANT = "sextant"
    BLOCK_HALF = "block_half"
    BLOCK_WHOLE = "block_whole"

    @property
    def family(self) -> str:
        """ascii | braille | sextant | block"""
        return self.value.split("_", 1)[0]


# (width, height) pixels sampled per output cell
SCALES: Dict[RenderMode, Tuple[int, int]] = {
    RenderMode.ASCII_GRADIENT: (1, 1),
    RenderMode.ASCII_QUADRANCE: (5, 7),
    RenderMode.ASCII_SSIM: (5, 7),
    RenderMode.BRAILLE: (2, 4),
    RenderMode.SEXTANT: (2, 3),
    RenderMode.BLOCK_HALF: (1, 2),
    RenderMode.BLOCK_WHOLE: (1, 1),
}


def _rgb(value) -> RGB:
    r, g, b = (max(0, min(255, int(c))) for c in value)
    return r, g, b


@dataclass(frozen=True)
class RenderConfig:
    mode: RenderMode = RenderMode.ASCII_QUADRANCE
    charset: str = DEFAULT_CHARSET
    size: Tuple[int, int] = (0, 0)          # output cells; 0 = derive from aspect ratio
    filter: str = DEFAULT_FILTER
    contrast: float = 0.0
    brightness: int = 0
    invert: bool = False
    bold: bool = False
    blink: bool = False
    underline: bool = False
    color: ColorMode = ColorMode.FIXED
    foreground: Optional[RGB] = None
    background: Optional[RGB] = None
    threshold: Optional[int] = None         # None = Otsu

    # --- derived

    @property
    def scale(self) -> Tuple[int, int]:
        return SCALES[self.mode]

    @property
    def resample(self) -> int:
        return resample_filter(self.filter)

    @property
    def inverts_source(self) -> bool:
        """ASCII and block modes invert the image; braille/sextant invert after binarizing."""
        return self.mode.family in ("ascii", "block")

    def resolve_size(self, image_dims: Tuple[int, int]) -> Tuple[int, int]:
        """
        Output size for an image of image_dims:
        (0, 0) -> image size, (0, h) / (w, 0) -> keep aspect ratio,
        (w, h) -> as requested. A derived side never drops below 1.
        """
        img_w, img_h = image_dims
        w, h = self.size
        if w == 0 and h == 0:
            return img_w, img_h
        if w and h:
            return w, h
        if img_w == 0 or img_h == 0:
            return (w or img_w), (h or img_h)
        aspect = img_w / img_h
        if w == 0:
            return max(1, int(aspect * h)), h
        return w, max(1, int(w / aspect))

    # --- mode

    def set_mode(self, mode: RenderMode) -> "RenderConfig":
        return replace(self, mode=mode)

    def gradient(self) -> "RenderConfig":
        return self.set_mode(RenderMode.ASCII_GRADIENT)

    def pattern_quadrance(self) -> "RenderConfig":
        return self.set_mode(RenderMode.ASCII_QUADRANCE)

    def pattern_ssim(self) -> "RenderConfig":
        return self.set_mode(RenderMode.ASCII_SSIM)

    def braille(self) -> "RenderConfig":
        return self.set_mode(RenderMode.BRAILLE)

    def sextant(self) -> "RenderConfig":
        return self.set_mode(RenderMode.SEXTANT)

    def half_block(self) -> "RenderConfig":
        return self.set_mode(RenderMode.BLOCK_HALF)

    def whole_block(self) -> "RenderConfig":
        return self.set_mode(RenderMode.BLOCK_WHOLE)

    def set_charset(self, charset: str) -> "RenderConfig":
        return replace(self, charset=charset)

    # --- geometry

    def set_size(self, width: int, height: int) -> "RenderConfig":
        return replace(self, size=(max(0, int(width)), max(0, int(height))))

    def fullscreen(self) -> "RenderConfig":
        """Size to the current terminal; unchanged when there is no terminal."""
        term = get_terminal_size()
        if term is None:
            return self
        return self.set_size(*term)

    def set_filter(self, name: str) -> "RenderConfig":
        name = (name or "").upper()
        return replace(self, filter=name if name in FILTERS else DEFAULT_FILTER)

    # --- image adjustments

    def set_contrast(self, value: float) -> "RenderConfig":
        return replace(self, contrast=float(value))

    def set_brightness(self, value: int) -> "RenderConfig":
        return replace(self, brightness=int(value))

    def set_invert(self, flag: bool = True) -> "RenderConfig":
        return replace(self, invert=flag)

    def set_threshold(self, value: int) -> "RenderConfig":
        return replace(self, threshold=max(0, min(255, int(value))))

    def otsu_threshold(self) -> "RenderConfig":
        return replace(self, threshold=None)

    # --- style

    def set_style(
        self,
        bold: Optional[bool] = None,
        blink: Optional[bool] = None,
        underline: Optional[bool] = None,
    ) -> "RenderConfig":
        return replace(
            self,
            bold=self.bold if bold is None else bold,
            blink=self.blink if blink is None else blink,
            underline=self.underline if underline is None else underline,
        )

    def normal(self) -> "RenderConfig":
        """Drop styles, fixed colors, inversion and any manual threshold."""
        return replace(
            self,
            invert=False,
            bold=False,
            blink=False,
            underline=False,
            foreground=None,
            background=None,
            threshold=None,
        )

    def set_foreground(self, rgb: RGB) -> "RenderConfig":
        return replace(self, foreground=_rgb(rgb), color=ColorMode.FIXED)

    def set_background(self, rgb: RGB) -> "RenderConfig":
        return replace(self, background=_rgb(rgb), color=ColorMode.FIXED)

    def true_color(self) -> "RenderConfig":
        return replace(self, color=ColorMode.TRUECOLOR)

    def terminal_color(self) -> "RenderConfig":
        return replace(self, color=ColorMode.PALETTE)

    # --- cell styles

    def _style(self, fg=None, bg=None) -> CellStyle:
        return CellStyle(fg=fg, bg=bg, bold=self.bold, blink=self.blink, underline=self.underline)

    def fixed_style(self) -> CellStyle:
        """Style from the user colors only; background alone gets a black foreground."""
        fg, bg = self.foreground, self.background
        if fg is None and bg is not None:
            fg = (0, 0, 0)
        return self._style(fg, bg)

    def sample_style(self, rgb: Optional[RGB]) -> CellStyle:
        """Glyph colored by a sampled pixel (true color / palette), else the fixed style."""
        if self.color is ColorMode.FIXED or rgb is None:
            return self.fixed_style()
        return self._style(to_color(rgb, self.color))

    def block_style(self, upper: RGB, lower: RGB) -> CellStyle:
        """Foreground from upper, background from lower. Blocks always carry color."""
        mode = ColorMode.PALETTE if self.color is ColorMode.PALETTE else ColorMode.TRUECOLOR
        return self._style(to_color(upper, mode), to_color(lower, mode))
