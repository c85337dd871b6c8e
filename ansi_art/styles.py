#!/usr/bin/env python3
# ansi_art/styles.py
"""
Cell styles for rendered output.

A CellStyle renders two ways:
- sgr_prefix(): raw ANSI SGR escape, used for terminal output and saved files.
- pt_style(): prompt_toolkit style string ("fg:#RRGGBB bg:#RRGGBB bold"),
  used when the result is embedded as FormattedText.

Colors are either an (r, g, b) triple (24-bit) or an int (256-color index).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ansi_art.rendering.palette import Color, palette_rgb

ESC = "\x1b["
RESET = ESC + "0m"

__all__ = ["CellStyle", "PLAIN", "RESET"]


def _sgr_color(color: Color, base: int) -> str:
    # base 38 = foreground, 48 = background
    if isinstance(color, int):
        return f"{base};5;{color}"
    r, g, b = color
    return f"{base};2;{r};{g};{b}"


def _hex(color: Color) -> str:
    r, g, b = palette_rgb(color) if isinstance(color, int) else color
    return f"#{r:02x}{g:02x}{b:02x}"


@dataclass(frozen=True)
class CellStyle:
    fg: Optional[Color] = None
    bg: Optional[Color] = None
    bold: bool = False
    blink: bool = False
    underline: bool = False

    @property
    def is_plain(self) -> bool:
        return self == PLAIN

    def sgr_prefix(self) -> str:
        codes: List[str] = []
        if self.bold:
            codes.append("1")
        if self.underline:
            codes.append("4")
        if self.blink:
            codes.append("5")
        if self.fg is not None:
            codes.append(_sgr_color(self.fg, 38))
        if self.bg is not None:
            codes.append(_sgr_color(self.bg, 48))
        if not codes:
            return ""
        return ESC + ";".join(codes) + "m"

    def pt_style(self) -> str:
        parts: List[str] = []
        if self.fg is not None:
            parts.append(f"fg:{_hex(self.fg)}")
        if self.bg is not None:
            parts.append(f"bg:{_hex(self.bg)}")
        if self.bold:
            parts.append("bold")
        if self.blink:
            parts.append("blink")
        if self.underline:
            parts.append("underline")
        return " ".join(parts)


PLAIN = CellStyle()
