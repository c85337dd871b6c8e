#!/usr/bin/env python3
# ansi_art/rendering/font.py
"""
5x7 monochrome font catalog and glyph matching.

Each printable ASCII character has a 5x7 bitmap of 0/255 samples stored
row-major (sample (x, y) at index y * 5 + x). A window of luma samples is
matched against a candidate font set either by quadrance (lowest sum of
squared differences wins) or by structural similarity (highest SSIM wins).

Gradient mode skips bitmaps entirely and maps luma linearly onto a list
of characters.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple, Union

import numpy as np

GLYPH_W = 5
GLYPH_H = 7
GLYPH_SIZE = GLYPH_W * GLYPH_H

DYNAMIC_RANGE = 255.0
SSIM_K1 = 0.01
SSIM_K2 = 0.03

__all__ = [
    "GlyphRecord",
    "FontSet",
    "PRINTABLE",
    "glyph",
    "build_font_set",
    "minimize_quadrance",
    "maximize_structural_similarity",
    "gradient_char",
    "printable",
]

# Monochron 5x7 font, 0x20..0x7E.
# Five bytes per glyph, one per column left to right; bit 0 is the top row.
_FONT_5X7: Tuple[Tuple[int, int, int, int, int], ...] = (
    (0x00, 0x00, 0x00, 0x00, 0x00),  # (space)
    (0x00, 0x00, 0x5F, 0x00, 0x00),  # !
    (0x00, 0x07, 0x00, 0x07, 0x00),  # "
    (0x14, 0x7F, 0x14, 0x7F, 0x14),  # #
    (0x24, 0x2A, 0x7F, 0x2A, 0x12),  # $
    (0x23, 0x13, 0x08, 0x64, 0x62),  # %
    (0x36, 0x49, 0x55, 0x22, 0x50),  # &
    (0x00, 0x05, 0x03, 0x00, 0x00),  # '
    (0x00, 0x1C, 0x22, 0x41, 0x00),  # (
    (0x00, 0x41, 0x22, 0x1C, 0x00),  # )
    (0x08, 0x2A, 0x1C, 0x2A, 0x08),  # *
    (0x08, 0x08, 0x3E, 0x08, 0x08),  # +
    (0x00, 0x50, 0x30, 0x00, 0x00),  # ,
    (0x08, 0x08, 0x08, 0x08, 0x08),  # -
    (0x00, 0x60, 0x60, 0x00, 0x00),  # .
    (0x20, 0x10, 0x08, 0x04, 0x02),  # /
    (0x3E, 0x51, 0x49, 0x45, 0x3E),  # 0
    (0x00, 0x42, 0x7F, 0x40, 0x00),  # 1
    (0x42, 0x61, 0x51, 0x49, 0x46),  # 2
    (0x21, 0x41, 0x45, 0x4B, 0x31),  # 3
    (0x18, 0x14, 0x12, 0x7F, 0x10),  # 4
    (0x27, 0x45, 0x45, 0x45, 0x39),  # 5
    (0x3C, 0x4A, 0x49, 0x49, 0x30),  # 6
    (0x01, 0x71, 0x09, 0x05, 0x03),  # 7
    (0x36, 0x49, 0x49, 0x49, 0x36),  # 8
    (0x06, 0x49, 0x49, 0x29, 0x1E),  # 9
    (0x00, 0x36, 0x36, 0x00, 0x00),  # :
    (0x00, 0x56, 0x36, 0x00, 0x00),  # ;
    (0x00, 0x08, 0x14, 0x22, 0x41),  # <
    (0x14, 0x14, 0x14, 0x14, 0x14),  # =
    (0x41, 0x22, 0x14, 0x08, 0x00),  # >
    (0x02, 0x01, 0x51, 0x09, 0x06),  # ?
    (0x32, 0x49, 0x79, 0x41, 0x3E),  # @
    (0x7E, 0x11, 0x11, 0x11, 0x7E),  # A
    (0x7F, 0x49, 0x49, 0x49, 0x36),  # B
    (0x3E, 0x41, 0x41, 0x41, 0x22),  # C
    (0x7F, 0x41, 0x41, 0x22, 0x1C),  # D
    (0x7F, 0x49, 0x49, 0x49, 0x41),  # E
    (0x7F, 0x09, 0x09, 0x01, 0x01),  # F
    (0x3E, 0x41, 0x41, 0x51, 0x32),  # G
    (0x7F, 0x08, 0x08, 0x08, 0x7F),  # H
    (0x00, 0x41, 0x7F, 0x41, 0x00),  # I
    (0x20, 0x40, 0x41, 0x3F, 0x01),  # J
    (0x7F, 0x08, 0x14, 0x22, 0x41),  # K
    (0x7F, 0x40, 0x40, 0x40, 0x40),  # L
    (0x7F, 0x02, 0x04, 0x02, 0x7F),  # M
    (0x7F, 0x04, 0x08, 0x10, 0x7F),  # N
    (0x3E, 0x41, 0x41, 0x41, 0x3E),  # O
    (0x7F, 0x09, 0x09, 0x09, 0x06),  # P
    (0x3E, 0x41, 0x51, 0x21, 0x5E),  # Q
    (0x7F, 0x09, 0x19, 0x29, 0x46),  # R
    (0x46, 0x49, 0x49, 0x49, 0x31),  # S
    (0x01, 0x01, 0x7F, 0x01, 0x01),  # T
    (0x3F, 0x40, 0x40, 0x40, 0x3F),  # U
    (0x1F, 0x20, 0x40, 0x20, 0x1F),  # V
    (0x7F, 0x20, 0x18, 0x20, 0x7F),  # W
    (0x63, 0x14, 0x08, 0x14, 0x63),  # X
    (0x03, 0x04, 0x78, 0x04, 0x03),  # Y
    (0x61, 0x51, 0x49, 0x45, 0x43),  # Z
    (0x00, 0x00, 0x7F, 0x41, 0x41),  # [
    (0x02, 0x04, 0x08, 0x10, 0x20),  # backslash
    (0x41, 0x41, 0x7F, 0x00, 0x00),  # ]
    (0x04, 0x02, 0x01, 0x02, 0x04),  # ^
    (0x40, 0x40, 0x40, 0x40, 0x40),  # _
    (0x00, 0x01, 0x02, 0x04, 0x00),  # `
    (0x20, 0x54, 0x54, 0x54, 0x78),  # a
    (0x7F, 0x48, 0x44, 0x44, 0x38),  # b
    (0x38, 0x44, 0x44, 0x44, 0x20),  # c
    (0x38, 0x44, 0x44, 0x48, 0x7F),  # d
    (0x38, 0x54, 0x54, 0x54, 0x18),  # e
    (0x08, 0x7E, 0x09, 0x01, 0x02),  # f
    (0x08, 0x14, 0x54, 0x54, 0x3C),  # g
    (0x7F, 0x08, 0x04, 0x04, 0x78),  # h
    (0x00, 0x44, 0x7D, 0x40, 0x00),  # i
    (0x20, 0x40, 0x44, 0x3D, 0x00),  # j
    (0x00, 0x7F, 0x10, 0x28, 0x44),  # k
    (0x00, 0x41, 0x7F, 0x40, 0x00),  # l
    (0x7C, 0x04, 0x18, 0x04, 0x78),  # m
    (0x7C, 0x08, 0x04, 0x04, 0x78),  # n
    (0x38, 0x44, 0x44, 0x44, 0x38),  # o
    (0x7C, 0x14, 0x14, 0x14, 0x08),  # p
    (0x08, 0x14, 0x14, 0x18, 0x7C),  # q
    (0x7C, 0x08, 0x04, 0x04, 0x08),  # r
    (0x48, 0x54, 0x54, 0x54, 0x20),  # s
    (0x04, 0x3F, 0x44, 0x40, 0x20),  # t
    (0x3C, 0x40, 0x40, 0x20, 0x7C),  # u
    (0x1C, 0x20, 0x40, 0x20, 0x1C),  # v
    (0x3C, 0x40, 0x30, 0x40, 0x3C),  # w
    (0x44, 0x28, 0x10, 0x28, 0x44),  # x
    (0x0C, 0x50, 0x50, 0x50, 0x3C),  # y
    (0x44, 0x64, 0x54, 0x4C, 0x44),  # z
    (0x00, 0x08, 0x36, 0x41, 0x00),  # {
    (0x00, 0x00, 0x7F, 0x00, 0x00),  # |
    (0x00, 0x41, 0x36, 0x08, 0x00),  # }
    (0x08, 0x04, 0x08, 0x10, 0x08),  # ~
)

PRINTABLE = "".join(chr(c) for c in range(0x20, 0x7F))


def _unpack(columns: Sequence[int]) -> Tuple[int, ...]:
    return tuple(
        255 if columns[x] & (1 << y) else 0
        for y in range(GLYPH_H)
        for x in range(GLYPH_W)
    )


@dataclass(frozen=True, order=True)
class GlyphRecord:
    """A character and its 35-sample bitmap."""
    ch: str
    data: Tuple[int, ...]

    def vector(self) -> np.ndarray:
        return np.asarray(self.data, dtype=np.float64)

    def quadrance(self, other: "GlyphRecord") -> float:
        """
        Sum of squared sample differences.
        0 for identical bitmaps, 35 * 255**2 for fully opposite ones.
        """
        d = self.vector() - other.vector()
        return float((d * d).sum())

    def structural_similarity(self, other: "GlyphRecord") -> float:
        return float(_ssim(self.vector()[None, :], other.vector())[0])


_SPACE = GlyphRecord(" ", (0,) * GLYPH_SIZE)
_CATALOG = {ch: GlyphRecord(ch, _unpack(cols)) for ch, cols in zip(PRINTABLE, _FONT_5X7)}


def glyph(ch: str) -> GlyphRecord:
    """Glyph for ch; anything outside printable ASCII becomes the space glyph."""
    return _CATALOG.get(ch, _SPACE)


class FontSet:
    """
    Sorted, de-duplicated candidate glyphs plus their stacked bitmaps.
    Built once per conversion and shared read-only by every cell.
    """

    def __init__(self, glyphs: Iterable[GlyphRecord]):
        self.glyphs: Tuple[GlyphRecord, ...] = tuple(sorted(set(glyphs)))
        if self.glyphs:
            self.matrix = np.stack([g.vector() for g in self.glyphs])
        else:
            self.matrix = np.zeros((0, GLYPH_SIZE), dtype=np.float64)

    @property
    def chars(self) -> str:
        return "".join(g.ch for g in self.glyphs)

    def __len__(self) -> int:
        return len(self.glyphs)

    def __iter__(self):
        return iter(self.glyphs)

    def __repr__(self) -> str:
        return f"FontSet({self.chars!r})"


def build_font_set(chars: str) -> FontSet:
    return FontSet(glyph(c) for c in chars)


Sample = Union[GlyphRecord, np.ndarray, Sequence[int]]
Candidates = Union[FontSet, Iterable[GlyphRecord]]


def _as_vector(sample: Sample) -> np.ndarray:
    if isinstance(sample, GlyphRecord):
        return sample.vector()
    return np.asarray(sample, dtype=np.float64).reshape(-1)


def _as_font_set(font_set: Candidates) -> FontSet:
    return font_set if isinstance(font_set, FontSet) else FontSet(font_set)


def _ssim(candidates: np.ndarray, sample: np.ndarray) -> np.ndarray:
    """Simplified single-scale SSIM of sample against each candidate row."""
    c1 = (SSIM_K1 * DYNAMIC_RANGE) ** 2
    c2 = (SSIM_K2 * DYNAMIC_RANGE) ** 2
    n = sample.shape[0]

    ux = sample.mean()
    uy = candidates.mean(axis=1)
    dx = sample - ux
    dy = candidates - uy[:, None]
    var_x = (dx * dx).sum() / (n - 1)
    var_y = (dy * dy).sum(axis=1) / (n - 1)
    cov = (dy * dx).sum(axis=1) / (n - 1)

    return ((2.0 * ux * uy + c1) * (2.0 * cov + c2)) / ((ux * ux + uy * uy + c1) * (var_x + var_y + c2))


def minimize_quadrance(sample: Sample, font_set: Candidates) -> str:
    """Character of the first candidate with the lowest quadrance to sample."""
    fs = _as_font_set(font_set)
    if not len(fs):
        return " "
    d = fs.matrix - _as_vector(sample)
    q = (d * d).sum(axis=1)
    return fs.glyphs[int(np.argmin(q))].ch


def maximize_structural_similarity(sample: Sample, font_set: Candidates) -> str:
    """Character of the first candidate with the highest SSIM to sample."""
    fs = _as_font_set(font_set)
    if not len(fs):
        return " "
    s = _ssim(fs.matrix, _as_vector(sample))
    return fs.glyphs[int(np.argmax(s))].ch


def printable(chars: str) -> str:
    """chars with everything outside printable ASCII replaced by a space."""
    return "".join(c if c in _CATALOG else " " for c in chars)


def gradient_char(p: int, chars: Sequence[str]) -> str:
    """Map luma p in [0, 255] linearly onto chars (dark first, bright last)."""
    n = len(chars)
    if n == 0:
        return " "
    return chars[int(p) * (n - 1) // 255]
