#!/usr/bin/env python3
# ansi_art/rendering/windowing.py
"""
Split a pixel buffer into fixed-size windows for per-cell analysis.

Buffers are numpy arrays shaped (H, W) for luma or (H, W, 3) for RGB,
as returned by np.asarray(pil_image). Every window holds its own copy of
the pixels, so renderers can read them freely while the source buffer
stays untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, Union

import numpy as np

Pixel = Union[int, Tuple[int, ...]]

__all__ = ["Window", "ImageWindow", "to_windows", "to_windows_exact"]


@dataclass(frozen=True, eq=False)
class Window:
    """A width x height copy of pixels addressed by local (x, y)."""
    width: int
    height: int
    data: np.ndarray = field(repr=False)

    def get_pixel(self, x: int, y: int) -> Pixel:
        """
        Pixel at (x, y): an int for luma windows, an (r, g, b) tuple for RGB.
        Raises IndexError when (x, y) falls outside the window.
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"window index {(x, y)} out of bounds {(self.width, self.height)}"
            )
        px = self.data[y, x]
        if self.data.ndim == 3:
            return tuple(int(c) for c in px)
        return int(px)

    def get_pixel_checked(self, x: int, y: int) -> Optional[Pixel]:
        if 0 <= x < self.width and 0 <= y < self.height:
            return self.get_pixel(x, y)
        return None

    def samples(self) -> np.ndarray:
        """Row-major flattened samples; sample (x, y) sits at y * width + x."""
        if self.data.ndim == 3:
            return self.data.reshape(-1, self.data.shape[2])
        return self.data.reshape(-1)


@dataclass
class ImageWindow:
    windows_per_row: int
    windows_per_col: int
    image_width: int
    image_height: int
    windows: List[Window]

    def rows(self) -> Iterator[List[Window]]:
        """Yield the windows one row at a time, top to bottom."""
        step = self.windows_per_row
        for start in range(0, len(self.windows), step):
            yield self.windows[start:start + step]

    def __len__(self) -> int:
        return len(self.windows)


def _split(buf: np.ndarray, width: int, height: int, cols: int, rows: int) -> ImageWindow:
    windows: List[Window] = []
    for wy in range(rows):
        y = wy * height
        for wx in range(cols):
            x = wx * width
            block = np.array(buf[y:y + height, x:x + width], copy=True)
            block.setflags(write=False)
            windows.append(Window(width, height, block))
    return ImageWindow(
        windows_per_row=cols,
        windows_per_col=rows,
        image_width=buf.shape[1],
        image_height=buf.shape[0],
        windows=windows,
    )


def to_windows(buf: np.ndarray, width: int, height: int) -> Optional[ImageWindow]:
    """
    Split buf into non-overlapping width x height windows, row-major.

    Trailing columns/rows that cannot fill a whole window are dropped.
    Returns None when the window is larger than the buffer.
    """
    img_h, img_w = buf.shape[0], buf.shape[1]
    if width <= 0 or height <= 0 or width > img_w or height > img_h:
        return None
    cols = (img_w - width) // width + 1
    rows = (img_h - height) // height + 1
    return _split(buf, width, height, cols, rows)


def to_windows_exact(buf: np.ndarray, width: int, height: int) -> Optional[ImageWindow]:
    """
    Like to_windows, but the buffer must divide exactly into windows.
    Returns None otherwise.
    """
    img_h, img_w = buf.shape[0], buf.shape[1]
    if width <= 0 or height <= 0 or width > img_w or height > img_h:
        return None
    if img_w % width or img_h % height:
        return None
    return _split(buf, width, height, img_w // width, img_h // height)
