#!/usr/bin/env python3
# ansi_art/preprocess.py
"""
Image preparation ahead of glyph selection.

Loads the source, resolves the output size, resizes to the mode's working
resolution (output size x sampling scale) with the chosen filter, then
applies contrast, brightness and (for ASCII/block modes) inversion.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Tuple

import numpy as np
from PIL import Image

from ansi_art.errors import ImageDecodeError

if TYPE_CHECKING:
    from ansi_art.rendering.render_config import RenderConfig

log = logging.getLogger(__name__)

__all__ = [
    "FILTERS",
    "PreparedImage",
    "open_image",
    "resample_filter",
    "adjust_contrast",
    "brighten",
    "invert",
    "prepare",
]

# CLI names -> Pillow resampling kernels.
# Pillow has no gaussian resize kernel; HAMMING is the closest smooth windowed one.
FILTERS: Dict[str, int] = {
    "NEAREST": Image.NEAREST,
    "TRIANGLE": Image.BILINEAR,
    "CATMULLROM": Image.BICUBIC,
    "GAUSSIAN": Image.HAMMING,
    "LANCZOS": Image.LANCZOS,
    "BOX": Image.BOX,
    "BILINEAR": Image.BILINEAR,
    "BICUBIC": Image.BICUBIC,
    "HAMMING": Image.HAMMING,
}
DEFAULT_FILTER = "NEAREST"

# 16-bit grayscale (PNG loads as I;16 or I depending on the Pillow version)
WIDE_MODES = ("I", "I;16", "I;16B", "I;16L", "I;16N")


@dataclass(frozen=True)
class PreparedImage:
    size: Tuple[int, int]      # output cells (columns, rows)
    scaled: Image.Image        # RGB at size * scale


def resample_filter(name: str) -> int:
    return FILTERS.get((name or "").upper(), FILTERS[DEFAULT_FILTER])


def _to_8bit(img: Image.Image) -> Image.Image:
    """Scale 16-bit grayscale samples down to 8 bits; convert("RGB") would clip them."""
    arr = np.clip(np.asarray(img, dtype=np.int64), 0, 0xFFFF) >> 8
    return Image.fromarray(arr.astype(np.uint8), "L")


def open_image(path: str) -> Image.Image:
    """Decode path into an RGB image; ImageDecodeError on any decode failure."""
    try:
        with Image.open(path) as im:
            im.load()
            if im.mode in WIDE_MODES:
                return _to_8bit(im).convert("RGB")
            return im.convert("RGB")
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise ImageDecodeError(str(path), e) from e


def _clamp(v: float) -> int:
    return int(min(255.0, max(0.0, v)))


def _apply_lut(img: Image.Image, lut: List[int]) -> Image.Image:
    bands = len(img.getbands())
    return img.point(lut * bands)


def adjust_contrast(img: Image.Image, value: float) -> Image.Image:
    """
    Percent-style contrast: negative lowers, positive raises, 0 is identity.
    p' = ((p/255 - 0.5) * ((100 + value) / 100)**2 + 0.5) * 255
    """
    if not value:
        return img
    percent = ((100.0 + value) / 100.0) ** 2
    lut = [_clamp(((i / 255.0 - 0.5) * percent + 0.5) * 255.0) for i in range(256)]
    return _apply_lut(img, lut)


def brighten(img: Image.Image, value: int) -> Image.Image:
    """Add value to every channel, clamped to [0, 255]."""
    if not value:
        return img
    lut = [_clamp(i + value) for i in range(256)]
    return _apply_lut(img, lut)


def invert(img: Image.Image) -> Image.Image:
    lut = [255 - i for i in range(256)]
    return _apply_lut(img, lut)


def prepare(image: Image.Image, cfg: "RenderConfig") -> PreparedImage:
    if image.width == 0 or image.height == 0:
        name = getattr(image, "filename", "") or "<image>"
        raise ImageDecodeError(name, ValueError("image has zero dimensions"))
    if image.mode in WIDE_MODES:
        image = _to_8bit(image)
    if image.mode != "RGB":
        image = image.convert("RGB")

    size = cfg.resolve_size(image.size)
    sw, sh = cfg.scale
    work = (size[0] * sw, size[1] * sh)
    log.debug("source=%s output=%s working=%s filter=%s", image.size, size, work, cfg.filter)

    scaled = image if image.size == work else image.resize(work, cfg.resample)
    scaled = adjust_contrast(scaled, cfg.contrast)
    scaled = brighten(scaled, cfg.brightness)
    if cfg.invert and cfg.inverts_source:
        scaled = invert(scaled)
    return PreparedImage(size=size, scaled=scaled)
