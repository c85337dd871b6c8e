#!/usr/bin/env python3
# ansi_art/rendering/binarize.py
"""
Luma binarization: manual threshold, Otsu's automatic threshold, inversion.

All functions take a uint8 luma array and return a new array; the input is
never modified.
"""

from __future__ import annotations

import logging

import numpy as np

log = logging.getLogger(__name__)

__all__ = ["histogram", "otsu_value", "threshold", "otsu_threshold", "invert"]


def histogram(luma: np.ndarray) -> np.ndarray:
    """256-bin intensity histogram."""
    return np.bincount(np.asarray(luma, dtype=np.uint8).reshape(-1), minlength=256)


def otsu_value(luma: np.ndarray) -> int:
    """
    Threshold maximizing the between-class variance of the histogram.

    Scans thresholds in ascending order with running background weight/sum
    accumulators (background = pixels <= t). A candidate replaces the best
    one when its variance is >= the best so far, so on a plateau of equal
    variances the last threshold wins. A histogram with no valid split
    (uniform image) yields 0.
    """
    hist = histogram(luma)
    total = float(hist.sum())
    sum_all = float(np.dot(np.arange(256), hist))

    bg_weight = 0.0
    bg_sum = 0.0
    best_var = 0.0
    best_t = 0
    for t in range(256):
        count = float(hist[t])
        bg_weight += count
        bg_sum += t * count
        fg_weight = total - bg_weight
        if bg_weight <= 0.0 or fg_weight <= 0.0:
            continue
        diff = bg_sum / bg_weight - (sum_all - bg_sum) / fg_weight
        var = bg_weight * fg_weight * diff * diff
        if var >= best_var:
            best_var = var
            best_t = t
    return best_t


def threshold(luma: np.ndarray, t: int) -> np.ndarray:
    """Pixels above t become 255, everything else 0."""
    return np.where(np.asarray(luma) > t, 255, 0).astype(np.uint8)


def otsu_threshold(luma: np.ndarray) -> np.ndarray:
    t = otsu_value(luma)
    log.debug("otsu threshold=%d", t)
    return threshold(luma, t)


def invert(luma: np.ndarray) -> np.ndarray:
    return (255 - np.asarray(luma, dtype=np.uint8)).astype(np.uint8)
