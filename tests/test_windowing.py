"""Windowing: partitioning pixel buffers into per-cell windows."""

import numpy as np
import pytest

from ansi_art.rendering.windowing import to_windows, to_windows_exact


@pytest.fixture
def buf():
    # 5 wide, 4 high; value == y * 5 + x
    return np.arange(20, dtype=np.uint8).reshape(4, 5)


def test_to_windows_drops_partial_windows(buf):
    grid = to_windows(buf, 2, 2)
    assert grid is not None
    assert (grid.windows_per_row, grid.windows_per_col) == (2, 2)
    assert (grid.image_width, grid.image_height) == (5, 4)
    assert len(grid) == 4
    first, second = grid.windows[0], grid.windows[1]
    assert first.get_pixel(1, 0) == 1
    assert first.get_pixel(0, 1) == 5
    assert second.get_pixel(0, 0) == 2


def test_to_windows_exact_requires_divisibility(buf):
    assert to_windows_exact(buf, 2, 2) is None
    grid = to_windows_exact(buf, 5, 2)
    assert grid is not None
    assert len(grid) == 2
    assert grid.windows[1].get_pixel(4, 1) == 19


def test_window_larger_than_buffer(buf):
    assert to_windows(buf, 6, 1) is None
    assert to_windows(buf, 1, 5) is None
    assert to_windows_exact(buf, 0, 1) is None


def test_rows_are_row_major(buf):
    grid = to_windows(buf, 1, 2)
    rows = list(grid.rows())
    assert len(rows) == 2
    assert all(len(r) == 5 for r in rows)
    assert [w.get_pixel(0, 0) for w in rows[1]] == [10, 11, 12, 13, 14]


def test_samples_row_major(buf):
    win = to_windows(buf, 2, 2).windows[0]
    assert win.samples().tolist() == [0, 1, 5, 6]


def test_get_pixel_bounds(buf):
    win = to_windows(buf, 2, 2).windows[0]
    with pytest.raises(IndexError):
        win.get_pixel(2, 0)
    with pytest.raises(IndexError):
        win.get_pixel(0, -1)
    assert win.get_pixel_checked(2, 0) is None
    assert win.get_pixel_checked(1, 1) == 6


def test_rgb_pixels_are_tuples():
    rgb = np.zeros((2, 2, 3), dtype=np.uint8)
    rgb[1, 0] = (10, 20, 30)
    win = to_windows_exact(rgb, 1, 2).windows[0]
    assert win.get_pixel(0, 1) == (10, 20, 30)
    assert win.samples().shape == (2, 3)


def test_windows_are_independent_copies(buf):
    grid = to_windows(buf, 2, 2)
    buf[0, 0] = 99
    assert grid.windows[0].get_pixel(0, 0) == 0
    with pytest.raises(ValueError):
        grid.windows[0].data[0, 0] = 1
