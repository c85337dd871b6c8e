"""256-color reduction and cell style rendering."""

import pytest

from ansi_art.rendering.palette import (
    XTERM_256,
    ColorMode,
    nearest_index,
    palette_rgb,
    to_color,
)
from ansi_art.styles import PLAIN, CellStyle


def test_palette_layout():
    assert XTERM_256.shape == (256, 3)
    assert palette_rgb(16) == (0, 0, 0)
    assert palette_rgb(196) == (255, 0, 0)
    assert palette_rgb(231) == (255, 255, 255)
    assert palette_rgb(232) == (8, 8, 8)
    assert palette_rgb(255) == (238, 238, 238)


@pytest.mark.parametrize(
    "rgb, index",
    [
        ((0, 0, 0), 0),            # duplicates at 16; first wins
        ((255, 255, 255), 15),
        ((128, 128, 128), 8),
        ((95, 135, 175), 67),
        ((250, 2, 3), 9),
    ],
)
def test_nearest_index(rgb, index):
    assert nearest_index(*rgb) == index


def test_to_color():
    assert to_color((1, 2, 3), ColorMode.TRUECOLOR) == (1, 2, 3)
    assert to_color((255, 0, 0), ColorMode.PALETTE) == 9


def test_plain_style_has_no_escape():
    assert PLAIN.is_plain
    assert PLAIN.sgr_prefix() == ""
    assert PLAIN.pt_style() == ""


def test_sgr_prefix():
    assert CellStyle(fg=(1, 2, 3)).sgr_prefix() == "\x1b[38;2;1;2;3m"
    style = CellStyle(fg=196, bg=(0, 0, 0), bold=True, blink=True, underline=True)
    assert style.sgr_prefix() == "\x1b[1;4;5;38;5;196;48;2;0;0;0m"


def test_pt_style():
    assert CellStyle(fg=(255, 0, 0), bold=True).pt_style() == "fg:#ff0000 bold"
    assert CellStyle(fg=196, bg=21).pt_style() == "fg:#ff0000 bg:#0000ff"
