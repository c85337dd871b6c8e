"""
Pytest configuration and shared fixtures for the ansi-art tests.
Images are generated with Pillow into tmp_path; nothing is read from disk
outside the test's own temp directory.
"""

import pytest
from PIL import Image

from ansi_art.rendering.font import GLYPH_H, GLYPH_W, glyph


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the per-user config at a temp file so tests never see a real one."""
    path = tmp_path / "cfg" / "ansi_art.json"
    monkeypatch.setenv("ANSI_ART_CONFIG", str(path))
    return path


@pytest.fixture
def solid():
    """Factory: solid RGB image of the given size and color."""
    def make(size=(10, 10), color=(255, 255, 255)):
        return Image.new("RGB", size, color)
    return make


@pytest.fixture
def glyph_image():
    """Factory: 5x7 RGB image that reproduces a font glyph pixel for pixel."""
    def make(ch):
        img = Image.new("L", (GLYPH_W, GLYPH_H), 0)
        img.putdata(list(glyph(ch).data))
        return img.convert("RGB")
    return make


@pytest.fixture
def save_png(tmp_path):
    """Factory: write an image to tmp_path and return its path as str."""
    def save(img, name="image.png"):
        path = tmp_path / name
        img.save(path)
        return str(path)
    return save
