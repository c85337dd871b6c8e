"""Image loading and pre-render adjustments."""

import pytest
from PIL import Image

from ansi_art import preprocess
from ansi_art.errors import ImageDecodeError
from ansi_art.rendering.render_config import RenderConfig


def test_open_image_converts_to_rgb(save_png):
    path = save_png(Image.new("RGBA", (3, 2), (10, 20, 30, 128)), "rgba.png")
    img = preprocess.open_image(path)
    assert img.mode == "RGB"
    assert img.size == (3, 2)


def test_open_16bit_grayscale_scales_down(save_png):
    path = save_png(Image.new("I;16", (4, 2), 32768), "wide.png")
    img = preprocess.open_image(path)
    assert img.mode == "RGB"
    assert img.getpixel((0, 0)) == (128, 128, 128)


def test_prepare_scales_16bit_image():
    prepared = preprocess.prepare(Image.new("I;16", (2, 2), 16384), RenderConfig().gradient())
    assert prepared.scaled.getpixel((0, 0)) == (64, 64, 64)


def test_open_missing_image(tmp_path):
    with pytest.raises(ImageDecodeError) as exc:
        preprocess.open_image(str(tmp_path / "nope.png"))
    assert str(exc.value).startswith('Error opening image: "')


def test_open_garbage_file(tmp_path):
    path = tmp_path / "garbage.png"
    path.write_bytes(b"definitely not an image")
    with pytest.raises(ImageDecodeError):
        preprocess.open_image(str(path))


def test_resample_filter_fallback():
    assert preprocess.resample_filter("lanczos") == Image.LANCZOS
    assert preprocess.resample_filter("bogus") == Image.NEAREST
    assert preprocess.resample_filter(None) == Image.NEAREST


def test_contrast_and_brightness_are_identity_at_zero(solid):
    img = solid((2, 2), (100, 100, 100))
    assert preprocess.adjust_contrast(img, 0) is img
    assert preprocess.brighten(img, 0) is img


def test_brighten_clamps(solid):
    assert preprocess.brighten(solid((1, 1), (250, 5, 100)), 10).getpixel((0, 0)) == (255, 15, 110)
    assert preprocess.brighten(solid((1, 1), (250, 5, 100)), -300).getpixel((0, 0)) == (0, 0, 0)


def test_contrast_spreads_values():
    img = Image.new("RGB", (3, 1))
    img.putdata([(50, 50, 50), (128, 128, 128), (200, 200, 200)])
    out = list(preprocess.adjust_contrast(img, 100).getdata())
    assert out[0] == (0, 0, 0)
    assert out[2] == (255, 255, 255)
    assert 126 <= out[1][0] <= 131


def test_invert(solid):
    assert preprocess.invert(solid((1, 1), (0, 100, 255))).getpixel((0, 0)) == (255, 155, 0)


def test_prepare_resizes_to_working_resolution(solid):
    prepared = preprocess.prepare(solid((10, 10)), RenderConfig().braille().set_size(5, 5))
    assert prepared.size == (5, 5)
    assert prepared.scaled.size == (10, 20)


def test_prepare_keeps_matching_image(solid):
    img = solid((10, 14))
    prepared = preprocess.prepare(img, RenderConfig().pattern_quadrance().set_size(2, 2))
    assert prepared.scaled is img


def test_prepare_inverts_source_for_ascii_only(solid):
    img = solid((2, 2), (0, 0, 0))
    ascii_cfg = RenderConfig().gradient().set_invert()
    braille_cfg = RenderConfig().braille().set_size(1, 1).set_invert()
    assert preprocess.prepare(img, ascii_cfg).scaled.getpixel((0, 0)) == (255, 255, 255)
    assert preprocess.prepare(solid((2, 4), (0, 0, 0)), braille_cfg).scaled.getpixel((0, 0)) == (0, 0, 0)


def test_prepare_rejects_empty_image():
    with pytest.raises(ImageDecodeError):
        preprocess.prepare(Image.new("RGB", (0, 5)), RenderConfig())
