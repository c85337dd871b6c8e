"""Thresholding, Otsu and inversion."""

import numpy as np

from ansi_art.rendering import binarize


def _bimodal():
    luma = np.full((10, 10), 10, dtype=np.uint8)
    luma[:, 5:] = 240
    return luma


def test_histogram_counts():
    hist = binarize.histogram(_bimodal())
    assert hist.shape == (256,)
    assert hist[10] == 50 and hist[240] == 50
    assert hist.sum() == 100


def test_otsu_separates_bimodal_image():
    t = binarize.otsu_value(_bimodal())
    assert 10 < t < 240
    # equal variances across the gap: the last candidate wins
    assert t == 239
    out = binarize.otsu_threshold(_bimodal())
    assert set(out[:, :5].reshape(-1)) == {0}
    assert set(out[:, 5:].reshape(-1)) == {255}


def test_otsu_uniform_image_is_zero():
    assert binarize.otsu_value(np.full((4, 4), 77, dtype=np.uint8)) == 0


def test_threshold_is_strictly_greater():
    luma = np.array([[99, 100, 101]], dtype=np.uint8)
    assert binarize.threshold(luma, 100).tolist() == [[0, 0, 255]]


def test_invert_is_an_involution():
    luma = np.arange(256, dtype=np.uint8).reshape(16, 16)
    once = binarize.invert(luma)
    assert once[0, 0] == 255 and once[15, 15] == 0
    assert np.array_equal(binarize.invert(once), luma)


def test_invert_before_and_after_threshold_differ():
    luma = np.array([[100]], dtype=np.uint8)
    inverted_first = binarize.threshold(binarize.invert(luma), 50)
    inverted_after = binarize.invert(binarize.threshold(luma, 50))
    assert inverted_first.tolist() == [[255]]
    assert inverted_after.tolist() == [[0]]


def test_inputs_are_not_modified():
    luma = _bimodal()
    before = luma.copy()
    binarize.otsu_threshold(luma)
    binarize.invert(luma)
    assert np.array_equal(luma, before)
