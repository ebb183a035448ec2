import pytest

from imgpp.filters import (
    ImageFilter,
    MeanFilter,
    MedianFilter,
    PrewittFilter,
    SobelFilter,
    ThresholdFilter,
)
from imgpp.mat import Mat
from imgpp.pixel import PixelRGB
from imgpp.transformation import MedianFilterProc, ThresholdFilterProc, do_filter


def make_mat(rows, cols, fn, border_size=0):
    mat = Mat(rows, cols, border_size)
    for r in range(rows):
        for c in range(cols):
            mat.set_pixel(r, c, fn(r, c))
    return mat


def gradient(rows=6, cols=6, border_size=0):
    return make_mat(rows, cols, lambda r, c: PixelRGB(r * 40, c * 40, (r + c) * 20), border_size)


@pytest.mark.parametrize(
    "flt, text",
    [
        (MeanFilter(), "MeanFilter(kernelSize=3)"),
        (MeanFilter(5), "MeanFilter(kernelSize=5)"),
        (MedianFilter(7), "MedianFilter(kernelSize=7)"),
        (SobelFilter(), "SobelFilter()"),
        (PrewittFilter(), "PrewittFilter()"),
        (ThresholdFilter(77), "ThresholdFilter(thresholdValue=77)"),
    ],
)
def test_string_form(flt, text):
    assert str(flt) == text


def test_default_kernel_size():
    assert MeanFilter().kernel_size == 3
    assert MedianFilter().kernel_size == 3


def test_image_filter_is_abstract():
    with pytest.raises(TypeError):
        ImageFilter()


@pytest.mark.parametrize(
    "flt", [MeanFilter(3), MedianFilter(3), SobelFilter(), PrewittFilter(), ThresholdFilter(50)]
)
def test_apply_keeps_shape_and_source(flt):
    img = gradient(border_size=1)
    original = img.copy()
    result = flt.apply(img)
    assert (result.rows, result.cols, result.border_size) == (img.rows, img.cols, 1)
    assert img == original


def test_apply_leaves_result_border_blank():
    result = MeanFilter(3).apply(gradient())
    assert result.get_pixel(0, 0) == PixelRGB(0, 0, 0)
    assert result.get_pixel(5, 5) == PixelRGB(0, 0, 0)


def test_threshold_apply_matches_processor():
    img = gradient()
    expected = Mat(img.rows, img.cols)
    do_filter(img, expected, ThresholdFilterProc(90))
    assert ThresholdFilter(90).apply(img) == expected


def test_median_apply_matches_processor():
    img = gradient()
    expected = Mat(img.rows, img.cols)
    do_filter(img, expected, MedianFilterProc(3))
    assert MedianFilter(3).apply(img) == expected


def test_sobel_on_uniform_image_is_black():
    img = make_mat(4, 4, lambda r, c: PixelRGB(9, 9, 9))
    result = SobelFilter().apply(img)
    assert result == Mat(4, 4)


def test_threshold_filter_rejects_bad_value():
    with pytest.raises(ValueError):
        ThresholdFilter(300)