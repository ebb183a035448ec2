import pytest

from imgpp.mat import ROI, Mat, Rect
from imgpp.pixel import PixelRGB


def numbered(rows, cols, border_size=0):
    mat = Mat(rows, cols, border_size)
    for row in range(rows):
        for col in range(cols):
            v = row * cols + col
            mat.set_pixel(row, col, PixelRGB(v % 256, (v * 7) % 256, (v * 13) % 256))
    return mat


def test_new_mat_is_zeroed():
    mat = Mat(2, 3)
    assert len(mat.data) == 2 * 3 * 3
    assert all(p == PixelRGB(0, 0, 0) for p in ROI(mat))


def test_set_and_get_pixel_round_trip():
    mat = Mat(4, 5)
    mat.set_pixel(2, 3, PixelRGB(10, 20, 30))
    assert mat.get_pixel(2, 3) == PixelRGB(10, 20, 30)
    offset = (2 * 5 + 3) * 3
    assert bytes(mat.data[offset : offset + 3]) == bytes([10, 20, 30])


def test_set_pixel_accepts_tuple():
    mat = Mat(1, 1)
    mat.set_pixel(0, 0, (1, 2, 3))
    assert mat.get_pixel(0, 0) == PixelRGB(1, 2, 3)


def test_out_of_range_pixel_raises():
    mat = Mat(2, 2)
    with pytest.raises(IndexError):
        mat.get_pixel(2, 0)
    with pytest.raises(IndexError):
        mat.set_pixel(0, -1, PixelRGB())


def test_wrong_data_length_raises():
    with pytest.raises(ValueError):
        Mat(2, 2, data=b"\x00" * 5)


def test_data_is_copied():
    raw = bytearray(range(12))
    mat = Mat(2, 2, data=raw)
    raw[0] = 99
    assert mat.get_pixel(0, 0) == PixelRGB(0, 1, 2)


def test_equality_ignores_border_size():
    a = numbered(3, 3)
    b = a.copy()
    b.border_size = 1
    assert a == b
    b.set_pixel(0, 0, PixelRGB(255, 255, 255))
    assert a != b


def test_copy_is_independent():
    a = numbered(3, 4, border_size=1)
    b = a.copy()
    assert b == a and b.border_size == 1
    b.set_pixel(1, 1, PixelRGB(1, 1, 1))
    assert a.get_pixel(1, 1) != PixelRGB(1, 1, 1)


def test_copy_with_border_places_interior():
    src = numbered(3, 4)
    out = src.copy_with_border(2)
    assert (out.rows, out.cols, out.border_size) == (7, 8, 2)
    for row in range(3):
        for col in range(4):
            assert out.get_pixel(row + 2, col + 2) == src.get_pixel(row, col)


def test_reset_border_round_trip():
    src = numbered(5, 6)
    assert src.copy_with_border(3).reset_border() == src
    assert src.copy_with_border(3).reset_border().border_size == 0


def test_reset_border_without_border_copies():
    src = numbered(2, 2)
    out = src.reset_border()
    assert out == src
    out.set_pixel(0, 0, PixelRGB(9, 9, 9))
    assert src.get_pixel(0, 0) != PixelRGB(9, 9, 9)


def test_make_mirror_border_reflects():
    src = numbered(4, 5)
    b = 2
    mat = src.copy_with_border(b)
    mat.make_mirror_border(b)
    # top border row b-1-i mirrors interior row i
    for i in range(b):
        for col in range(5):
            assert mat.get_pixel(b - 1 - i, col + b) == src.get_pixel(i, col)
            assert mat.get_pixel(mat.rows - b + i, col + b) == src.get_pixel(3 - i, col)
    for row in range(4):
        for j in range(b):
            assert mat.get_pixel(row + b, b - 1 - j) == src.get_pixel(row, j)
            assert mat.get_pixel(row + b, mat.cols - b + j) == src.get_pixel(row, 4 - j)
    assert mat.get_pixel(0, 0) == src.get_pixel(1, 1)
    assert mat.get_pixel(mat.rows - 1, mat.cols - 1) == src.get_pixel(2, 3)


def test_mirror_border_keeps_interior():
    src = numbered(4, 4)
    mat = src.copy_with_border(1)
    mat.make_mirror_border(1)
    assert mat.reset_border() == src


def test_make_border_matches_mirror_border():
    src = numbered(5, 7)
    a = src.copy_with_border(3)
    a.make_mirror_border(3)
    b = src.copy_make_border(3)
    assert a == b


def test_mirror_edges_leave_corners():
    mat = numbered(3, 3).copy_with_border(1)
    mat.mirror_edges(1)
    assert mat.get_pixel(0, 0) == PixelRGB(0, 0, 0)
    assert mat.get_pixel(0, 1) == mat.get_pixel(1, 1)
    mat.mirror_corners(1)
    assert mat.get_pixel(0, 0) == mat.get_pixel(1, 1)


@pytest.mark.parametrize(
    "method, target, source",
    [
        ("mirror_top_left_corner", (0, 0), (1, 1)),
        ("mirror_top_right_corner", (0, 4), (1, 3)),
        ("mirror_bottom_left_corner", (4, 0), (3, 1)),
        ("mirror_bottom_right_corner", (4, 4), (3, 3)),
        ("mirror_top_edge", (0, 2), (1, 2)),
        ("mirror_bottom_edge", (4, 2), (3, 2)),
        ("mirror_left_edge", (2, 0), (2, 1)),
        ("mirror_right_edge", (2, 4), (2, 3)),
    ],
)
def test_single_mirror_operations(method, target, source):
    mat = numbered(3, 3).copy_with_border(1)
    getattr(mat, method)(1)
    assert mat.get_pixel(*target) == mat.get_pixel(*source)


def test_border_too_large_raises():
    mat = Mat(3, 3)
    with pytest.raises(ValueError):
        mat.make_mirror_border(2)
    with pytest.raises(ValueError):
        mat.make_border(2)


def test_roi_reads_relative_to_rect():
    mat = numbered(5, 5)
    roi = ROI(mat, Rect(1, 2, 3, 2))
    assert (roi.rows, roi.cols) == (2, 3)
    assert roi.get_pixel(0, 0) == mat.get_pixel(2, 1)
    assert roi.get_pixel(1, 2) == mat.get_pixel(3, 3)


def test_roi_iterates_row_major():
    mat = numbered(4, 4)
    roi = ROI(mat, Rect(1, 1, 2, 2))
    expected = [mat.get_pixel(1, 1), mat.get_pixel(1, 2), mat.get_pixel(2, 1), mat.get_pixel(2, 2)]
    assert list(roi) == expected
    assert len(roi) == 4


def test_roi_whole_mat_by_default():
    mat = numbered(2, 3)
    assert list(ROI(mat)) == [mat.get_pixel(r, c) for r in range(2) for c in range(3)]


def test_roi_set_pixel_writes_through():
    mat = Mat(4, 4)
    roi = ROI(mat, Rect(2, 1, 2, 2))
    roi.set_pixel(1, 0, PixelRGB(5, 6, 7))
    assert mat.get_pixel(2, 2) == PixelRGB(5, 6, 7)


def test_roi_sub_accumulates_offsets():
    mat = numbered(6, 6)
    outer = ROI(mat, Rect(1, 1, 4, 4))
    inner = outer.sub(Rect(1, 2, 2, 2))
    assert inner.rect == Rect(2, 3, 2, 2)
    assert inner.get_pixel(0, 0) == mat.get_pixel(3, 2)


def test_roi_bounds_are_checked():
    mat = Mat(3, 3)
    with pytest.raises(ValueError):
        ROI(mat, Rect(2, 0, 2, 1))
    roi = ROI(mat, Rect(0, 0, 2, 2))
    with pytest.raises(ValueError):
        roi.sub(Rect(1, 1, 2, 2))
    with pytest.raises(IndexError):
        roi.get_pixel(2, 0)


def test_rect_rejects_negative():
    with pytest.raises(ValueError):
        Rect(-1, 0, 1, 1)