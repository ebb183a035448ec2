"""Row-major RGB image buffer with mirrored borders and rectangular views."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from imgpp.pixel import PixelRGB

_PIXEL_SIZE = 3


@dataclass(frozen=True, slots=True)
class Rect:
    """An axis-aligned rectangle: top-left corner and size, in pixels."""

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if min(self.x, self.y, self.width, self.height) < 0:
            raise ValueError(f"rectangle fields must be non-negative: {self}")


class Mat:
    """An RGB image of ``rows`` x ``cols`` pixels, three bytes per pixel.

    ``border_size`` records how many pixels on each side form a border
    around the meaningful interior of the image.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self,
        rows: int = 0,
        cols: int = 0,
        border_size: int = 0,
        data: bytes | bytearray | memoryview | None = None,
    ) -> None:
        if rows < 0 or cols < 0:
            raise ValueError(f"image size must be non-negative, got {rows}x{cols}")
        if border_size < 0:
            raise ValueError(f"border size must be non-negative, got {border_size}")
        size = rows * cols * _PIXEL_SIZE
        if data is None:
            self.data = bytearray(size)
        else:
            if len(data) != size:
                raise ValueError(
                    f"expected {size} bytes for a {rows}x{cols} image, got {len(data)}"
                )
            self.data = bytearray(data)
        self.rows = rows
        self.cols = cols
        self.border_size = border_size

    def __repr__(self) -> str:
        return f"Mat(rows={self.rows}, cols={self.cols}, border_size={self.border_size})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mat):
            return NotImplemented
        return self.rows == other.rows and self.cols == other.cols and self.data == other.data

    def _offset(self, row: int, col: int) -> int:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(
                f"pixel ({row}, {col}) outside a {self.rows}x{self.cols} image"
            )
        return (self.cols * row + col) * _PIXEL_SIZE

    def get_pixel(self, row: int, col: int) -> PixelRGB:
        """Pixel at ``(row, col)``."""
        o = self._offset(row, col)
        return PixelRGB(self.data[o], self.data[o + 1], self.data[o + 2])

    def set_pixel(self, row: int, col: int, pixel: PixelRGB | Iterable[int]) -> None:
        """Store ``pixel`` (a PixelRGB or three channel values) at ``(row, col)``."""
        values = bytes(pixel)
        if len(values) != _PIXEL_SIZE:
            raise ValueError(f"a pixel has {_PIXEL_SIZE} channels, got {len(values)}")
        o = self._offset(row, col)
        self.data[o : o + _PIXEL_SIZE] = values

    def _move(self, src_row: int, src_col: int, dst_row: int, dst_col: int) -> None:
        s = self._offset(src_row, src_col)
        d = self._offset(dst_row, dst_col)
        self.data[d : d + _PIXEL_SIZE] = self.data[s : s + _PIXEL_SIZE]

    def _check_border(self, border_size: int) -> None:
        if border_size < 0:
            raise ValueError(f"border size must be non-negative, got {border_size}")
        if 2 * border_size > self.rows or 2 * border_size > self.cols:
            raise ValueError(
                f"border of {border_size} does not fit a {self.rows}x{self.cols} image"
            )

    def copy(self) -> Mat:
        """An independent copy, border size included."""
        return Mat(self.rows, self.cols, self.border_size, self.data)

    def copy_with_border(self, border_size: int) -> Mat:
        """A larger copy with a blank border of ``border_size`` on every side."""
        if border_size < 0:
            raise ValueError(f"border size must be non-negative, got {border_size}")
        result = Mat(self.rows + 2 * border_size, self.cols + 2 * border_size, border_size)
        line = self.cols * _PIXEL_SIZE
        for row in range(self.rows):
            src = row * line
            dst = ((row + border_size) * result.cols + border_size) * _PIXEL_SIZE
            result.data[dst : dst + line] = self.data[src : src + line]
        return result

    def copy_make_border(self, border_size: int) -> Mat:
        """A larger copy whose border of ``border_size`` mirrors the image."""
        result = self.copy_with_border(border_size)
        result.make_border(border_size)
        return result

    def reset_border(self) -> Mat:
        """A copy of the interior with the border stripped off."""
        b = self.border_size
        if b == 0:
            return self.copy()
        result = Mat(self.rows - 2 * b, self.cols - 2 * b)
        line = result.cols * _PIXEL_SIZE
        for row in range(result.rows):
            src = ((row + b) * self.cols + b) * _PIXEL_SIZE
            dst = row * line
            result.data[dst : dst + line] = self.data[src : src + line]
        return result

    def make_border(self, border_size: int) -> None:
        """Fill a border of ``border_size`` by mirroring the interior, rows then columns."""
        self._check_border(border_size)
        b = border_size
        line = self.cols * _PIXEL_SIZE
        for i in range(b):
            for src_row, dst_row in (
                (b + i, b - 1 - i),
                (self.rows - b - 1 - i, self.rows - b + i),
            ):
                src = src_row * line
                dst = dst_row * line
                self.data[dst : dst + line] = self.data[src : src + line]
        for row in range(self.rows):
            for j in range(b):
                self._move(row, b + j, row, b - 1 - j)
                self._move(row, self.cols - b - 1 - j, row, self.cols - b + j)

    def mirror_top_edge(self, border_size: int) -> None:
        """Mirror the top interior rows into the top border, corners excluded."""
        self._check_border(border_size)
        b = border_size
        for i in range(b):
            for j in range(self.cols - 2 * b):
                self._move(b + i, b + j, b - 1 - i, b + j)

    def mirror_bottom_edge(self, border_size: int) -> None:
        """Mirror the bottom interior rows into the bottom border, corners excluded."""
        self._check_border(border_size)
        b = border_size
        for i in range(b):
            for j in range(self.cols - 2 * b):
                self._move(self.rows - b - 1 - i, b + j, self.rows - b + i, b + j)

    def mirror_left_edge(self, border_size: int) -> None:
        """Mirror the left interior columns into the left border, corners excluded."""
        self._check_border(border_size)
        b = border_size
        for i in range(self.rows - 2 * b):
            for j in range(b):
                self._move(b + i, b + j, b + i, b - 1 - j)

    def mirror_right_edge(self, border_size: int) -> None:
        """Mirror the right interior columns into the right border, corners excluded."""
        self._check_border(border_size)
        b = border_size
        for i in range(self.rows - 2 * b):
            for j in range(b):
                self._move(b + i, self.cols - b - 1 - j, b + i, self.cols - b + j)

    def mirror_top_left_corner(self, border_size: int) -> None:
        """Mirror the interior's top-left block into the top-left corner."""
        self._check_border(border_size)
        b = border_size
        for i in range(b):
            for j in range(b):
                self._move(b + i, b + j, b - 1 - i, b - 1 - j)

    def mirror_top_right_corner(self, border_size: int) -> None:
        """Mirror the interior's top-right block into the top-right corner."""
        self._check_border(border_size)
        b = border_size
        for i in range(b):
            for j in range(b):
                self._move(b + i, self.cols - b - 1 - j, b - 1 - i, self.cols - b + j)

    def mirror_bottom_left_corner(self, border_size: int) -> None:
        """Mirror the interior's bottom-left block into the bottom-left corner."""
        self._check_border(border_size)
        b = border_size
        for i in range(b):
            for j in range(b):
                self._move(self.rows - b - 1 - i, b + j, self.rows - b + i, b - 1 - j)

    def mirror_bottom_right_corner(self, border_size: int) -> None:
        """Mirror the interior's bottom-right block into the bottom-right corner."""
        self._check_border(border_size)
        b = border_size
        for i in range(b):
            for j in range(b):
                self._move(
                    self.rows - b - 1 - i,
                    self.cols - b - 1 - j,
                    self.rows - b + i,
                    self.cols - b + j,
                )

    def mirror_edges(self, border_size: int) -> None:
        """Mirror all four edges of the border."""
        self.mirror_top_edge(border_size)
        self.mirror_bottom_edge(border_size)
        self.mirror_left_edge(border_size)
        self.mirror_right_edge(border_size)

    def mirror_corners(self, border_size: int) -> None:
        """Mirror all four corners of the border."""
        self.mirror_top_left_corner(border_size)
        self.mirror_top_right_corner(border_size)
        self.mirror_bottom_left_corner(border_size)
        self.mirror_bottom_right_corner(border_size)

    def make_mirror_border(self, border_size: int) -> None:
        """Fill the whole border of ``border_size`` by mirroring the interior."""
        self.mirror_edges(border_size)
        self.mirror_corners(border_size)


class ROI:
    """A rectangular view onto a Mat; coordinates are relative to the rectangle."""

    def __init__(self, mat: Mat, rect: Rect | None = None) -> None:
        if rect is None:
            rect = Rect(0, 0, mat.cols, mat.rows)
        if rect.x + rect.width > mat.cols or rect.y + rect.height > mat.rows:
            raise ValueError(f"{rect} does not fit inside {mat!r}")
        self.mat = mat
        self.rect = rect

    @property
    def rows(self) -> int:
        return self.rect.height

    @property
    def cols(self) -> int:
        return self.rect.width

    def __len__(self) -> int:
        return self.rows * self.cols

    def __repr__(self) -> str:
        return f"ROI({self.mat!r}, {self.rect})"

    def _check(self, row: int, col: int) -> None:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"pixel ({row}, {col}) outside a {self.rows}x{self.cols} region")

    def get_pixel(self, row: int, col: int) -> PixelRGB:
        """Pixel at ``(row, col)`` within the region."""
        self._check(row, col)
        return self.mat.get_pixel(row + self.rect.y, col + self.rect.x)

    def set_pixel(self, row: int, col: int, pixel: PixelRGB | Iterable[int]) -> None:
        """Store ``pixel`` at ``(row, col)`` within the region."""
        self._check(row, col)
        self.mat.set_pixel(row + self.rect.y, col + self.rect.x, pixel)

    def sub(self, rect: Rect) -> ROI:
        """A view of ``rect``, given relative to this region."""
        if rect.x + rect.width > self.cols or rect.y + rect.height > self.rows:
            raise ValueError(f"{rect} does not fit inside {self!r}")
        return ROI(
            self.mat,
            Rect(rect.x + self.rect.x, rect.y + self.rect.y, rect.width, rect.height),
        )

    def __iter__(self) -> Iterator[PixelRGB]:
        """Pixels of the region in row-major order."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield self.mat.get_pixel(row + self.rect.y, col + self.rect.x)