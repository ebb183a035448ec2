"""Neighbourhood processors for RGB images and the loop that applies them."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import ClassVar, Protocol, Sequence

from imgpp.mat import ROI, Mat, Rect
from imgpp.pixel import PixelRGB

_MAX_CHANNEL = 255

_SOBEL_X = (
    -1, 0, 1,
    -2, 0, 2,
    -1, 0, 1,
)
_SOBEL_Y = (
    -1, -2, -1,
    0, 0, 0,
    1, 2, 1,
)
_PREWITT_X = (
    -1, 0, 1,
    -1, 0, 1,
    -1, 0, 1,
)
_PREWITT_Y = (
    -1, -1, -1,
    0, 0, 0,
    1, 1, 1,
)


class Processor(Protocol):
    """Anything that turns a square neighbourhood into one output pixel."""

    kernel_size: int

    def __call__(self, roi: ROI) -> PixelRGB: ...


def _check_kernel_size(kernel_size: int) -> None:
    if not isinstance(kernel_size, int) or isinstance(kernel_size, bool) or kernel_size < 1:
        raise ValueError(f"kernel size must be a positive integer, got {kernel_size!r}")


def _magnitude(gx: int, gy: int) -> int:
    """Gradient magnitude rounded and clamped to an 8-bit value."""
    return min(_MAX_CHANNEL, math.floor(math.sqrt(gx * gx + gy * gy) + 0.5))


@dataclass(frozen=True)
class MeanFilterProc:
    """Replaces a pixel with the integer mean of its neighbourhood, per channel."""

    kernel_size: int

    def __post_init__(self) -> None:
        _check_kernel_size(self.kernel_size)

    def __call__(self, roi: ROI) -> PixelRGB:
        area = len(roi)
        return PixelRGB(*(sum(channel) // area for channel in zip(*roi)))


@dataclass(frozen=True)
class MedianFilterProc:
    """Replaces a pixel with the median of its neighbourhood, per channel."""

    kernel_size: int

    def __post_init__(self) -> None:
        _check_kernel_size(self.kernel_size)

    def __call__(self, roi: ROI) -> PixelRGB:
        medians = []
        for channel in zip(*roi):
            ordered = sorted(channel)
            medians.append(ordered[len(ordered) // 2])
        return PixelRGB(*medians)


@dataclass(frozen=True)
class ThresholdFilterProc:
    """Sets each channel to 0 below the threshold and to 255 otherwise."""

    threshold_value: int
    kernel_size: ClassVar[int] = 1

    def __post_init__(self) -> None:
        value = self.threshold_value
        if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= _MAX_CHANNEL:
            raise ValueError(f"threshold must be an integer in 0..255, got {value!r}")

    def __call__(self, roi: ROI) -> PixelRGB:
        pixel = roi.get_pixel(0, 0)
        return PixelRGB(
            *(0 if value < self.threshold_value else _MAX_CHANNEL for value in pixel)
        )


class SegmentationMode(Enum):
    """How a gradient kernel pair is applied to colour data."""

    EACH_CHANNEL_SEPARATELY = auto()
    GRAY_SCALE = auto()
    MAX_GRADIENT = auto()


class SegmentationFilterProc:
    """Edge detector built from a horizontal and a vertical gradient kernel."""

    def __init__(
        self,
        kernel_x: Sequence[int],
        kernel_y: Sequence[int],
        kernel_size: int,
        mode: SegmentationMode = SegmentationMode.MAX_GRADIENT,
    ) -> None:
        _check_kernel_size(kernel_size)
        area = kernel_size * kernel_size
        self.kernel_x = tuple(kernel_x)
        self.kernel_y = tuple(kernel_y)
        if len(self.kernel_x) != area or len(self.kernel_y) != area:
            raise ValueError(
                f"kernels for size {kernel_size} need {area} weights, "
                f"got {len(self.kernel_x)} and {len(self.kernel_y)}"
            )
        self.kernel_size = kernel_size
        self.mode = SegmentationMode(mode)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kernel_size={self.kernel_size}, mode={self.mode.name})"

    def __call__(self, roi: ROI) -> PixelRGB:
        if self.mode is SegmentationMode.EACH_CHANNEL_SEPARATELY:
            return self._each_channel(roi)
        return self._gray(roi)

    def _each_channel(self, roi: ROI) -> PixelRGB:
        channels = list(zip(*roi))
        return PixelRGB(
            *(
                _magnitude(
                    sum(w * v for w, v in zip(self.kernel_x, values)),
                    sum(w * v for w, v in zip(self.kernel_y, values)),
                )
                for values in channels
            )
        )

    def _gray(self, roi: ROI) -> PixelRGB:
        gray = [pixel.grayscale() for pixel in roi]
        gx = sum(w * v for w, v in zip(self.kernel_x, gray))
        gy = sum(w * v for w, v in zip(self.kernel_y, gray))
        magnitude = _magnitude(gx, gy)
        return PixelRGB(magnitude, magnitude, magnitude)


class SobelFilterProc(SegmentationFilterProc):
    """3x3 Sobel edge detector."""

    def __init__(self, mode: SegmentationMode = SegmentationMode.MAX_GRADIENT) -> None:
        super().__init__(_SOBEL_X, _SOBEL_Y, 3, mode)


class PrewittFilterProc(SegmentationFilterProc):
    """3x3 Prewitt edge detector."""

    def __init__(self, mode: SegmentationMode = SegmentationMode.MAX_GRADIENT) -> None:
        super().__init__(_PREWITT_X, _PREWITT_Y, 3, mode)


def do_filter(src: Mat, dst: Mat, proc: Processor) -> None:
    """Run ``proc`` over every full window of ``src``, writing window centres into ``dst``.

    Pixels of ``dst`` closer to the edge than half a kernel are left untouched.
    """
    k = proc.kernel_size
    if k > src.rows or k > src.cols:
        raise ValueError(f"kernel of size {k} does not fit a {src.rows}x{src.cols} image")
    half = k // 2
    for row in range(src.rows - k + 1):
        for col in range(src.cols - k + 1):
            dst.set_pixel(row + half, col + half, proc(ROI(src, Rect(col, row, k, k))))


def init_img(src: Mat) -> None:
    """Fill the interior of ``src`` with a deterministic test pattern."""
    b = src.border_size
    for row in range(b, src.rows - b):
        for col in range(b, src.cols - b):
            index = row * src.cols + col
            src.set_pixel(
                row,
                col,
                PixelRGB((653 + index) % 256, (1754 + index) % 256, (1999 + index) % 256),
            )