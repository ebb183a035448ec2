"""Whole-image filters that wrap the neighbourhood processors."""

from __future__ import annotations

from abc import ABC, abstractmethod

from imgpp.mat import Mat
from imgpp.transformation import (
    MeanFilterProc,
    MedianFilterProc,
    PrewittFilterProc,
    Processor,
    SobelFilterProc,
    ThresholdFilterProc,
    do_filter,
)


def _apply(img: Mat, proc: Processor) -> Mat:
    result = Mat(img.rows, img.cols, img.border_size)
    do_filter(img, result, proc)
    return result


class ImageFilter(ABC):
    """A filter that produces a new image of the same shape."""

    @abstractmethod
    def apply(self, img: Mat) -> Mat:
        """Return the filtered image; ``img`` is left unchanged."""

    @abstractmethod
    def __str__(self) -> str: ...

    def __repr__(self) -> str:
        return str(self)


class MeanFilter(ImageFilter):
    """Box blur."""

    def __init__(self, kernel_size: int = 3) -> None:
        self._proc = MeanFilterProc(kernel_size)

    @property
    def kernel_size(self) -> int:
        return self._proc.kernel_size

    def apply(self, img: Mat) -> Mat:
        return _apply(img, self._proc)

    def __str__(self) -> str:
        return f"MeanFilter(kernelSize={self.kernel_size})"


class MedianFilter(ImageFilter):
    """Per-channel median filter."""

    def __init__(self, kernel_size: int = 3) -> None:
        self._proc = MedianFilterProc(kernel_size)

    @property
    def kernel_size(self) -> int:
        return self._proc.kernel_size

    def apply(self, img: Mat) -> Mat:
        return _apply(img, self._proc)

    def __str__(self) -> str:
        return f"MedianFilter(kernelSize={self.kernel_size})"


class SobelFilter(ImageFilter):
    """Sobel edge detector."""

    def __init__(self) -> None:
        self._proc = SobelFilterProc()

    def apply(self, img: Mat) -> Mat:
        return _apply(img, self._proc)

    def __str__(self) -> str:
        return "SobelFilter()"


class PrewittFilter(ImageFilter):
    """Prewitt edge detector."""

    def __init__(self) -> None:
        self._proc = PrewittFilterProc()

    def apply(self, img: Mat) -> Mat:
        return _apply(img, self._proc)

    def __str__(self) -> str:
        return "PrewittFilter()"


class ThresholdFilter(ImageFilter):
    """Binarises each channel at a threshold."""

    def __init__(self, threshold_value: int) -> None:
        self._proc = ThresholdFilterProc(threshold_value)

    @property
    def threshold_value(self) -> int:
        return self._proc.threshold_value

    def apply(self, img: Mat) -> Mat:
        return _apply(img, self._proc)

    def __str__(self) -> str:
        return f"ThresholdFilter(thresholdValue={self.threshold_value})"