"""RGB, HSI and HSV pixel types and conversions between them."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator

_GRAY_WEIGHTS = (0.2989, 0.5870, 0.1141)
_HSI_EPSILON = 1e-6


class Channel(IntEnum):
    """Position of a colour channel inside an RGB pixel."""

    R = 0
    G = 1
    B = 2


def _round_half_away(value: float) -> int:
    """Round to nearest integer, halves away from zero."""
    if value >= 0:
        return math.floor(value + 0.5)
    return math.ceil(value - 0.5)


def _to_byte(value: int) -> int:
    """Narrow an integer to an unsigned 8-bit value."""
    return value & 0xFF


def _round_to_byte(value: float) -> int:
    return _to_byte(_round_half_away(value))


def _cos_degree(degree: float) -> float:
    return math.cos(math.radians(degree))


@dataclass(frozen=True, slots=True)
class PixelRGB:
    """An 8-bit RGB pixel."""

    r: int = 0
    g: int = 0
    b: int = 0

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if not isinstance(value, int) or not 0 <= value <= 255:
                raise ValueError(f"channel {name} must be an integer in 0..255, got {value!r}")

    def __iter__(self) -> Iterator[int]:
        yield self.r
        yield self.g
        yield self.b

    def __getitem__(self, channel: int) -> int:
        return (self.r, self.g, self.b)[Channel(channel)]

    def normalized(self) -> tuple[float, float, float]:
        """Channels scaled to the range 0..1."""
        return (self.r / 255.0, self.g / 255.0, self.b / 255.0)

    def grayscale(self) -> int:
        """Luminance of the pixel as an 8-bit value."""
        wr, wg, wb = _GRAY_WEIGHTS
        return _round_to_byte(wr * self.r + wg * self.g + wb * self.b)


@dataclass(frozen=True, slots=True)
class PixelHSI:
    """A pixel in hue, saturation, intensity form."""

    h: float
    s: float
    i: float


@dataclass(frozen=True, slots=True)
class PixelHSV:
    """A pixel in hue, saturation, value form; hue in degrees."""

    h: float
    s: float
    v: float


def rgb_to_hsi(pixel: PixelRGB) -> PixelHSI:
    """Convert an RGB pixel to HSI."""
    rn, gn, bn = pixel.normalized()

    upper = 0.5 * ((rn - gn) + (rn - bn))
    lower = math.sqrt((rn - gn) ** 2 + (rn - bn) * (gn - bn)) + _HSI_EPSILON
    theta = math.acos(max(-1.0, min(1.0, upper / lower)))

    hue = theta if pixel.b <= pixel.g else 360.0 - theta

    total = rn + gn + bn
    smallest = min(rn, gn, bn)
    if total == 0:
        return PixelHSI(hue, math.nan, math.inf)

    saturation = 1.0 - (3.0 * smallest) / total
    intensity = 1.0 / (3.0 * total)
    return PixelHSI(hue, saturation, intensity)


def hsi_to_rgb(pixel: PixelHSI) -> PixelRGB:
    """Convert an HSI pixel (hue in degrees, 0..360) to RGB."""
    if pixel.h < 120:
        hue = pixel.h
        order = ("b", "r", "g")
    elif pixel.h < 240:
        hue = pixel.h - 120
        order = ("r", "g", "b")
    else:
        hue = pixel.h - 240
        order = ("g", "b", "r")

    first = _round_to_byte(pixel.i * (1.0 - pixel.s))
    ratio = (pixel.s * _cos_degree(hue)) / _cos_degree(60 - hue)
    second = _round_to_byte(pixel.i * (1.0 + ratio))
    third = _to_byte(int(3.0 * pixel.i - (first + second)))

    channels = dict(zip(order, (first, second, third)))
    return PixelRGB(channels["r"], channels["g"], channels["b"])


def rgb_to_hsv(pixel: PixelRGB) -> PixelHSV:
    """Convert an RGB pixel to HSV with hue in degrees."""
    rn, gn, bn = pixel.normalized()
    cmax = max(rn, gn, bn)
    cmin = min(rn, gn, bn)
    delta = cmax - cmin

    if delta == 0:
        hue = 0.0
    elif cmax == rn:
        hue = 60.0 * math.fmod((gn - bn) / delta, 6)
    elif cmax == gn:
        hue = 60.0 * ((bn - rn) / delta + 2)
    else:
        hue = 60.0 * ((rn - gn) / delta + 4)

    saturation = 0.0 if cmax == 0 else delta / cmax
    return PixelHSV(hue, saturation, cmax)


def hsv_to_rgb(pixel: PixelHSV) -> PixelRGB:
    """Convert an HSV pixel (hue in degrees, 0..360) to RGB."""
    chroma = pixel.v * pixel.s
    x = chroma * (1 - abs(math.fmod(pixel.h / 60.0, 2) - 1))
    m = pixel.v - chroma

    if pixel.h < 60:
        r, g, b = chroma, x, 0.0
    elif pixel.h < 120:
        r, g, b = x, chroma, 0.0
    elif pixel.h < 180:
        r, g, b = 0.0, chroma, x
    elif pixel.h < 240:
        r, g, b = 0.0, x, chroma
    elif pixel.h < 300:
        r, g, b = x, 0.0, chroma
    else:
        r, g, b = chroma, 0.0, x

    return PixelRGB(
        _round_to_byte((r + m) * 255),
        _round_to_byte((g + m) * 255),
        _round_to_byte((b + m) * 255),
    )