"""Wavelength to display color conversion."""

from __future__ import annotations

import math

from double_slit.utils.cache import MemoCache
from double_slit.utils.constants import (
    BLUE_CYAN_NM,
    CYAN_GREEN_NM,
    GREEN_YELLOW_NM,
    ORANGE_RED_NM,
    VIOLET_BLUE_NM,
    WAVELENGTH_MAX_NM,
    WAVELENGTH_MIN_NM,
)
from double_slit.utils.types import Color


def spectrum_rgb(wavelength: float) -> tuple[float, float, float]:
    """Piecewise-linear approximation of the visible spectrum.

    Returns (r, g, b) in [0, 1]. Wavelength is clamped to [380, 750] nm.
    """
    w = min(max(wavelength, WAVELENGTH_MIN_NM), WAVELENGTH_MAX_NM)
    r = g = b = 0.0

    if w < VIOLET_BLUE_NM:
        r = (VIOLET_BLUE_NM - w) / (VIOLET_BLUE_NM - WAVELENGTH_MIN_NM)
        b = 1.0
    elif w < BLUE_CYAN_NM:
        g = (w - VIOLET_BLUE_NM) / (BLUE_CYAN_NM - VIOLET_BLUE_NM)
        b = 1.0
    elif w < CYAN_GREEN_NM:
        g = 1.0
        b = (CYAN_GREEN_NM - w) / (CYAN_GREEN_NM - BLUE_CYAN_NM)
    elif w < GREEN_YELLOW_NM:
        r = (w - CYAN_GREEN_NM) / (GREEN_YELLOW_NM - CYAN_GREEN_NM)
        g = 1.0
    elif w < ORANGE_RED_NM:
        r = 1.0
        g = (ORANGE_RED_NM - w) / (ORANGE_RED_NM - GREEN_YELLOW_NM)
    else:
        r = 1.0

    return (r, g, b)


def _channel(x: float) -> int:
    """Scale 0..1 to 0..255, rounding halves up."""
    return int(math.floor(x * 255 + 0.5))


class ColorMapper:
    """Memoized wavelength + intensity -> Color, with intensity as alpha."""

    def __init__(self, cache: MemoCache | None = None) -> None:
        self.cache = cache if cache is not None else MemoCache()

    def to_color(self, wavelength: float, intensity: float = 1.0) -> Color:
        key = (wavelength, intensity)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        r, g, b = spectrum_rgb(wavelength)
        color = Color(
            r=_channel(r),
            g=_channel(g),
            b=_channel(b),
            alpha=intensity,
        )
        return self.cache.set(key, color)

    def reset(self) -> None:
        self.cache.reset()
