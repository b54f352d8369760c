"""Fraunhofer double-slit intensity model.

I(theta) = sinc^2(alpha) * cos^2(delta)

    alpha = pi * a * sin(theta) / lambda    (single-slit diffraction)
    delta = pi * d * sin(theta) / lambda    (two-slit interference)

theta is measured from the barrier to a screen row, relative to the
screen center. Both wave-mode coloring and particle-mode sampling read
intensities from here, so the two visualizations agree at convergence.
"""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np
from numpy.typing import NDArray

from double_slit.utils.cache import MemoCache
from double_slit.utils.constants import NM_TO_M, UM_TO_M
from double_slit.utils.math_helpers import screen_angle
from double_slit.utils.types import SimulationParams


def diffraction_factor(alpha: float) -> float:
    """Single-slit envelope sinc^2(alpha), with the 0/0 limit taken as 1."""
    if alpha == 0.0:
        return 1.0
    return float((np.sin(alpha) / alpha) ** 2)


def interference_factor(delta: float) -> float:
    """Two-slit modulation cos^2(delta)."""
    return float(np.cos(delta) ** 2)


def interference_intensity(
    y: float,
    wavelength: float,
    slit_width: float,
    slit_distance: float,
    screen_distance: float,
) -> float:
    """Normalized intensity at screen row y. Units: nm, um, um, display units."""
    theta = screen_angle(y, screen_distance)
    lam = wavelength * NM_TO_M
    a = slit_width * UM_TO_M
    d = slit_distance * UM_TO_M

    sin_theta = np.sin(theta)
    alpha = float(np.pi * a * sin_theta / lam)
    delta = float(np.pi * d * sin_theta / lam)
    return diffraction_factor(alpha) * interference_factor(delta)


class IntensityModel:
    """Memoized interference intensity over screen rows.

    Cache keys are the exact (y, wavelength, slit_width, slit_distance,
    screen_distance) tuple. The control surface moves in fixed steps, so
    the key space stays small in practice.
    """

    def __init__(self, cache: MemoCache | None = None) -> None:
        self.cache = cache if cache is not None else MemoCache()

    def intensity(self, params: SimulationParams, y: float) -> float:
        """Intensity in [0, 1] at screen row y."""
        key = (
            y,
            params.wavelength,
            params.slit_width,
            params.slit_distance,
            params.screen_distance,
        )
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        value = interference_intensity(
            y,
            params.wavelength,
            params.slit_width,
            params.slit_distance,
            params.screen_distance,
        )
        return self.cache.set(key, value)

    def profile(
        self, params: SimulationParams, rows: Iterable[float]
    ) -> NDArray[np.float64]:
        """Intensities for a sequence of rows, via the cached scalar path."""
        return np.array([self.intensity(params, y) for y in rows], dtype=np.float64)

    def reset(self) -> None:
        self.cache.reset()
