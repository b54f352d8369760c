"""Fringe metrics extracted from the model intensity profile."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray
from scipy.signal import find_peaks

from double_slit.utils.constants import BARRIER_X, CANVAS_HEIGHT, SCREEN_CENTER_Y

if TYPE_CHECKING:
    from double_slit.core.intensity import IntensityModel
    from double_slit.utils.types import SimulationParams


class FringeMetrics:
    """Locate bright fringes and compare their spacing with lambda * L / d.

    Wavelength and slit separation enter the model in nm and um while the
    screen distance is in display units, so the small-angle fringe spacing
    in rows is (lambda * 1e-9) * L / (d * 1e-6).
    """

    def __init__(
        self,
        model: IntensityModel,
        params: SimulationParams,
        height: int = CANVAS_HEIGHT,
    ) -> None:
        self.model = model
        self.params = params
        self.rows = np.arange(height)
        self.profile = model.profile(params, self.rows)

    def peak_rows(self, min_height: float = 0.0) -> NDArray[np.int64]:
        """Rows of local intensity maxima (bright fringes)."""
        peaks, _ = find_peaks(self.profile, height=min_height)
        return self.rows[peaks]

    def central_row(self) -> int:
        return int(self.rows[np.argmax(self.profile)])

    def expected_spacing(self) -> float:
        """Small-angle fringe spacing in rows."""
        lam = self.params.wavelength * 1e-9
        d = self.params.slit_distance * 1e-6
        return lam * (self.params.screen_distance - BARRIER_X) / d

    def measured_spacing(self) -> float | None:
        """Mean distance between the fringes nearest the center, or None."""
        peaks = self.peak_rows()
        if len(peaks) < 2:
            return None
        order = np.argsort(np.abs(peaks - SCREEN_CENTER_Y))
        nearest = np.sort(peaks[order[:3]])
        return float(np.mean(np.diff(nearest)))

    def visibility(self) -> float:
        """Michelson contrast (Imax - Imin) / (Imax + Imin) over the screen."""
        i_max = float(np.max(self.profile))
        i_min = float(np.min(self.profile))
        if i_max + i_min == 0:
            return 0.0
        return (i_max - i_min) / (i_max + i_min)

    def report(self) -> dict:
        return {
            "central_row": self.central_row(),
            "fringe_count": int(len(self.peak_rows())),
            "expected_spacing": self.expected_spacing(),
            "measured_spacing": self.measured_spacing(),
            "visibility": self.visibility(),
        }
