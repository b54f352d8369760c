"""Persistent record of particle landings on the detection screen."""

from __future__ import annotations

from collections.abc import Iterator

import numpy as np
from numpy.typing import NDArray

from double_slit.core.intensity import IntensityModel
from double_slit.utils.constants import PERSISTENCE_THRESHOLD
from double_slit.utils.types import ScreenPoint, SimulationParams


class ScreenAccumulationBuffer:
    """Append-only landing store, filtered against the model every frame.

    Points whose current intensity falls to the persistence threshold or
    below are dropped for good; the buffer is otherwise cleared only on a
    mode change.
    """

    def __init__(self, threshold: float = PERSISTENCE_THRESHOLD) -> None:
        self.threshold = threshold
        self._points: list[ScreenPoint] = []

    def record(self, y: float) -> ScreenPoint:
        """Append a landing at screen row y."""
        point = ScreenPoint(y=y, intensity=1.0)
        self._points.append(point)
        return point

    def refresh(
        self, params: SimulationParams, model: IntensityModel
    ) -> list[tuple[ScreenPoint, float]]:
        """Drop points at or below the threshold; return survivors with intensity."""
        survivors: list[tuple[ScreenPoint, float]] = []
        for point in self._points:
            intensity = model.intensity(params, point.y)
            if intensity > self.threshold:
                survivors.append((point, intensity))
        self._points = [point for point, _ in survivors]
        return survivors

    def clear(self) -> None:
        self._points = []

    @property
    def points(self) -> tuple[ScreenPoint, ...]:
        return tuple(self._points)

    def landing_rows(self) -> NDArray[np.float64]:
        """Landing y positions as an array, for analysis and plots."""
        return np.array([p.y for p in self._points], dtype=np.float64)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[ScreenPoint]:
        return iter(self._points)
