"""Geometry helpers shared by the physics kernel and the renderer."""

from __future__ import annotations

import numpy as np

from double_slit.utils.constants import (
    BARRIER_X,
    CANVAS_WIDTH,
    SCREEN_CENTER_Y,
    STRIP_OFFSET,
    STRIP_WIDTH,
)
from double_slit.utils.types import SimulationParams


def slit_centers(params: SimulationParams) -> tuple[float, float]:
    """Return the y coordinates of the upper and lower slit centers.

    The slit separation in micrometers doubles as its size in display
    units, so the slits sit slit_distance / 2 either side of center.
    """
    half = params.slit_distance / 2.0
    return (SCREEN_CENTER_Y - half, SCREEN_CENTER_Y + half)


def screen_angle(y: float, screen_distance: float) -> float:
    """Angle of screen row y relative to screen center, seen from the barrier."""
    return float(np.arctan2(y - SCREEN_CENTER_Y, screen_distance - BARRIER_X))


def trajectory_angle(start_y: float, end_y: float, screen_distance: float) -> float:
    """Direction a particle leaving a slit at start_y needs to land at end_y."""
    return float(np.arctan2(end_y - start_y, screen_distance - BARRIER_X))


def display_scale(screen_distance: float) -> float:
    """Horizontal scale that keeps the screen and its intensity strip on canvas."""
    extent = screen_distance + STRIP_OFFSET + STRIP_WIDTH
    return min(1.0, CANVAS_WIDTH / extent)


def frames_to_screen(screen_distance: float, speed: float) -> int:
    """Frames a particle moving at speed needs to cross from barrier to screen."""
    return int(np.ceil((screen_distance - BARRIER_X) / speed))
