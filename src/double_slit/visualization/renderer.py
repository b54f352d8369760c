"""Double-buffered frame renderer for the double-slit scene.

Every frame is painted onto an off-screen Surface and then copied to the
visible one, so a presenter never sees a half-drawn frame.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from double_slit.core.intensity import IntensityModel
from double_slit.utils.constants import (
    ACCUMULATION_ALPHA,
    BACKGROUND_COLOR,
    BARRIER_COLOR,
    BARRIER_THICKNESS,
    BARRIER_X,
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    PARTICLE_ALPHA,
    PARTICLE_RADIUS,
    PATTERN_ALPHA,
    PATTERN_ROW_SAMPLES,
    RING_STEP_REFERENCE_DISTANCE,
    SCREEN_CENTER_Y,
    SCREEN_COLOR,
    SCREEN_THICKNESS,
    SLIT_GAP_COLOR,
    SOURCE_COLOR,
    SOURCE_RADIUS,
    SOURCE_X,
    STRIP_OFFSET,
    STRIP_WIDTH,
    WAVEFRONT_ALPHA,
    WAVEFRONT_MIN_OPACITY,
    WAVELENGTH_TO_RING_STEP,
)
from double_slit.utils.math_helpers import display_scale, slit_centers
from double_slit.utils.types import WAVE, Particle, ScreenPoint, SimulationParams
from double_slit.visualization.color import ColorMapper
from double_slit.visualization.surface import Surface


def wavefront_step(params: SimulationParams) -> float:
    """Radial spacing of drawn wavefronts; widens as the screen moves away."""
    lam = params.wavelength * WAVELENGTH_TO_RING_STEP
    return max(lam, lam * (params.screen_distance / RING_STEP_REFERENCE_DISTANCE))


class Renderer:
    """Paint the static scene plus the wave or particle view of one frame."""

    def __init__(
        self,
        color_mapper: ColorMapper,
        model: IntensityModel,
        width: int = CANVAS_WIDTH,
        height: int = CANVAS_HEIGHT,
    ) -> None:
        self.color_mapper = color_mapper
        self.model = model
        self.width = width
        self.height = height

        self.offscreen = Surface(width, height, BACKGROUND_COLOR)
        self.visible = Surface(width, height, BACKGROUND_COLOR)

        # Wavefront opacity maps are static per parameter set; only the
        # current set is kept since each map is a full canvas of floats.
        self._wavefront_key: tuple | None = None
        self._wavefront_maps: dict[float, NDArray[np.float32]] = {}
        self.frames_rendered: int = 0

    def render(
        self,
        params: SimulationParams,
        mode: str,
        particles: Sequence[Particle] = (),
        screen_points: Sequence[tuple[ScreenPoint, float]] = (),
    ) -> Surface:
        """Draw one complete frame and present it. Returns the visible surface."""
        surface = self.offscreen
        surface.x_scale = 1.0
        surface.fill(BACKGROUND_COLOR)
        surface.x_scale = display_scale(params.screen_distance)

        self.draw_static_scene(params)
        if mode == WAVE:
            self.draw_wavefronts(params)
            self.draw_intensity_pattern(params)
        else:
            self.draw_particles(params, particles)
            self.draw_accumulation(params, screen_points)

        self.visible.blit(surface)
        self.frames_rendered += 1
        return self.visible

    def draw_static_scene(self, params: SimulationParams) -> None:
        surface = self.offscreen
        surface.fill_circle(SOURCE_X, SCREEN_CENTER_Y, SOURCE_RADIUS, SOURCE_COLOR)

        surface.fill_rect(BARRIER_X, 0, BARRIER_THICKNESS, self.height, BARRIER_COLOR)
        for slit_y in slit_centers(params):
            surface.fill_rect(
                BARRIER_X,
                slit_y - params.slit_width / 2,
                BARRIER_THICKNESS,
                params.slit_width,
                SLIT_GAP_COLOR,
            )

        surface.fill_rect(
            params.screen_distance, 0, SCREEN_THICKNESS, self.height, SCREEN_COLOR
        )

    def wavefront_opacity(
        self, params: SimulationParams, slit_y: float
    ) -> NDArray[np.float32]:
        """Per-pixel alpha of the semicircular wavefronts leaving one slit."""
        scale = self.offscreen.x_scale
        key = (params, scale)
        if key != self._wavefront_key:
            self._wavefront_key = key
            self._wavefront_maps = {}
        if slit_y in self._wavefront_maps:
            return self._wavefront_maps[slit_y]

        span = params.screen_distance - BARRIER_X
        step = wavefront_step(params)
        xs = self.offscreen.scaled_x_coords()
        ys = self.offscreen.y_coords()

        r = np.hypot(xs[None, :] - BARRIER_X, ys[:, None] - slit_y)
        ring = np.rint(r / step)
        ring_r = ring * step
        # One device pixel wide, measured in simulation units along x
        tolerance = 0.5 / scale
        on_ring = (
            (np.abs(r - ring_r) <= tolerance)
            & (xs[None, :] >= BARRIER_X)
            & (ring_r < span)
        )
        opacity = np.maximum(WAVEFRONT_MIN_OPACITY, 1.0 - ring_r / span)
        alpha = np.where(on_ring, opacity * WAVEFRONT_ALPHA, 0.0).astype(np.float32)
        self._wavefront_maps[slit_y] = alpha
        return alpha

    def draw_wavefronts(self, params: SimulationParams) -> None:
        color = self.color_mapper.to_color(params.wavelength)
        for slit_y in slit_centers(params):
            self.offscreen.blend(self.wavefront_opacity(params, slit_y), color.rgb)

    def draw_intensity_pattern(self, params: SimulationParams) -> None:
        """Intensity strip beside the screen, sampled every few rows."""
        y_step = max(1, self.height // PATTERN_ROW_SAMPLES)
        strip_x = params.screen_distance + STRIP_OFFSET
        for y in range(0, self.height, y_step):
            intensity = self.model.intensity(params, y)
            color = self.color_mapper.to_color(params.wavelength, intensity * PATTERN_ALPHA)
            self.offscreen.fill_rect(strip_x, y, STRIP_WIDTH, y_step, color)

    def draw_particles(
        self, params: SimulationParams, particles: Sequence[Particle]
    ) -> None:
        color = self.color_mapper.to_color(params.wavelength, PARTICLE_ALPHA)
        for p in particles:
            if 0.0 <= p.y <= self.height:
                self.offscreen.fill_circle(p.x, p.y, PARTICLE_RADIUS, color)

    def draw_accumulation(
        self,
        params: SimulationParams,
        screen_points: Sequence[tuple[ScreenPoint, float]],
    ) -> None:
        strip_x = params.screen_distance + STRIP_OFFSET
        for point, intensity in screen_points:
            color = self.color_mapper.to_color(
                params.wavelength, intensity * ACCUMULATION_ALPHA
            )
            self.offscreen.fill_rect(strip_x, point.y, STRIP_WIDTH, 1, color)

    def reset(self) -> None:
        self._wavefront_key = None
        self._wavefront_maps = {}
