"""The simulation instance: model caches, particle state, renderer and loop.

Control surfaces (CLI flags, window key bindings) talk only to
DoubleSlitSimulation; every frame reads the current params and config as
a snapshot and paints the result onto the renderer's visible surface.
"""

from __future__ import annotations

import logging

import numpy as np

from double_slit.core.accumulation import ScreenAccumulationBuffer
from double_slit.core.intensity import IntensityModel
from double_slit.core.particle_engine import ParticleEngine
from double_slit.core.sampler import ParticleSampler
from double_slit.utils.constants import FRAME_INTERVAL_MS
from double_slit.utils.types import (
    MODES,
    PARTICLE,
    WAVE,
    SimulationConfig,
    SimulationParams,
)
from double_slit.visualization.animation import AnimationLoop, ManualScheduler
from double_slit.visualization.color import ColorMapper
from double_slit.visualization.renderer import Renderer
from double_slit.visualization.surface import Surface

logger = logging.getLogger(__name__)


class DoubleSlitSimulation:
    """Wire the physics kernel to the renderer and drive it frame by frame."""

    def __init__(
        self,
        params: SimulationParams | None = None,
        config: SimulationConfig | None = None,
        scheduler: ManualScheduler | None = None,
    ) -> None:
        self.params = params or SimulationParams()
        self.config = config or SimulationConfig()
        self.rng = np.random.default_rng(self.config.seed)

        self.intensity_model = IntensityModel()
        self.color_mapper = ColorMapper()
        self.sampler = ParticleSampler(self.intensity_model, rng=self.rng)
        self.buffer = ScreenAccumulationBuffer()
        self.engine = ParticleEngine(
            self.sampler,
            self.buffer,
            rng=self.rng,
            emission_probability=self.config.emission_probability,
        )
        self.renderer = Renderer(self.color_mapper, self.intensity_model)

        self.scheduler = scheduler or ManualScheduler()
        self.loop = AnimationLoop(self.scheduler, self.frame)
        self.paused: bool = False
        self._clock: float = 0.0

    @property
    def mode(self) -> str:
        return self.config.mode

    @property
    def surface(self) -> Surface:
        """The visible surface holding the last presented frame."""
        return self.renderer.visible

    # -- Controls --

    def set_mode(self, mode: str) -> None:
        """Switch visualization; clears landings and particles in flight."""
        if mode not in MODES:
            raise ValueError(f"mode must be one of {MODES}, got {mode!r}")
        if mode == self.config.mode:
            return
        self.config.mode = mode
        self.buffer.clear()
        self.engine.clear()
        logger.info("Mode switched to %s", mode)
        self._restart_if_running()

    def toggle_mode(self) -> str:
        self.set_mode(PARTICLE if self.mode == WAVE else WAVE)
        return self.mode

    def set_params(self, params: SimulationParams) -> None:
        """Apply new optics; in-flight trajectories no longer fit and are dropped."""
        if params == self.params:
            return
        self.params = params
        self.engine.clear()
        logger.debug("Parameters changed to %s", params)
        self._restart_if_running()

    def set_particle_speed(self, speed: float) -> None:
        """Change the flight speed; particles in flight are dropped."""
        if speed <= 0:
            raise ValueError(f"particle_speed must be positive, got {speed}")
        self.config.particle_speed = speed
        self.engine.clear()
        self._restart_if_running()

    def set_intensity_threshold(self, threshold: float) -> None:
        if not 0.0 <= threshold < 1.0:
            raise ValueError(f"intensity_threshold must be in [0, 1), got {threshold}")
        self.config.intensity_threshold = threshold

    def toggle_pause(self) -> bool:
        self.paused = not self.paused
        return self.paused

    def clear_screen(self) -> None:
        self.buffer.clear()
        self.engine.clear()

    def reset_caches(self) -> None:
        self.intensity_model.reset()
        self.color_mapper.reset()
        self.sampler.reset()
        self.renderer.reset()

    # -- Frame loop --

    def start(self) -> None:
        self.loop.start()

    def stop(self) -> bool:
        return self.loop.stop()

    def _restart_if_running(self) -> None:
        if self.loop.running:
            self.loop.restart()

    def frame(self, timestamp: float, delta_time: float) -> None:
        """One frame: emit, advance, record, refresh accumulation, draw, present."""
        params = self.params
        if self.mode == PARTICLE:
            if not self.paused:
                self.engine.step(
                    params,
                    self.config.particle_speed,
                    self.config.intensity_threshold,
                    delta_time,
                )
            survivors = self.buffer.refresh(params, self.intensity_model)
            self.renderer.render(params, PARTICLE, self.engine.particles, survivors)
        else:
            self.renderer.render(params, WAVE)

    def run_frames(self, count: int, interval_ms: float = FRAME_INTERVAL_MS) -> int:
        """Pump count refreshes headlessly. Returns frames actually drawn."""
        self.start()
        drawn = 0
        for _ in range(count):
            self._clock += interval_ms
            drawn += self.scheduler.run_pending(self._clock)
        return drawn

    def summary(self) -> dict:
        return {
            "mode": self.mode,
            "frames": self.loop.frame_count,
            "skipped_frames": self.loop.skipped_frames,
            "emitted": self.engine.emitted_count,
            "suppressed": self.engine.suppressed_count,
            "landed": self.engine.landed_count,
            "discarded": self.engine.discarded_count,
            "in_flight": len(self.engine.particles),
            "accumulated": len(self.buffer),
            "intensity_cache_size": len(self.intensity_model.cache),
            "color_cache_size": len(self.color_mapper.cache),
        }
