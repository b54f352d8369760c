"""Particle-mode engine: emission, flight and landing of individual particles.

Each particle goes spawned -> traveling -> landed | discarded. Landed
particles leave a ScreenPoint in the accumulation buffer; discarded ones
(left the canvas vertically) leave nothing.
"""

from __future__ import annotations

import logging

import numpy as np

from double_slit.core.accumulation import ScreenAccumulationBuffer
from double_slit.core.sampler import DegenerateDistributionError, ParticleSampler
from double_slit.utils.constants import BARRIER_X, CANVAS_HEIGHT, EMISSION_PROBABILITY
from double_slit.utils.math_helpers import slit_centers, trajectory_angle
from double_slit.utils.types import Particle, ScreenPoint, SimulationParams

logger = logging.getLogger(__name__)


class ParticleEngine:
    """Own the in-flight particles and advance them once per frame."""

    def __init__(
        self,
        sampler: ParticleSampler,
        buffer: ScreenAccumulationBuffer,
        rng: np.random.Generator | None = None,
        emission_probability: float = EMISSION_PROBABILITY,
        height: int = CANVAS_HEIGHT,
    ) -> None:
        self.sampler = sampler
        self.buffer = buffer
        self.rng = rng if rng is not None else sampler.rng
        self.emission_probability = emission_probability
        self.height = height

        self._particles: list[Particle] = []

        # Lifetime counters
        self.emitted_count: int = 0
        self.suppressed_count: int = 0
        self.landed_count: int = 0
        self.discarded_count: int = 0

    @property
    def particles(self) -> tuple[Particle, ...]:
        return tuple(self._particles)

    def add_particle(self, particle: Particle) -> None:
        self._particles.append(particle)

    def clear(self) -> None:
        """Drop every particle in flight."""
        self._particles = []

    def emit(
        self, params: SimulationParams, speed: float, threshold: float
    ) -> Particle | None:
        """Fire one particle from a random slit toward a sampled landing row.

        Returns None when the sampled row is below the threshold (the
        particle never registers) or the distribution is degenerate.
        """
        upper, lower = slit_centers(params)
        slit_y = upper if self.rng.random() < 0.5 else lower

        try:
            path = self.sampler.sample(slit_y, params, threshold)
        except DegenerateDistributionError as exc:
            logger.warning("Skipping emission: %s", exc)
            return None

        if not path.should_show:
            self.suppressed_count += 1
            return None

        particle = Particle(
            x=BARRIER_X,
            y=slit_y,
            angle=trajectory_angle(slit_y, path.end_y, params.screen_distance),
            speed=speed,
        )
        self._particles.append(particle)
        self.emitted_count += 1
        return particle

    def advance(self, params: SimulationParams) -> list[ScreenPoint]:
        """Move every particle one step; record and remove those that land."""
        landed: list[ScreenPoint] = []
        alive: list[Particle] = []

        for p in self._particles:
            next_x = p.x + p.speed
            next_y = p.y + p.speed * float(np.tan(p.angle))

            if next_x >= params.screen_distance:
                if 0.0 <= next_y <= self.height:
                    landed.append(self.buffer.record(next_y))
                    self.landed_count += 1
                else:
                    self.discarded_count += 1
                continue

            p.x = next_x
            p.y = next_y
            if 0.0 <= p.y <= self.height:
                alive.append(p)
            else:
                self.discarded_count += 1

        self._particles = alive
        return landed

    def step(
        self,
        params: SimulationParams,
        speed: float,
        threshold: float,
        delta_time: float = 1.0,
    ) -> list[ScreenPoint]:
        """One frame: maybe emit, then advance. Returns this frame's landings."""
        if delta_time > 0 and self.rng.random() < self.emission_probability:
            self.emit(params, speed, threshold)
        return self.advance(params)
