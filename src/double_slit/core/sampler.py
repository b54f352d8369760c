"""Born-rule sampling of particle landing rows."""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from double_slit.core.intensity import IntensityModel
from double_slit.utils.cache import MemoCache
from double_slit.utils.constants import CANVAS_HEIGHT
from double_slit.utils.types import SampleResult, SimulationParams

logger = logging.getLogger(__name__)


class DegenerateDistributionError(ValueError):
    """Every screen row has zero intensity, so no landing row can be drawn."""


class ParticleSampler:
    """Draw landing rows from the normalized intensity over every screen row.

    The per-row distribution depends only on the optical parameters, so it
    is built once per SimulationParams and reused for every emission.
    """

    def __init__(
        self,
        model: IntensityModel,
        rng: np.random.Generator | None = None,
        height: int = CANVAS_HEIGHT,
        cache: MemoCache | None = None,
    ) -> None:
        self.model = model
        self.rng = rng if rng is not None else np.random.default_rng()
        self.height = height
        self.cache = cache if cache is not None else MemoCache()
        self.rows: NDArray[np.float64] = np.arange(height, dtype=np.float64)

    def distribution(self, params: SimulationParams) -> NDArray[np.float64]:
        """Probability of landing on each integer row; sums to 1.

        Raises:
            DegenerateDistributionError: if the intensity is zero on every row.
        """
        cached = self.cache.get(params)
        if cached is not None:
            return cached

        weights = self.model.profile(params, range(self.height))
        total = float(np.sum(weights))
        if not total > 0.0:
            raise DegenerateDistributionError(
                f"intensity is zero on all {self.height} rows for {params}"
            )
        probs = weights / total
        probs.setflags(write=False)
        logger.debug("built landing distribution for %s", params)
        return self.cache.set(params, probs)

    def sample(
        self, start_slit_y: float, params: SimulationParams, threshold: float
    ) -> SampleResult:
        """Draw one landing row.

        The chosen row is the first whose cumulative probability reaches a
        uniform draw in [0, 1). If round-off leaves the draw above the final
        cumulative sum, the particle keeps its slit row.
        """
        probs = self.distribution(params)
        u = self.rng.random()
        idx = int(np.searchsorted(np.cumsum(probs), u, side="left"))
        end_y = float(self.rows[idx]) if idx < self.height else float(start_slit_y)

        should_show = self.model.intensity(params, end_y) > threshold
        return SampleResult(end_y=end_y, should_show=should_show)

    def reset(self) -> None:
        self.cache.reset()
