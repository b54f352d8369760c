"""Statistical comparison of accumulated landings against the model."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray
from scipy.spatial.distance import jensenshannon
from scipy.stats import chisquare

from double_slit.utils.constants import CANVAS_HEIGHT, PERSISTENCE_THRESHOLD

if TYPE_CHECKING:
    from double_slit.core.intensity import IntensityModel
    from double_slit.utils.types import SimulationParams


class ConvergenceAnalyzer:
    """Compare a particle accumulation with the intensity it samples.

    Accumulated points only survive where the intensity is above the
    persistence threshold, so the expected distribution is restricted to
    those rows before binning.
    """

    def __init__(
        self,
        model: IntensityModel,
        params: SimulationParams,
        landing_rows: NDArray[np.float64],
        bins: int = 50,
        threshold: float = PERSISTENCE_THRESHOLD,
        height: int = CANVAS_HEIGHT,
    ) -> None:
        self.model = model
        self.params = params
        self.landings = np.asarray(landing_rows, dtype=np.float64)
        self.bins = bins
        self.threshold = threshold
        self.height = height
        self.edges = np.linspace(0.0, float(height), bins + 1)

    def observed_distribution(self) -> NDArray[np.float64]:
        """Fraction of landings per bin."""
        counts, _ = np.histogram(self.landings, bins=self.edges)
        total = counts.sum()
        if total == 0:
            return np.zeros(self.bins)
        return counts / total

    def expected_distribution(self) -> NDArray[np.float64]:
        """Model probability per bin, over rows above the persistence threshold."""
        rows = np.arange(self.height)
        weights = self.model.profile(self.params, rows)
        weights = np.where(weights > self.threshold, weights, 0.0)
        per_bin, _ = np.histogram(rows, bins=self.edges, weights=weights)
        total = per_bin.sum()
        if total == 0:
            return np.zeros(self.bins)
        return per_bin / total

    def jensen_shannon_distance(self) -> float:
        """0 for identical distributions, 1 for disjoint ones (base 2)."""
        if len(self.landings) == 0:
            return 1.0
        return float(jensenshannon(self.observed_distribution(),
                                   self.expected_distribution(), base=2))

    def chi_square(self) -> tuple[float, float]:
        """Pearson chi-square over bins the model can reach.

        Returns (statistic, p_value).
        """
        n = len(self.landings)
        if n == 0:
            return (0.0, 1.0)
        counts, _ = np.histogram(self.landings, bins=self.edges)
        expected = self.expected_distribution() * n
        reachable = expected > 0
        if counts[~reachable].sum() > 0:
            # Landings where the model forbids them
            return (float("inf"), 0.0)
        result = chisquare(counts[reachable], expected[reachable])
        return (float(result.statistic), float(result.pvalue))

    def summary(self) -> dict:
        statistic, p_value = self.chi_square()
        return {
            "landings": int(len(self.landings)),
            "bins": self.bins,
            "js_distance": self.jensen_shannon_distance(),
            "chi_square": statistic,
            "p_value": p_value,
        }
