"""Tests for the accumulation-vs-model convergence analyzer."""

import numpy as np
import pytest

from double_slit.analysis.convergence import ConvergenceAnalyzer


@pytest.fixture
def model_landings(sampler, params):
    rows = []
    for i in range(6000):
        slit = 240.0 if i % 2 else 260.0
        result = sampler.sample(slit, params, 0.1)
        if result.should_show:
            rows.append(result.end_y)
    return np.array(rows)


class TestDistributions:
    def test_expected_sums_to_one(self, model, params):
        analyzer = ConvergenceAnalyzer(model, params, [])
        assert analyzer.expected_distribution().sum() == pytest.approx(1.0)

    def test_expected_peaks_at_center(self, model, params):
        analyzer = ConvergenceAnalyzer(model, params, [], bins=50)
        expected = analyzer.expected_distribution()
        assert int(np.argmax(expected)) == 25

    def test_expected_zero_outside_envelope(self, model, params):
        analyzer = ConvergenceAnalyzer(model, params, [], bins=50)
        expected = analyzer.expected_distribution()
        assert expected[0] == 0.0
        assert expected[-1] == 0.0

    def test_observed(self, model, params):
        analyzer = ConvergenceAnalyzer(model, params, [5.0, 5.0, 255.0, 495.0], bins=50)
        observed = analyzer.observed_distribution()
        assert observed.sum() == pytest.approx(1.0)
        assert observed[0] == pytest.approx(0.5)
        assert observed[25] == pytest.approx(0.25)
        assert observed[49] == pytest.approx(0.25)


class TestStatistics:
    def test_empty(self, model, params):
        analyzer = ConvergenceAnalyzer(model, params, [])
        assert analyzer.jensen_shannon_distance() == 1.0
        assert analyzer.chi_square() == (0.0, 1.0)

    def test_model_samples_converge(self, model, params, model_landings):
        analyzer = ConvergenceAnalyzer(model, params, model_landings)
        assert analyzer.jensen_shannon_distance() < 0.1
        statistic, p_value = analyzer.chi_square()
        assert np.isfinite(statistic)
        assert 0.0 <= p_value <= 1.0

    def test_uniform_landings_diverge(self, model, params, model_landings):
        uniform = np.linspace(0.0, 499.0, len(model_landings))
        good = ConvergenceAnalyzer(model, params, model_landings)
        bad = ConvergenceAnalyzer(model, params, uniform)
        assert bad.jensen_shannon_distance() > good.jensen_shannon_distance()

    def test_forbidden_landings(self, model, params):
        analyzer = ConvergenceAnalyzer(model, params, [480.0] * 10)
        assert analyzer.chi_square() == (float("inf"), 0.0)
        assert analyzer.jensen_shannon_distance() == pytest.approx(1.0)

    def test_summary(self, model, params, model_landings):
        summary = ConvergenceAnalyzer(model, params, model_landings).summary()
        assert set(summary) == {"landings", "bins", "js_distance", "chi_square", "p_value"}
        assert summary["landings"] == len(model_landings)
