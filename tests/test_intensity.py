"""Tests for the interference intensity model."""

import numpy as np
import pytest

from double_slit.core.intensity import (
    IntensityModel,
    diffraction_factor,
    interference_factor,
    interference_intensity,
)
from double_slit.utils.constants import CANVAS_HEIGHT, SCREEN_CENTER_Y
from double_slit.utils.math_helpers import screen_angle
from double_slit.utils.types import SimulationParams

ROWS = np.arange(CANVAS_HEIGHT)


class TestFactors:
    def test_diffraction_limit_at_zero(self):
        assert diffraction_factor(0.0) == 1.0

    def test_diffraction_zero_at_pi(self):
        assert diffraction_factor(np.pi) == pytest.approx(0.0, abs=1e-30)

    def test_diffraction_bounded(self):
        for alpha in np.linspace(-20, 20, 401):
            assert 0.0 <= diffraction_factor(alpha) <= 1.0

    def test_interference(self):
        assert interference_factor(0.0) == 1.0
        assert interference_factor(np.pi / 2) == pytest.approx(0.0, abs=1e-30)
        assert interference_factor(np.pi) == pytest.approx(1.0)


class TestIntensity:
    def test_center_is_one(self, model, params):
        assert model.intensity(params, SCREEN_CENTER_Y) == 1.0

    def test_bounded(self, model, params):
        values = model.profile(params, ROWS)
        assert np.all(values >= 0.0)
        assert np.all(values <= 1.0)

    @pytest.mark.parametrize("wavelength,slit_width,slit_distance,screen_distance", [
        (380.0, 0.5, 5.0, 400.0),
        (550.0, 2.0, 20.0, 500.0),
        (750.0, 10.0, 50.0, 2000.0),
    ])
    def test_bounded_across_params(self, model, wavelength, slit_width, slit_distance,
                                   screen_distance):
        p = SimulationParams(wavelength, slit_width, slit_distance, screen_distance)
        values = model.profile(p, ROWS)
        assert values.min() >= 0.0
        assert values.max() <= 1.0

    def test_symmetric_about_center(self, model, params):
        for k in range(1, 250):
            above = model.intensity(params, SCREEN_CENTER_Y - k)
            below = model.intensity(params, SCREEN_CENTER_Y + k)
            assert above == pytest.approx(below, rel=1e-12, abs=1e-15)

    def test_center_is_global_maximum(self, model, params):
        values = model.profile(params, ROWS)
        center = model.intensity(params, CANVAS_HEIGHT / 2)
        assert center == values.max()
        assert int(np.argmax(values)) == CANVAS_HEIGHT // 2

    def test_vanishing_separation_leaves_single_slit(self, model):
        p = SimulationParams(slit_distance=1e-9)
        lam = p.wavelength * 1e-9
        a = p.slit_width * 1e-6
        for y in (0.0, 120.0, 237.0, 400.0):
            theta = screen_angle(y, p.screen_distance)
            alpha = np.pi * a * np.sin(theta) / lam
            assert model.intensity(p, y) == pytest.approx(diffraction_factor(alpha))

    def test_has_dark_fringes(self, model, params):
        values = model.profile(params, ROWS)
        assert values.min() < 0.05

    def test_longer_wavelength_widens_fringes(self, model):
        red = SimulationParams(wavelength=700.0)
        blue = SimulationParams(wavelength=400.0)
        # First dark fringe: first local minimum moving away from center
        def first_dark(p):
            for k in range(1, 249):
                here = model.intensity(p, SCREEN_CENTER_Y + k)
                if model.intensity(p, SCREEN_CENTER_Y + k + 1) > here:
                    return k
            return None
        assert first_dark(red) > first_dark(blue)


class TestMemoization:
    def test_identical_object_returned(self, model, params):
        first = model.intensity(params, 123.0)
        second = model.intensity(params, 123.0)
        assert first is second

    def test_cache_keyed_by_all_inputs(self, model, params):
        model.intensity(params, 100.0)
        model.intensity(SimulationParams(wavelength=600.0), 100.0)
        model.intensity(params, 101.0)
        assert len(model.cache) == 3

    def test_profile_uses_cache(self, model, params):
        model.profile(params, range(10))
        assert len(model.cache) == 10
        model.profile(params, range(10))
        assert model.cache.hits == 10

    def test_matches_uncached_evaluation(self, model, params):
        expected = interference_intensity(
            77.0, params.wavelength, params.slit_width,
            params.slit_distance, params.screen_distance,
        )
        assert model.intensity(params, 77.0) == expected

    def test_reset(self, model, params):
        model.intensity(params, 5.0)
        model.reset()
        assert len(model.cache) == 0

    def test_separate_instances_do_not_share(self, params):
        a, b = IntensityModel(), IntensityModel()
        a.intensity(params, 5.0)
        assert len(b.cache) == 0
