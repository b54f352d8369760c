import numpy as np
import pytest

from double_slit.core.accumulation import ScreenAccumulationBuffer
from double_slit.core.intensity import IntensityModel
from double_slit.core.particle_engine import ParticleEngine
from double_slit.core.sampler import ParticleSampler
from double_slit.utils.types import SimulationParams


@pytest.fixture
def params():
    return SimulationParams(
        wavelength=550.0, slit_width=2.0, slit_distance=20.0, screen_distance=500.0
    )


@pytest.fixture
def model():
    return IntensityModel()


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def sampler(model, rng):
    return ParticleSampler(model, rng=rng)


@pytest.fixture
def buffer():
    return ScreenAccumulationBuffer()


@pytest.fixture
def engine(sampler, buffer, rng):
    return ParticleEngine(sampler, buffer, rng=rng)
