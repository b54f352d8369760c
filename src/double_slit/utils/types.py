"""Dataclass definitions for the double-slit simulation."""

from __future__ import annotations

from dataclasses import dataclass

from double_slit.utils.constants import (
    BARRIER_X,
    DEFAULT_INTENSITY_THRESHOLD,
    DEFAULT_PARTICLE_SPEED,
    DEFAULT_SCREEN_DISTANCE,
    DEFAULT_SLIT_DISTANCE_UM,
    DEFAULT_SLIT_WIDTH_UM,
    DEFAULT_WAVELENGTH_NM,
    EMISSION_PROBABILITY,
    WAVELENGTH_MAX_NM,
    WAVELENGTH_MIN_NM,
)

WAVE = "wave"
PARTICLE = "particle"
MODES = (WAVE, PARTICLE)


@dataclass(frozen=True)
class SimulationParams:
    """Optical parameters, treated as a read-only snapshot per frame."""

    wavelength: float = DEFAULT_WAVELENGTH_NM  # nm
    slit_width: float = DEFAULT_SLIT_WIDTH_UM  # um
    slit_distance: float = DEFAULT_SLIT_DISTANCE_UM  # um, center to center
    screen_distance: float = DEFAULT_SCREEN_DISTANCE  # display units

    def __post_init__(self) -> None:
        if not WAVELENGTH_MIN_NM <= self.wavelength <= WAVELENGTH_MAX_NM:
            raise ValueError(
                f"wavelength must be in [{WAVELENGTH_MIN_NM:g}, {WAVELENGTH_MAX_NM:g}] nm, "
                f"got {self.wavelength}"
            )
        if self.slit_width <= 0:
            raise ValueError(f"slit_width must be positive, got {self.slit_width}")
        if self.slit_distance <= 0:
            raise ValueError(f"slit_distance must be positive, got {self.slit_distance}")
        if self.screen_distance <= BARRIER_X:
            raise ValueError(
                f"screen_distance must be beyond the barrier (x={BARRIER_X:g}), "
                f"got {self.screen_distance}"
            )


@dataclass
class SimulationConfig:
    """Run-time controls that are not part of the optics."""

    mode: str = WAVE
    particle_speed: float = DEFAULT_PARTICLE_SPEED
    intensity_threshold: float = DEFAULT_INTENSITY_THRESHOLD
    emission_probability: float = EMISSION_PROBABILITY
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.mode not in MODES:
            raise ValueError(f"mode must be one of {MODES}, got {self.mode!r}")
        if self.particle_speed <= 0:
            raise ValueError(f"particle_speed must be positive, got {self.particle_speed}")
        if not 0.0 <= self.intensity_threshold < 1.0:
            raise ValueError(
                f"intensity_threshold must be in [0, 1), got {self.intensity_threshold}"
            )
        if not 0.0 <= self.emission_probability <= 1.0:
            raise ValueError(
                f"emission_probability must be in [0, 1], got {self.emission_probability}"
            )


@dataclass
class Particle:
    """A particle in flight between the barrier and the screen."""

    x: float
    y: float
    angle: float  # radians, fixed at emission
    speed: float  # x step per frame


@dataclass(frozen=True)
class ScreenPoint:
    """A recorded landing on the detection screen."""

    y: float
    intensity: float = 1.0


@dataclass(frozen=True)
class SampleResult:
    """Landing row drawn for one emission."""

    end_y: float
    should_show: bool


@dataclass(frozen=True)
class Color:
    """RGB color with the intensity carried as alpha."""

    r: int
    g: int
    b: int
    alpha: float = 1.0

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def __str__(self) -> str:
        return f"rgba({self.r}, {self.g}, {self.b}, {self.alpha})"
