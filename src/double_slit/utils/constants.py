"""Display geometry and optical constants for the double-slit simulation."""

# -- Canvas (logical pixels) --
CANVAS_WIDTH: int = 1600
CANVAS_HEIGHT: int = 500
SCREEN_CENTER_Y: float = CANVAS_HEIGHT / 2

# -- Scene layout (unscaled simulation space) --
SOURCE_X: float = 50.0
SOURCE_RADIUS: float = 8.0
BARRIER_X: float = 150.0
BARRIER_THICKNESS: float = 5.0
SCREEN_THICKNESS: float = 5.0
SCREEN_MAX_DISTANCE: float = 2000.0
STRIP_OFFSET: float = 10.0  # intensity strip sits this far right of the screen line
STRIP_WIDTH: float = 80.0
PARTICLE_RADIUS: float = 2.0

# -- Optics --
WAVELENGTH_MIN_NM: float = 380.0
WAVELENGTH_MAX_NM: float = 750.0
NM_TO_M: float = 1e-9
UM_TO_M: float = 1e-6

# -- Spectrum segment boundaries (nm) --
VIOLET_BLUE_NM: float = 440.0
BLUE_CYAN_NM: float = 490.0
CYAN_GREEN_NM: float = 510.0
GREEN_YELLOW_NM: float = 580.0
ORANGE_RED_NM: float = 645.0

# -- Defaults for the control surface --
DEFAULT_WAVELENGTH_NM: float = 550.0
DEFAULT_SLIT_WIDTH_UM: float = 2.0
DEFAULT_SLIT_DISTANCE_UM: float = 20.0
DEFAULT_SCREEN_DISTANCE: float = 500.0
DEFAULT_PARTICLE_SPEED: float = 2.0
DEFAULT_INTENSITY_THRESHOLD: float = 0.1

# -- Particle mode --
EMISSION_PROBABILITY: float = 0.5  # chance per frame of emitting one particle
PERSISTENCE_THRESHOLD: float = 0.1  # accumulated points at or below this fade out

# -- Wave mode --
WAVELENGTH_TO_RING_STEP: float = 1.0 / 100.0  # nm -> wavefront spacing in display units
RING_STEP_REFERENCE_DISTANCE: float = 500.0
WAVEFRONT_MIN_OPACITY: float = 0.1
PATTERN_ROW_SAMPLES: int = 200

# -- Alpha factors --
WAVEFRONT_ALPHA: float = 0.2
PATTERN_ALPHA: float = 0.8
PARTICLE_ALPHA: float = 0.8
ACCUMULATION_ALPHA: float = 0.5

# -- Colors (RGB) --
BACKGROUND_COLOR: tuple[int, int, int] = (0x1A, 0x1A, 0x1A)
SOURCE_COLOR: tuple[int, int, int] = (255, 255, 0)
BARRIER_COLOR: tuple[int, int, int] = (0x66, 0x66, 0x66)
SLIT_GAP_COLOR: tuple[int, int, int] = (0, 0, 0)
SCREEN_COLOR: tuple[int, int, int] = (255, 255, 255)

# -- Animation --
FRAME_INTERVAL_MS: float = 1000.0 / 60.0
