"""Real-time double-slit diffraction and interference simulation."""

__version__ = "0.1.0"
