"""Constants, dataclasses, caching and geometry helpers."""
