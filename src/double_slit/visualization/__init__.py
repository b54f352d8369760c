"""Rendering: colors, raster surfaces, frame loop, window, plots."""
