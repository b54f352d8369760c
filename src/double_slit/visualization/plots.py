"""Matplotlib-based 2D plots for double-slit analysis."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend by default

import matplotlib.pyplot as plt
import numpy as np
from numpy.typing import NDArray

from double_slit.core.intensity import diffraction_factor
from double_slit.utils.constants import CANVAS_HEIGHT, NM_TO_M, UM_TO_M
from double_slit.utils.math_helpers import screen_angle

if TYPE_CHECKING:
    from double_slit.core.intensity import IntensityModel
    from double_slit.utils.types import SimulationParams
    from double_slit.visualization.color import ColorMapper
    from double_slit.visualization.surface import Surface


class PlotSuite:
    """Matplotlib-based 2D plots for the double-slit simulation."""

    def __init__(self, save_dir: str = "~/Desktop") -> None:
        self.save_dir = os.path.expanduser(save_dir)

    def _save_or_show(
        self, fig: plt.Figure, name: str, show: bool, save: bool
    ) -> plt.Figure:
        if save:
            os.makedirs(self.save_dir, exist_ok=True)
            path = os.path.join(self.save_dir, f"ds_{name}.png")
            fig.savefig(path, dpi=150, bbox_inches="tight")
        if show:
            plt.show()
        else:
            plt.close(fig)
        return fig

    def intensity_profile(
        self,
        model: IntensityModel,
        params: SimulationParams,
        show: bool = False,
        save: bool = True,
    ) -> plt.Figure:
        """Plot the combined intensity with its diffraction envelope."""
        rows = np.arange(CANVAS_HEIGHT)
        combined = model.profile(params, rows)

        lam = params.wavelength * NM_TO_M
        a = params.slit_width * UM_TO_M
        envelope = np.array([
            diffraction_factor(np.pi * a * np.sin(screen_angle(y, params.screen_distance)) / lam)
            for y in rows
        ])

        fig, ax = plt.subplots(figsize=(12, 5))
        ax.plot(rows, combined, color="tab:blue", label="Double-slit intensity")
        ax.plot(rows, envelope, color="tab:red", linestyle="--", alpha=0.7,
                label="Single-slit envelope")
        ax.set_xlabel("Screen row")
        ax.set_ylabel("Normalized intensity")
        ax.set_ylim(0, 1.05)
        ax.set_title(
            f"Intensity profile -- lambda={params.wavelength:g} nm, "
            f"a={params.slit_width:g} um, d={params.slit_distance:g} um, "
            f"L={params.screen_distance:g}"
        )
        ax.legend()
        ax.grid(True, alpha=0.3)

        return self._save_or_show(fig, "intensity_profile", show, save)

    def accumulation_histogram(
        self,
        landing_rows: NDArray[np.float64],
        model: IntensityModel,
        params: SimulationParams,
        bins: int = 100,
        show: bool = False,
        save: bool = True,
    ) -> plt.Figure:
        """Histogram of particle landings against the model density."""
        fig, ax = plt.subplots(figsize=(12, 5))

        if len(landing_rows) == 0:
            ax.text(0.5, 0.5, "No landings", ha="center", va="center",
                    transform=ax.transAxes)
            return self._save_or_show(fig, "accumulation", show, save)

        ax.hist(landing_rows, bins=bins, range=(0, CANVAS_HEIGHT), density=True,
                color="tab:green", alpha=0.6, label=f"Landings (n={len(landing_rows)})")

        rows = np.arange(CANVAS_HEIGHT)
        density = model.profile(params, rows)
        total = density.sum()
        if total > 0:
            ax.plot(rows, density / total, color="black", linewidth=1.0,
                    label="Model density")

        ax.set_xlabel("Screen row")
        ax.set_ylabel("Probability density")
        ax.set_title("Particle accumulation vs. interference model")
        ax.legend()
        ax.grid(True, alpha=0.3)

        return self._save_or_show(fig, "accumulation", show, save)

    def frame_snapshot(
        self,
        surface: Surface,
        title: str = "Frame",
        show: bool = False,
        save: bool = True,
    ) -> plt.Figure:
        """Show a rendered frame as an image."""
        height, width = surface.height, surface.width
        fig, ax = plt.subplots(figsize=(16, 16 * height / width))
        ax.imshow(surface.to_rgb8(), interpolation="nearest")
        ax.set_axis_off()
        ax.set_title(title)

        return self._save_or_show(fig, "frame", show, save)

    def spectrum_strip(
        self,
        color_mapper: ColorMapper,
        show: bool = False,
        save: bool = True,
    ) -> plt.Figure:
        """Render the wavelength-to-color mapping across 380-750 nm."""
        wavelengths = np.arange(380, 751)
        colors = np.array([
            [c / 255.0 for c in color_mapper.to_color(float(w)).rgb]
            for w in wavelengths
        ])

        fig, ax = plt.subplots(figsize=(12, 2))
        ax.imshow(colors[None, :, :], aspect="auto",
                  extent=(wavelengths[0], wavelengths[-1], 0, 1))
        for boundary in (440, 490, 510, 580, 645):
            ax.axvline(boundary, color="white", linewidth=0.5, alpha=0.6)
        ax.set_yticks([])
        ax.set_xlabel("Wavelength (nm)")
        ax.set_title("Spectrum color map")

        return self._save_or_show(fig, "spectrum", show, save)
