"""Main entry point: python -m double_slit"""

from __future__ import annotations

import argparse
import csv
import logging
import os
import sys
from datetime import datetime

from double_slit import __version__
from double_slit.analysis.convergence import ConvergenceAnalyzer
from double_slit.analysis.metrics import FringeMetrics
from double_slit.simulation import DoubleSlitSimulation
from double_slit.utils.constants import (
    DEFAULT_INTENSITY_THRESHOLD,
    DEFAULT_PARTICLE_SPEED,
    DEFAULT_SCREEN_DISTANCE,
    DEFAULT_SLIT_DISTANCE_UM,
    DEFAULT_SLIT_WIDTH_UM,
    DEFAULT_WAVELENGTH_NM,
)
from double_slit.utils.types import MODES, PARTICLE, SimulationConfig, SimulationParams


def _add_simulation_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--mode", choices=MODES, default=PARTICLE, help="Visualization mode")
    parser.add_argument("--wavelength", type=float, default=DEFAULT_WAVELENGTH_NM,
                        help="Wavelength in nm (380-750)")
    parser.add_argument("--slit-width", type=float, default=DEFAULT_SLIT_WIDTH_UM,
                        help="Slit width in um")
    parser.add_argument("--slit-distance", type=float, default=DEFAULT_SLIT_DISTANCE_UM,
                        help="Slit separation in um")
    parser.add_argument("--screen-distance", type=float, default=DEFAULT_SCREEN_DISTANCE,
                        help="Screen position in display units")
    parser.add_argument("--speed", type=float, default=DEFAULT_PARTICLE_SPEED,
                        help="Particle speed per frame")
    parser.add_argument("--threshold", type=float, default=DEFAULT_INTENSITY_THRESHOLD,
                        help="Emission intensity threshold (0-1)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="double-slit",
        description="Double-slit diffraction and interference, as waves or one particle at a time",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command")

    # simulate
    sim = sub.add_parser("simulate", help="Run frames headlessly and report")
    _add_simulation_args(sim)
    sim.add_argument("--frames", type=int, default=2000, help="Frames to run")
    sim.add_argument("--no-viz", action="store_true", help="Skip plot generation")
    sim.add_argument("--csv", action="store_true", help="Export results CSV")
    sim.add_argument("--save-dir", type=str, default="~/Desktop",
                     help="Directory for plots and CSV (default ~/Desktop)")

    # visualize
    viz = sub.add_parser("visualize", help="Open the live simulation window")
    _add_simulation_args(viz)

    return parser


def build_simulation(
    args: argparse.Namespace, parser: argparse.ArgumentParser
) -> DoubleSlitSimulation:
    """Validate args into params/config; report bad values as usage errors."""
    try:
        params = SimulationParams(
            wavelength=args.wavelength,
            slit_width=args.slit_width,
            slit_distance=args.slit_distance,
            screen_distance=args.screen_distance,
        )
        config = SimulationConfig(
            mode=args.mode,
            particle_speed=args.speed,
            intensity_threshold=args.threshold,
            seed=args.seed,
        )
    except ValueError as exc:
        parser.error(str(exc))
    return DoubleSlitSimulation(params=params, config=config)


def run_simulation(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Headless pipeline: frames -> fringe metrics -> convergence -> report."""
    sim = build_simulation(args, parser)
    params = sim.params

    print(f"Mode: {sim.mode} | Frames: {args.frames}")
    print(f"Wavelength: {params.wavelength:g} nm | Slit width: {params.slit_width:g} um | "
          f"Slit distance: {params.slit_distance:g} um | Screen: {params.screen_distance:g}")
    print()

    print(f"Running {args.frames} frames...")
    sim.run_frames(args.frames)
    sim.stop()
    stats = sim.summary()

    print("Measuring fringes...")
    fringes = FringeMetrics(sim.intensity_model, params).report()

    convergence = ConvergenceAnalyzer(
        sim.intensity_model, params, sim.buffer.landing_rows()
    ).summary()

    print()
    print("=" * 50)
    print(" RESULTS")
    print("=" * 50)
    print(f"  Frames drawn:        {stats['frames']} ({stats['skipped_frames']} skipped)")
    print(f"  Particles emitted:   {stats['emitted']} ({stats['suppressed']} suppressed)")
    print(f"  Landed / discarded:  {stats['landed']} / {stats['discarded']}")
    print(f"  Accumulated points:  {stats['accumulated']}")
    print(f"  Central fringe row:  {fringes['central_row']}")
    print(f"  Fringe spacing:      {fringes['expected_spacing']:.2f} expected, "
          f"{_fmt(fringes['measured_spacing'])} measured")
    print(f"  Fringe visibility:   {fringes['visibility']:.3f}")
    print(f"  JS distance:         {convergence['js_distance']:.4f}")
    print(f"  Chi-square p-value:  {convergence['p_value']:.4f}")
    print("=" * 50)

    save_dir = os.path.expanduser(args.save_dir)
    if args.csv:
        export_csv(save_dir, params, stats, fringes, convergence)

    if not args.no_viz:
        from double_slit.visualization.plots import PlotSuite

        print("\nGenerating plots...")
        plots = PlotSuite(save_dir=save_dir)
        plots.intensity_profile(sim.intensity_model, params)
        plots.accumulation_histogram(sim.buffer.landing_rows(), sim.intensity_model, params)
        plots.frame_snapshot(sim.surface, title=f"{sim.mode} mode, frame {stats['frames']}")
        plots.spectrum_strip(sim.color_mapper)
        print(f"Plots saved to {save_dir}/")


def _fmt(value: float | None) -> str:
    return "n/a" if value is None else f"{value:.2f}"


def export_csv(
    save_dir: str,
    params: SimulationParams,
    stats: dict,
    fringes: dict,
    convergence: dict,
) -> str:
    """Write results to <save_dir>/double_slit_<timestamp>.csv"""
    os.makedirs(save_dir, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filepath = os.path.join(save_dir, f"double_slit_{timestamp}.csv")

    with open(filepath, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["metric", "value"])
        writer.writerow(["wavelength_nm", params.wavelength])
        writer.writerow(["slit_width_um", params.slit_width])
        writer.writerow(["slit_distance_um", params.slit_distance])
        writer.writerow(["screen_distance", params.screen_distance])
        for k, v in stats.items():
            writer.writerow([k, v])
        for k, v in fringes.items():
            writer.writerow([f"fringe_{k}", v])
        for k, v in convergence.items():
            writer.writerow([f"convergence_{k}", v])

    print(f"Results exported to {filepath}")
    return filepath


def run_visualize(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Launch the live window."""
    sim = build_simulation(args, parser)

    print(f"Mode: {sim.mode}")
    print("Launching simulation window...")
    print("  SPACE=pause  M=mode  R=clear  UP/DOWN=wavelength  LEFT/RIGHT=screen  +/-=speed  ESC=close")

    from double_slit.visualization.window import SimulationWindow

    window = SimulationWindow(sim)
    window.run()


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.command == "simulate":
        run_simulation(args, parser)
    elif args.command == "visualize":
        try:
            run_visualize(args, parser)
        except ImportError as exc:
            print(f"Cannot open window: {exc}", file=sys.stderr)
            sys.exit(1)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
