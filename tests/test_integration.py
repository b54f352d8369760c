"""Integration tests: full pipeline end-to-end."""

import csv
import os

import numpy as np
import pytest

from double_slit import __version__
from double_slit.__main__ import build_parser, export_csv, main
from double_slit.analysis.convergence import ConvergenceAnalyzer
from double_slit.analysis.metrics import FringeMetrics
from double_slit.simulation import DoubleSlitSimulation
from double_slit.utils.types import PARTICLE, WAVE, SimulationConfig, SimulationParams


class TestFullPipeline:
    """Particle accumulation should converge toward the wave pattern."""

    def test_end_to_end(self):
        params = SimulationParams()
        sim = DoubleSlitSimulation(
            params, SimulationConfig(mode=PARTICLE, particle_speed=10.0, seed=42,
                                     emission_probability=1.0)
        )
        drawn = sim.run_frames(800)
        sim.stop()
        assert drawn == 800

        stats = sim.summary()
        assert stats["landed"] > 600
        assert stats["accumulated"] == len(sim.buffer)
        assert stats["skipped_frames"] == 0

        rows = sim.buffer.landing_rows()
        assert np.all((rows >= 0) & (rows <= 500))

        convergence = ConvergenceAnalyzer(sim.intensity_model, params, rows)
        assert convergence.jensen_shannon_distance() < 0.15

        fringes = FringeMetrics(sim.intensity_model, params).report()
        assert fringes["central_row"] == 250

    def test_wave_then_particle(self):
        sim = DoubleSlitSimulation(config=SimulationConfig(mode=WAVE, seed=1))
        sim.run_frames(5)
        sim.toggle_mode()
        sim.run_frames(5)
        assert sim.summary()["frames"] == 10
        assert sim.renderer.frames_rendered == 10


class TestCLI:
    def test_parser_defaults(self):
        args = build_parser().parse_args(["simulate"])
        assert args.command == "simulate"
        assert args.mode == PARTICLE
        assert args.wavelength == 550.0
        assert args.frames == 2000

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            build_parser().parse_args(["--version"])
        assert exc.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_bad_mode(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["simulate", "--mode", "ray"])

    def test_out_of_range_wavelength(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["simulate", "--wavelength", "900", "--no-viz", "--save-dir", str(tmp_path)])
        assert exc.value.code == 2

    def test_simulate_headless(self, tmp_path, capsys):
        main([
            "simulate", "--frames", "200", "--speed", "10", "--seed", "3",
            "--no-viz", "--csv", "--save-dir", str(tmp_path),
        ])
        out = capsys.readouterr().out
        assert "RESULTS" in out
        exported = [f for f in os.listdir(tmp_path) if f.endswith(".csv")]
        assert len(exported) == 1

    def test_simulate_with_plots(self, tmp_path):
        main([
            "simulate", "--frames", "50", "--seed", "3", "--save-dir", str(tmp_path),
        ])
        for name in ("intensity_profile", "accumulation", "frame", "spectrum"):
            assert os.path.exists(tmp_path / f"ds_{name}.png")

    def test_no_command_prints_help(self, capsys):
        main([])
        assert "usage" in capsys.readouterr().out


class TestExport:
    def test_export_csv(self, tmp_path):
        params = SimulationParams()
        path = export_csv(
            str(tmp_path), params,
            {"frames": 10, "landed": 3},
            {"central_row": 250},
            {"js_distance": 0.05},
        )
        with open(path) as f:
            rows = list(csv.reader(f))
        assert rows[0] == ["metric", "value"]
        table = dict(rows[1:])
        assert table["wavelength_nm"] == "550.0"
        assert table["landed"] == "3"
        assert table["fringe_central_row"] == "250"
        assert table["convergence_js_distance"] == "0.05"
