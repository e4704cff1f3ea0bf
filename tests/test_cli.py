"""
pointtrack - Demo CLI Test Suite
================================
"""

import json

import numpy as np
import pytest

from pointtrack import cli


class TestTrajectories:

    def test_circle(self):
        pts = cli.circle_trajectory(16, radius=50.0, center=(100.0, 100.0))
        assert pts.shape == (16, 2)
        np.testing.assert_allclose(np.linalg.norm(pts - [100.0, 100.0], axis=1), 50.0)

    def test_line(self):
        pts = cli.line_trajectory(5, step=2.0)
        np.testing.assert_allclose(pts[:, 0], [0, 2, 4, 6, 8])
        np.testing.assert_allclose(pts[:, 1], 0.0, atol=1e-12)


class TestMain:

    def test_parser_defaults(self):
        args = cli.build_parser().parse_args([])
        assert args.trajectory == "circle"
        assert args.steps == 100
        assert args.tick_ms == 15.0
        settings = cli.settings_from_args(args)
        assert settings.noise.enabled is True
        assert settings.ukf.q == 0.05

    def test_zero_sigma_disables_noise(self):
        args = cli.build_parser().parse_args(["--sigma", "0"])
        assert cli.settings_from_args(args).noise.enabled is False

    def test_run_demo(self):
        args = cli.build_parser().parse_args(
            ["--trajectory", "line", "--steps", "40", "--sigma", "0"])
        results = cli.run_demo(args)
        assert results["measurement"] == pytest.approx(0.0)
        assert results["kalman"] < 5.0
        assert results["dropped_ticks"] == {"low_pass": 0, "kalman": 0, "ukf": 0}

    def test_main_writes_json(self, tmp_path, capsys):
        path = tmp_path / "out.json"
        rc = cli.main(["--steps", "30", "--seed", "1", "--json", str(path)])
        assert rc == 0
        assert "kalman" in capsys.readouterr().out
        data = json.loads(path.read_text())
        assert set(data) >= {"measurement", "low_pass", "kalman", "ukf"}

    def test_rejects_unknown_trajectory(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["--trajectory", "spiral"])
