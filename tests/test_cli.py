"""
Command-line interface tests.
"""

import json

import pytest
from click.testing import CliRunner

from vsa_calculator.cli.main import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def model_file(tmp_path):
    path = tmp_path / "model.txt"
    path.write_text("3\n5 180\n10 300\n15 600\n", encoding="utf-8")
    return path


class TestCompute:

    def test_profile_file(self, runner, model_file):
        result = runner.invoke(cli, ["compute", str(model_file)])
        assert result.exit_code == 0, result.output
        assert "464.11" in result.output
        assert "458.40" in result.output

    def test_preset_json(self, runner):
        result = runner.invoke(cli, ["compute", "--preset", "Özkan", "--json"])
        assert result.exit_code == 0, result.output
        report = json.loads(result.output)
        assert report["metadata"]["profile"] == "Özkan"
        assert report["expected"]["Exact"] == 378

    def test_target_mode(self, runner, model_file):
        result = runner.invoke(cli, ["compute", str(model_file), "--m3-mode", "TARGET", "--depth-m3", "15", "--json"])
        assert result.exit_code == 0, result.output
        report = json.loads(result.output)
        assert report["results"]["H_M3"] == 15
        assert report["metadata"]["depth_mode"] == "CUSTOM"

    def test_config_file(self, runner, model_file, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("calculation:\n  m3_formula: EXACT\n", encoding="utf-8")
        result = runner.invoke(cli, ["compute", str(model_file), "--config", str(config), "--json"])
        assert result.exit_code == 0, result.output
        values = json.loads(result.output)["results"]
        assert values["Vsa_M3"] == values["Vsa_Exact"]

    def test_requires_one_input(self, runner, model_file):
        assert runner.invoke(cli, ["compute"]).exit_code == 2
        assert runner.invoke(cli, ["compute", str(model_file), "--preset", "Özkan"]).exit_code == 2

    def test_unknown_preset(self, runner):
        result = runner.invoke(cli, ["compute", "--preset", "Nowhere"])
        assert result.exit_code == 1

    def test_profile_that_cannot_be_computed(self, runner, tmp_path):
        path = tmp_path / "bad.txt"
        path.write_text("1\n5 0\n", encoding="utf-8")
        result = runner.invoke(cli, ["compute", str(path)])
        assert result.exit_code == 1


class TestOtherCommands:

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output

    def test_calibrate(self, runner):
        result = runner.invoke(cli, ["calibrate", "--preset", "Hasanoğlu", "--target", "250", "--formula", "MOC"])
        assert result.exit_code == 0, result.output
        assert "Calibrated depth" in result.output

    def test_batch(self, runner, tmp_path):
        result = runner.invoke(cli, ["batch", str(tmp_path)])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "vsa_summary.csv").exists()
        assert "Evaluated 5 of 5" in result.output

    def test_report(self, runner, tmp_path):
        result = runner.invoke(cli, ["report", str(tmp_path), "--preset", "Takabatake", "--dpi", "60"])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "vsa_report.txt").exists()
        assert (tmp_path / "method_comparison.png").exists()

    def test_presets(self, runner):
        result = runner.invoke(cli, ["presets"])
        assert result.exit_code == 0
        assert "Dulkadiroğlu (4621)" in result.output

    def test_presets_json(self, runner):
        result = runner.invoke(cli, ["presets", "--json"])
        assert result.exit_code == 0
        assert len(json.loads(result.output)) == 5

    def test_examples(self, runner):
        result = runner.invoke(cli, ["-v", "examples"])
        assert result.exit_code == 0
        assert "vsa-calculator compute" in result.output
