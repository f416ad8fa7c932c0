"""
Tests for batch evaluation, reports and figures.
"""

import csv
import json

import matplotlib.pyplot as plt
import pytest

from vsa_calculator.core.batch_workflow import (
    calculate_all_presets,
    format_diff,
    format_results_as_table,
    results_to_dataframe,
    run_batch_workflow,
)
from vsa_calculator.core.report_generator import VsaReporter, generate_geotechnical_report
from vsa_calculator.core.results import compute_results
from vsa_calculator.visualization import VsaPlotter, create_comparison_plot


class TestFormatDiff:

    def test_signed(self):
        assert format_diff(105.0, 100.0) == "+5.0%"
        assert format_diff(95.0, 100.0) == "-5.0%"
        assert format_diff(100.0, 100.0) == "0.0%"

    def test_not_comparable(self):
        assert format_diff(None, 100.0) == "-"
        assert format_diff(100.0, 0) == "-"
        assert format_diff(100.0, None) == "-"


class TestBatch:

    def test_whole_profile_mode(self):
        batch = calculate_all_presets()
        assert len(batch) == 5
        ozkan = batch[0]
        assert ozkan["preset"] == "Özkan"
        assert ozkan["h_used"] == pytest.approx(35.5)
        assert ozkan["depth_used"] == "35.5m"
        assert set(ozkan["diff"]) == set(ozkan["vsa"])
        assert ozkan["analysis"]["deviations"]["Exact"] < 0.5

    def test_custom_depth_mode(self):
        batch = calculate_all_presets(target_depth=20.0)
        assert all(entry["h_used"] == pytest.approx(20.0) for entry in batch)
        assert all("expected" not in entry for entry in batch)

    def test_exact_formula(self):
        batch = calculate_all_presets(m3_formula="EXACT")
        for entry in batch:
            assert entry["vsa"]["M3"] == entry["vsa"]["Exact"]

    def test_unevaluable_preset_skipped(self, three_layers):
        presets = [
            {"name": "ok", "layers": three_layers, "expected": {}, "default_rho": 1900.0},
            {"name": "broken", "layers": [{"d": 5, "vs": ""}], "expected": {}, "default_rho": 1900.0},
        ]
        batch = calculate_all_presets(presets)
        assert [entry["preset"] for entry in batch] == ["ok"]

    def test_dataframe(self):
        df = results_to_dataframe(calculate_all_presets())
        assert len(df) == 5
        for column in ("Preset", "Depth_m", "Vsa_M1", "Vsa_Exact", "Expected_Exact", "Diff_M3", "Needs_Narrowing"):
            assert column in df.columns

    def test_table(self):
        table = format_results_as_table(calculate_all_presets())
        lines = table.splitlines()
        assert lines[0].startswith("Preset")
        assert "Diff(Exact)" in lines[0]
        assert any(line.startswith("Takabatake") for line in lines)

    def test_run_batch_workflow(self, tmp_path):
        results = run_batch_workflow(tmp_path)
        assert results["success"]
        assert results["summary"]["evaluated"] == 5
        assert results["summary_csv"].exists()
        with open(results["summary_csv"], newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == 5


class TestGeotechnicalReport:

    def test_structure(self, ozkan):
        result = compute_results(ozkan["layers"], 1900)
        report = json.loads(generate_geotechnical_report(
            ozkan["layers"], result, 1900, ozkan["expected"], ozkan["name"]))
        assert set(report) == {"metadata", "input", "results", "expected", "analysis"}
        assert report["metadata"]["profile"] == "Özkan"
        assert report["metadata"]["used_depth_m3"] == "35.5 m"
        assert report["results"]["Vsa_Exact"] == pytest.approx(result.vsa_exact)
        assert report["results"]["T_Exact"] == pytest.approx(4 * 35.5 / result.vsa_exact)
        assert report["input"]["layers"] == ozkan["layers"]

    def test_recommendation(self, ozkan, three_layers):
        result = compute_results(ozkan["layers"], 1900)
        report = json.loads(generate_geotechnical_report(ozkan["layers"], result, 1900, ozkan["expected"]))
        assert report["analysis"]["needs_narrowing"]
        assert "narrowing" in report["analysis"]["recommendation"]

        result = compute_results(three_layers, 1900)
        report = json.loads(generate_geotechnical_report(three_layers, result, 1900))
        assert not report["analysis"]["needs_narrowing"]
        assert report["analysis"]["high_deviations"] == []

    def test_without_periods(self, three_layers):
        result = compute_results(three_layers, 1900)
        report = json.loads(generate_geotechnical_report(three_layers, result, 1900, show_t=False))
        assert not any(key.startswith("T_") for key in report["results"])


class TestReporter:

    def test_all_components(self, tmp_path, ozkan):
        result = compute_results(ozkan["layers"], 1900)
        reporter = VsaReporter(ozkan["layers"], result, tmp_path, ozkan["name"], ozkan["expected"])
        files = reporter.generate_comprehensive_report()
        assert set(files) == {"summary_csv", "deviation_csv", "comparison_plot",
                              "profile_plot", "text_report", "json_report"}
        for path in files.values():
            assert path.exists()
        text = files["text_report"].read_text(encoding="utf-8")
        assert "Özkan" in text
        assert "High deviations" in text

    def test_without_expected(self, tmp_path, three_layers):
        result = compute_results(three_layers, 1900)
        files = VsaReporter(three_layers, result, tmp_path).generate_comprehensive_report()
        assert "deviation_csv" not in files
        with open(files["summary_csv"], newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert [row["method"] for row in rows] == ["M1", "M2", "M3", "M4", "M5", "M6", "M7", "Exact"]

    def test_no_result(self, tmp_path, three_layers):
        with pytest.raises(ValueError):
            VsaReporter(three_layers, None, tmp_path)


class TestPlotting:

    def test_profile_plot(self, tmp_path, three_layers):
        path = tmp_path / "profile.png"
        fig = VsaPlotter().plot_vs_profile(three_layers, {"M1": 464.1, "Exact": 458.4}, save_path=path)
        assert path.exists()
        plt.close(fig)

    def test_method_comparison(self, tmp_path, ozkan):
        result = compute_results(ozkan["layers"], 1900)
        fig = VsaPlotter(style="minimal").plot_method_comparison(result.by_method(), ozkan["expected"])
        assert len(fig.axes[0].patches) == 8
        plt.close(fig)

    def test_comparison_of_presets(self, tmp_path):
        data = {entry["preset"]: entry for entry in calculate_all_presets()}
        path = tmp_path / "comparison.png"
        fig = create_comparison_plot(data, path)
        assert path.exists()
        plt.close(fig)
