"""
Vsa Analysis Report Generator
=============================

Creates reports for a single profile evaluation: a JSON geotechnical
report, summary and deviation CSVs, figures and a text report.
"""

import csv
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Union

import matplotlib.pyplot as plt

from ..utils.config import get_config
from ..visualization.plotting import VsaPlotter
from .deviation import analyze_deviations
from .period import compute_t
from .results import METHOD_KEYS, Result


RECOMMEND_NARROWING = "Deviations above 5%: consider narrowing the depth range."
RECOMMEND_ACCEPT = "Deviations are acceptable (below 5%)."


def _periods(result: Result) -> Dict[str, Optional[float]]:
    """Fundamental period implied by each method, T = 4H / Vsa."""
    periods = {}
    for key, vsa in result.by_method().items():
        h = result.h_m12 if key in ("M1", "M2", "M4", "M5") else result.h_used
        periods[key] = compute_t(h, vsa)
    return periods


def generate_geotechnical_report(layers: Sequence[Mapping], result: Result,
                                 default_rho: float,
                                 expected: Optional[Mapping[str, float]] = None,
                                 name: str = "profile",
                                 depth_mode: str = "VS30",
                                 target_depth: Optional[float] = None,
                                 m3_formula: str = "MOC",
                                 show_t: bool = True) -> str:
    """Serialise a result, its input and its deviation analysis as JSON."""
    expected = dict(expected or {})
    analysis = analyze_deviations(result, expected)
    target = target_depth if target_depth is not None else result.h_used

    results = {"H_M12": result.h_m12, "H_M3": result.h_used}
    results.update({f"Vsa_{k}": v for k, v in result.by_method().items()})
    if show_t:
        results.update({f"T_{k}": v for k, v in _periods(result).items()})

    report = {
        "metadata": {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "profile": name,
            "depth_mode": depth_mode,
            "target_depth": f"{target:.1f} m",
            "used_depth_m12": f"{result.h_m12:.1f} m",
            "used_depth_m3": f"{result.h_used:.1f} m",
            "m3_formula": m3_formula,
        },
        "input": {
            "layers": [dict(L) for L in layers],
            "default_rho": default_rho,
            "show_t": show_t,
        },
        "results": results,
        "expected": expected,
        "analysis": {
            "deviations": analysis["deviations"],
            "high_deviations": analysis["high_deviations"],
            "needs_narrowing": analysis["needs_narrowing"],
            "recommendation": RECOMMEND_NARROWING if analysis["needs_narrowing"] else RECOMMEND_ACCEPT,
        },
    }
    return json.dumps(report, indent=2, ensure_ascii=False, default=str)


class VsaReporter:
    """Generate report files for one evaluated profile."""

    def __init__(self, layers: Sequence[Mapping], result: Result,
                 output_dir: Union[str, Path],
                 name: str = "profile",
                 expected: Optional[Mapping[str, float]] = None,
                 default_rho: float = 1900.0,
                 config: Optional[Dict] = None):
        """
        Initialize the reporter.

        Parameters:
        -----------
        layers : list of dict
            Profile the result was computed from
        result : Result
            Output of compute_results
        output_dir : str or Path
            Directory for the report files (created if missing)
        name : str
            Profile name used in titles
        expected : dict, optional
            Reference Vsa per method for the deviation table
        default_rho : float
            Profile default density
        config : dict, optional
            Overrides merged into the default configuration
        """
        if result is None:
            raise ValueError("Cannot report on a profile that could not be evaluated")
        self.layers = [dict(L) for L in layers]
        self.result = result
        self.name = name
        self.expected = dict(expected or {})
        self.default_rho = default_rho
        self.config = get_config(overrides=config)
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        self.analysis = analyze_deviations(result, self.expected)
        self.plotter = VsaPlotter()

        print(f"📊 Initialized reporter for {self.name}")
        print(f"📁 Output directory: {self.output_dir}")

    def generate_comprehensive_report(self) -> Dict[str, Path]:
        """Generate all report components."""
        print("\n" + "=" * 70)
        print("📊 GENERATING VSA ANALYSIS REPORT")
        print("=" * 70)

        report_files = {}

        try:
            print("📝 Creating summary CSV...")
            report_files['summary_csv'] = self._create_summary_csv()

            if self.expected:
                print("📝 Creating deviation CSV...")
                report_files['deviation_csv'] = self._create_deviation_csv()

            print("📈 Creating method comparison plot...")
            report_files['comparison_plot'] = self._create_comparison_plot()

            print("📈 Creating Vs profile plot...")
            report_files['profile_plot'] = self._create_profile_plot()

            print("📄 Creating text report...")
            report_files['text_report'] = self._create_text_report()

            print("📋 Creating JSON report...")
            report_files['json_report'] = self._create_json_report()
        except Exception as e:
            print(f"\n❌ Error during report generation: {e}")
            raise

        print("\n✅ REPORT GENERATION COMPLETED SUCCESSFULLY!")
        print(f"📁 All files saved in: {self.output_dir}")
        print(f"📊 Generated {len(report_files)} report components")
        return report_files

    def _output_path(self, key: str) -> Path:
        return self.output_dir / self.config["output"][key]

    def _create_summary_csv(self) -> Path:
        """One row per method with Vsa, period and depth basis."""
        csv_path = self._output_path("summary_filename")
        periods = _periods(self.result)

        with open(csv_path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=['method', 'vsa_m_s', 'period_s', 'depth_m'])
            writer.writeheader()
            for key, vsa in self.result.by_method().items():
                depth = self.result.h_m12 if key in ("M1", "M2", "M4", "M5") else self.result.h_used
                writer.writerow({
                    'method': key,
                    'vsa_m_s': f"{vsa:.2f}",
                    'period_s': f"{periods[key]:.4f}",
                    'depth_m': f"{depth:.2f}",
                })

        return csv_path

    def _create_deviation_csv(self) -> Path:
        """Computed vs expected values with percentage deviation."""
        csv_path = self._output_path("deviation_filename")
        computed = self.result.by_method()
        deviations = self.analysis["deviations"]

        with open(csv_path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=['method', 'calculated', 'expected', 'deviation_pct', 'high'])
            writer.writeheader()
            for key in METHOD_KEYS:
                if key not in deviations:
                    continue
                writer.writerow({
                    'method': key,
                    'calculated': f"{computed[key]:.2f}",
                    'expected': f"{self.expected[key]:.2f}",
                    'deviation_pct': f"{deviations[key]:.2f}",
                    'high': deviations[key] > 5.0,
                })

        return csv_path

    def _create_comparison_plot(self) -> Path:
        fig_path = self._output_path("comparison_filename")
        fig = self.plotter.plot_method_comparison(
            self.result.by_method(), self.expected or None,
            title=f"Vsa Method Comparison: {self.name}",
            save_path=fig_path, dpi=self.config["output"]["dpi"])
        plt.close(fig)
        return fig_path

    def _create_profile_plot(self) -> Path:
        fig_path = self._output_path("profile_filename")
        vsa = self.result.by_method()
        fig = self.plotter.plot_vs_profile(
            self.layers, {k: vsa[k] for k in ("M1", "M3", "Exact")},
            title=f"Vs Profile: {self.name}",
            save_path=fig_path, dpi=self.config["output"]["dpi"])
        plt.close(fig)
        return fig_path

    def _create_text_report(self) -> Path:
        """Create text report."""
        report_path = self._output_path("report_filename")
        result = self.result
        periods = _periods(result)

        lines: List[str] = [
            "VSA ANALYSIS REPORT",
            "=" * 60,
            "",
            f"Generated on: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            f"Profile: {self.name}",
            f"Layers: {len(self.layers)}",
            f"Default density: {self.default_rho:g}",
            f"Depth M1/M2/M4/M5: {result.h_m12:.2f} m",
            f"Depth M3/M6/M7/Exact: {result.h_used:.2f} m",
            "",
            "RESULTS",
            "-" * 30,
            f"{'Method':<8} {'Vsa(m/s)':<10} {'T(s)':<8} {'Expected':<10} {'Dev(%)':<8}",
            "-" * 50,
        ]
        deviations = self.analysis["deviations"]
        for key, vsa in result.by_method().items():
            exp = self.expected.get(key)
            exp_txt = f"{exp:.1f}" if exp else "-"
            dev_txt = f"{deviations[key]:.1f}" if key in deviations else "-"
            lines.append(f"{key:<8} {vsa:<10.2f} {periods[key]:<8.4f} {exp_txt:<10} {dev_txt:<8}")

        lines += ["", "CONCLUSIONS", "-" * 30]
        if not self.expected:
            lines.append("• No reference values given")
        elif self.analysis["needs_narrowing"]:
            lines.append("• High deviations: " + ", ".join(self.analysis["high_deviations"]))
            lines.append(f"• {RECOMMEND_NARROWING}")
        else:
            lines.append(f"• {RECOMMEND_ACCEPT}")
        lines.append(f"• Exact fundamental period: {periods['Exact']:.4f} s")

        report_path.write_text("\n".join(lines) + "\n", encoding='utf-8')
        return report_path

    def _create_json_report(self) -> Path:
        json_path = self._output_path("json_filename")
        json_path.write_text(
            generate_geotechnical_report(self.layers, self.result, self.default_rho,
                                         self.expected, self.name),
            encoding='utf-8')
        return json_path


__all__ = [
    "generate_geotechnical_report",
    "VsaReporter",
]
