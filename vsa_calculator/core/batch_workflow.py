"""
Batch Workflow Module
=====================

Evaluates every method on a catalogue of profiles (the literature presets
by default) and compares the results with the published values:

1. Load presets (presets.py)
2. Compute all methods per profile (results.py)
3. Compare with expected values and write a summary table

Two depth modes:
- whole profile (target_depth=None): every group uses the full profile,
  and results are compared with the published values
- custom depth: both groups are trimmed to the target depth; no comparison
"""

import math
import time
from pathlib import Path
from typing import Dict, List, Optional, Union

import pandas as pd

from ..utils.config import get_config
from .deviation import analyze_deviations
from .presets import load_presets
from .results import METHOD_KEYS, compute_results


def format_diff(calculated: Optional[float], expected: Optional[float]) -> str:
    """Signed percentage difference, e.g. "+1.2%"; "-" when not comparable."""
    if calculated is None or not expected:
        return "-"
    d = (calculated - expected) / expected * 100.0
    return f"{'+' if d > 0 else ''}{d:.1f}%"


def calculate_all_presets(presets: Optional[List[Dict]] = None, target_depth: Optional[float] = None,
                          m3_formula: str = "MOC", solver_config: Optional[Dict] = None) -> List[Dict]:
    """Compute every method for every preset.

    Returns one entry per preset that could be evaluated:
    ``preset``, ``h_used``, ``depth_used``, ``vsa`` (method -> value) and,
    in whole-profile mode, ``expected``, ``diff`` and ``analysis``.
    """
    presets = presets if presets is not None else load_presets()
    custom = target_depth is not None and target_depth > 0
    depth = float(target_depth) if custom else math.inf
    m3_mode = "TARGET" if custom else "TOTAL"

    batch: List[Dict] = []
    for preset in presets:
        result = compute_results(
            preset["layers"],
            preset.get("default_rho") or 1900.0,
            depth,
            depth,
            m3_mode,
            m3_formula,
            solver_config,
        )
        if result is None:
            continue

        vsa = result.by_method()
        entry = {
            "preset": preset["name"],
            "h_used": result.h_used,
            "depth_used": f"{result.h_used:.1f}m",
            "vsa": vsa,
        }
        if not custom and preset.get("expected"):
            expected = preset["expected"]
            entry["expected"] = {k: expected.get(k) for k in METHOD_KEYS}
            entry["diff"] = {k: format_diff(vsa[k], expected.get(k)) for k in METHOD_KEYS}
            entry["analysis"] = analyze_deviations(result, expected)
        batch.append(entry)
    return batch


def results_to_dataframe(batch: List[Dict]) -> pd.DataFrame:
    """Flatten batch results into a table (one row per preset)."""
    rows = []
    for entry in batch:
        row = {"Preset": entry["preset"], "Depth_m": round(entry["h_used"], 2)}
        for key in METHOD_KEYS:
            row[f"Vsa_{key}"] = entry["vsa"][key]
        if "expected" in entry:
            for key in METHOD_KEYS:
                row[f"Expected_{key}"] = entry["expected"].get(key)
                row[f"Diff_{key}"] = entry["diff"][key]
            row["Needs_Narrowing"] = entry["analysis"]["needs_narrowing"]
        rows.append(row)
    return pd.DataFrame(rows)


def format_results_as_table(batch: List[Dict]) -> str:
    """Fixed-width text table of the main methods."""
    show_diff = bool(batch) and "diff" in batch[0]
    header = ("Preset".ljust(22) + "Depth".ljust(8)
              + "".join(k.ljust(8) for k in ("M1", "M2", "M3", "M7", "Exact"))
              + ("Diff(Exact)" if show_diff else ""))
    lines = [header, "-" * len(header)]
    for entry in batch:
        vsa = entry["vsa"]
        line = (entry["preset"][:20].ljust(22) + entry["depth_used"].ljust(8)
                + "".join(f"{vsa[k]:.1f}".ljust(8) for k in ("M1", "M2", "M3", "M7", "Exact")))
        if show_diff and "diff" in entry:
            line += f"{entry['diff']['Exact']}"
        lines.append(line)
    return "\n".join(lines)


def run_batch_workflow(output_dir: Union[str, Path], workflow_config: Optional[Dict] = None,
                       presets_path: Optional[Union[str, Path]] = None,
                       target_depth: Optional[float] = None) -> Dict:
    """
    Run the batch evaluation and save the summary table.

    Parameters:
    -----------
    output_dir : str or Path
        Directory for the summary CSV
    workflow_config : dict, optional
        Overrides merged into the default configuration
    presets_path : str or Path, optional
        Preset catalogue (bundled catalogue if omitted)
    target_depth : float, optional
        Custom depth; whole-profile mode when None

    Returns:
    --------
    dict
        success flag, batch results, DataFrame, CSV path and summary counts
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    config = get_config(overrides=workflow_config)
    calc_cfg = config["calculation"]

    print("=" * 70)
    print("🚀 Vsa Batch Evaluation")
    print("=" * 70)

    start_time = time.time()
    presets = load_presets(presets_path)
    print(f"📁 Presets: {len(presets)}")
    print(f"⚙️  M3 formula: {calc_cfg['m3_formula']}")
    print(f"📏 Depth: {'whole profile' if not target_depth else f'{target_depth} m'}")
    print("-" * 70)

    batch = calculate_all_presets(presets, target_depth, calc_cfg["m3_formula"], config["solver"])
    evaluated = {entry["preset"] for entry in batch}
    for preset in presets:
        if preset["name"] not in evaluated:
            print(f"  ❌ {preset['name']}: computation not possible")

    df = results_to_dataframe(batch)
    csv_path = output_dir / config["output"]["summary_filename"]
    df.to_csv(csv_path, index=False)

    print(format_results_as_table(batch))
    elapsed = time.time() - start_time
    print("-" * 70)
    print(f"✅ Batch evaluation completed in {elapsed:.2f}s")
    print(f"💾 Saved: {csv_path}")

    n_flagged = sum(1 for entry in batch if entry.get("analysis", {}).get("needs_narrowing"))
    return {
        "success": len(batch) > 0,
        "results": batch,
        "dataframe": df,
        "summary_csv": csv_path,
        "summary": {
            "total_presets": len(presets),
            "evaluated": len(batch),
            "needs_narrowing": n_flagged,
            "completion_rate": 100.0 * len(batch) / len(presets) if presets else 0.0,
        },
    }


__all__ = [
    "format_diff",
    "calculate_all_presets",
    "results_to_dataframe",
    "format_results_as_table",
    "run_batch_workflow",
]
