"""
Reading and writing soil profiles.

Two formats are supported.

Text model (``.txt``/``.dat``/anything not CSV), N followed by N rows:

  # Özkan profile
  3
  5   180  1900
  10  300
  15  600  1.9

Each row is ``d vs [rho]``; rows without rho use the profile default
density. Text after ``#`` is ignored.

CSV (``.csv``) with a header, read with pandas. Recognised columns:
``d`` (or ``thickness``), ``vs``, optional ``rho`` (or ``density``).
Instead of a thickness column, ``top`` and ``bottom`` depths may be given.
"""

from pathlib import Path
from typing import Dict, List, Sequence, Union

import pandas as pd

from .layers import is_number


_COLUMN_ALIASES = {
    "d": ("d", "thickness", "thk", "h"),
    "vs": ("vs", "vs_value", "vs_m_s"),
    "rho": ("rho", "density"),
    "top": ("top", "depth_top", "z_top"),
    "bottom": ("bottom", "depth_bottom", "z_bottom"),
}


def _strip_comment(line: str) -> str:
    return line.split('#', 1)[0].strip()


def _read_model_lines(filepath: Path) -> List[str]:
    """Non-empty, comment-free lines of a text model (N line first).

    Raises ValueError if the format is invalid.
    """
    raw_lines = filepath.read_text(encoding='utf-8', errors='ignore').splitlines()
    lines = [ln for ln in (_strip_comment(l) for l in raw_lines) if ln]
    if not lines:
        raise ValueError("Empty profile file")
    try:
        n = int(lines[0].split()[0])
    except ValueError as exc:
        raise ValueError("First non-empty line must be the integer layer count N") from exc
    if n <= 0:
        raise ValueError("N must be positive")
    if len(lines) < n + 1:
        raise ValueError(f"Expected {n} rows after N, found {len(lines)-1}")
    return lines[:1 + n]


def _parse_rows(model_lines: List[str]) -> List[Dict]:
    """Convert text model lines (N + N rows) to layer dicts."""
    n = int(model_lines[0].split()[0])
    layers: List[Dict] = []
    for i in range(1, 1 + n):
        parts = model_lines[i].split()
        if len(parts) < 2:
            raise ValueError(f"Profile row {i} needs at least 2 columns (d vs)")
        try:
            values = [float(p) for p in parts[:3]]
        except ValueError as exc:
            raise ValueError(f"Profile row {i} contains non-numeric values") from exc
        layer = {"id": str(i), "d": values[0], "vs": values[1]}
        if len(values) > 2:
            layer["rho"] = values[2]
        layers.append(layer)
    return layers


def _find_column(df: pd.DataFrame, key: str):
    lookup = {str(c).strip().lower(): c for c in df.columns}
    for alias in _COLUMN_ALIASES[key]:
        if alias in lookup:
            return lookup[alias]
    return None


def read_profile_csv(csv_path: Union[str, Path]) -> List[Dict]:
    """Read layers from a CSV table."""
    df = pd.read_csv(csv_path)
    vs_col = _find_column(df, "vs")
    if vs_col is None:
        raise ValueError("CSV profile needs a 'vs' column")

    d_col = _find_column(df, "d")
    if d_col is not None:
        thickness = pd.to_numeric(df[d_col], errors="coerce")
    else:
        top_col, bottom_col = _find_column(df, "top"), _find_column(df, "bottom")
        if top_col is None or bottom_col is None:
            raise ValueError("CSV profile needs a 'd' column or 'top' and 'bottom' columns")
        thickness = pd.to_numeric(df[bottom_col], errors="coerce") - pd.to_numeric(df[top_col], errors="coerce")

    vs = pd.to_numeric(df[vs_col], errors="coerce")
    rho_col = _find_column(df, "rho")
    rho = pd.to_numeric(df[rho_col], errors="coerce") if rho_col is not None else None

    layers: List[Dict] = []
    for i in range(len(df)):
        d_i, vs_i = thickness.iloc[i], vs.iloc[i]
        if pd.isna(d_i) or pd.isna(vs_i):
            raise ValueError(f"CSV row {i + 1} has a missing or non-numeric thickness/velocity")
        layer = {"id": str(i + 1), "d": float(d_i), "vs": float(vs_i)}
        if rho is not None and not pd.isna(rho.iloc[i]):
            layer["rho"] = float(rho.iloc[i])
        layers.append(layer)
    if not layers:
        raise ValueError("CSV profile has no rows")
    return layers


def read_profile(profile_path: Union[str, Path]) -> List[Dict]:
    """Read a profile file, choosing the format from the suffix."""
    profile_path = Path(profile_path)
    if not profile_path.exists():
        raise FileNotFoundError(f"Profile file not found: {profile_path}")
    if profile_path.suffix.lower() == ".csv":
        return read_profile_csv(profile_path)
    return _parse_rows(_read_model_lines(profile_path))


def _to_model_lines(layers: Sequence[Dict]) -> List[str]:
    out = [str(len(layers))]
    for L in layers:
        row = [L["d"], L["vs"]]
        if is_number(L.get("rho")):
            row.append(L["rho"])
        out.append(" ".join(f"{x:.12g}" for x in row))
    return out


def write_profile(layers: Sequence[Dict], output_path: Union[str, Path]) -> Path:
    """Write layers as a text model, or as CSV for a ``.csv`` path."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if output_path.suffix.lower() == ".csv":
        rows = [{"d": L["d"], "vs": L["vs"], "rho": L.get("rho") if is_number(L.get("rho")) else None}
                for L in layers]
        pd.DataFrame(rows, columns=["d", "vs", "rho"]).to_csv(output_path, index=False)
    else:
        output_path.write_text("\n".join(_to_model_lines(layers)) + "\n", encoding='utf-8')
    return output_path


__all__ = [
    "read_profile",
    "read_profile_csv",
    "write_profile",
]
