"""
Layer model and depth trimming.

A soil profile is an ordered list of layer mappings, surface first:

  {"d": 5.0, "vs": 180.0, "rho": 1900.0}

- d:   thickness (m)
- vs:  shear-wave velocity (m/s)
- rho: optional mass density, kg/m3 or t/m3 (see normalize_rho)
- rho_unit: optional explicit density unit, "kg/m3" or "t/m3"

Values may be non-numeric (empty form cells, missing spreadsheet values);
the functions below treat them the way each method requires instead of
raising. Layers are never modified in place.
"""

import math
import numbers
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np


DEFAULT_RHO = 1900.0  # kg/m3

# Unlabelled densities below this value are taken as t/m3
RHO_TONNE_THRESHOLD = 50.0

RHO_UNITS = ("kg/m3", "t/m3")


def is_number(value) -> bool:
    """True for finite real numbers (bool excluded)."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value)


def normalize_rho(value: float, unit: Optional[str] = None) -> float:
    """Return density in kg/m3.

    An explicit unit always wins. Without one, values in (0, 50) are read
    as t/m3 and scaled by 1000; anything else is already kg/m3.
    """
    if unit is not None:
        if unit not in RHO_UNITS:
            raise ValueError(f"Unknown density unit: {unit!r} (expected one of {RHO_UNITS})")
        return float(value) * 1000.0 if unit == "t/m3" else float(value)
    if 0 < value < RHO_TONNE_THRESHOLD:
        return float(value) * 1000.0
    return float(value)


def layer_rho(layer: Mapping, default_rho: float = DEFAULT_RHO) -> float:
    """Normalised density of a layer, falling back to the profile default."""
    rho = layer.get("rho")
    if is_number(rho):
        return normalize_rho(rho, layer.get("rho_unit"))
    return normalize_rho(default_rho)


def compute_g(vs: float, rho: float) -> float:
    """Shear modulus G = rho * vs^2 (Pa), rho in kg/m3."""
    return rho * vs * vs


def compute_h(layers: Sequence[Mapping]) -> float:
    """Total thickness; non-numeric thicknesses contribute 0."""
    return float(sum(L["d"] for L in layers if is_number(L.get("d"))))


def trim_layers_to_depth(layers: Sequence[Mapping], target_depth: float) -> List[Dict]:
    """Return the surface prefix of ``layers`` down to ``target_depth``.

    The last included layer is clipped so that the total thickness equals
    the target depth (or the whole profile when it is shallower). A layer
    with a non-numeric thickness or velocity ends the profile.
    """
    out: List[Dict] = []
    acc = 0.0
    for L in layers:
        if not is_number(L.get("d")) or not is_number(L.get("vs")):
            break
        if acc >= target_depth:
            break
        use_d = min(L["d"], max(0.0, target_depth - acc))
        if use_d > 0:
            trimmed = dict(L)
            trimmed["d"] = use_d
            out.append(trimmed)
            acc += use_d
    return out


def layer_arrays(layers: Sequence[Mapping],
                 default_rho: float = DEFAULT_RHO) -> Optional[Tuple[np.ndarray, np.ndarray, np.ndarray]]:
    """Validated (d, vs, rho) arrays, surface first, rho in kg/m3.

    Returns None for an empty profile or when any layer has a non-numeric
    or non-positive thickness, velocity or density, or a density unit
    other than RHO_UNITS.
    """
    if not layers:
        return None
    d, vs, rho = [], [], []
    for L in layers:
        if not is_number(L.get("d")) or not is_number(L.get("vs")):
            return None
        if L["d"] <= 0 or L["vs"] <= 0:
            return None
        if L.get("rho_unit") is not None and L["rho_unit"] not in RHO_UNITS:
            return None
        r = layer_rho(L, default_rho)
        if not r > 0:
            return None
        d.append(float(L["d"]))
        vs.append(float(L["vs"]))
        rho.append(r)
    return np.array(d), np.array(vs), np.array(rho)


def profile_is_valid(layers: Sequence[Mapping]) -> bool:
    """True when every layer has numeric, positive thickness and velocity."""
    if not layers:
        return False
    for L in layers:
        if not is_number(L.get("d")) or not is_number(L.get("vs")):
            return False
        if L["d"] <= 0 or L["vs"] <= 0:
            return False
    return True


__all__ = [
    "DEFAULT_RHO",
    "is_number",
    "normalize_rho",
    "layer_rho",
    "compute_g",
    "compute_h",
    "trim_layers_to_depth",
    "layer_arrays",
    "profile_is_valid",
]
