"""
Depth calibration.

Finds the depth at which a period-based Vsa (MOC, Rayleigh or exact)
matches a target value, e.g. a field-measured Vs30 or a published Vsa:

1. coarse grid over [a, b] (60 intervals), keep the lowest error
2. stop if that error is within tolerance
3. otherwise refine around the best grid point with golden-section search
4. return the better of the two candidates, rounded to 2 decimals
"""

import math
from typing import Callable, Dict, Mapping, Optional, Sequence

from .layers import compute_h
from .results import compute_vsa_m3_at_depth


GRID_INTERVALS = 60
GOLDEN_TOL = 1e-3

_INV_PHI = (math.sqrt(5.0) - 1.0) / 2.0


def golden_section_min(f: Callable[[float], float], a: float, b: float,
                       iters: int = 40, tol: float = GOLDEN_TOL) -> float:
    """Minimise ``f`` on [a, b] by golden-section search.

    Returns whichever end of the final bracket has the lower value; equal
    values resolve to the smaller abscissa.
    """
    x1 = b - _INV_PHI * (b - a)
    x2 = a + _INV_PHI * (b - a)
    f1 = f(x1)
    f2 = f(x2)
    for _ in range(iters):
        if abs(b - a) <= tol:
            break
        if f1 > f2:
            a = x1
            x1, f1 = x2, f2
            x2 = a + _INV_PHI * (b - a)
            f2 = f(x2)
        else:
            b = x2
            x2, f2 = x1, f1
            x1 = b - _INV_PHI * (b - a)
            f1 = f(x1)
    fa = f(a)
    fb = f(b)
    if abs(fa - fb) < 1e-12:
        return min(a, b)
    return a if fa <= fb else b


def calibrate_depth_for_target_vsa(layers: Sequence[Mapping], default_rho: float,
                                   vsa_target: float, h_min: float = 5.0, h_max: float = 120.0,
                                   tolerance: float = 0.5, max_iter: int = 40,
                                   seed_depth: Optional[float] = None, formula: str = "EXACT",
                                   solver_config: Optional[Dict] = None) -> Optional[float]:
    """Depth (m) at which the ``formula`` Vsa is closest to ``vsa_target``.

    Parameters:
    -----------
    layers : list of dict
        Surface-down profile
    default_rho : float
        Density for layers without one
    vsa_target : float
        Target average velocity (m/s)
    h_min, h_max : float
        Search bounds (m); h_max is capped at the profile depth, h_min is at least 1 m
    tolerance : float
        Acceptable |Vsa - target| (m/s) for the grid search to stop early
    max_iter : int
        Golden-section iteration cap
    seed_depth : float, optional
        Narrows the grid to [0.5, 1.5] x seed when it lies inside the bounds
    formula : str
        "MOC", "RAYLEIGH" or "EXACT"

    Returns:
    --------
    float or None
        Calibrated depth rounded to 2 decimals; None for a profile without
        positive depth
    """
    h_profile = compute_h(layers)
    if not h_profile > 0:
        return None
    h_max = min(h_max, h_profile)
    h_min = max(h_min, 1.0)
    if h_min >= h_max:
        h_min = max(1.0, min(h_profile, h_max * 0.5))

    def err(h: float) -> float:
        v = compute_vsa_m3_at_depth(layers, default_rho, h, formula, solver_config)
        return math.inf if v is None else abs(v - vsa_target)

    a, b = h_min, h_max
    if seed_depth and h_min < seed_depth < h_max:
        a = max(h_min, seed_depth * 0.5)
        b = min(h_max, seed_depth * 1.5)

    best_h = h_min
    best_e = err(h_min)
    for i in range(GRID_INTERVALS + 1):
        h = a + i * (b - a) / GRID_INTERVALS
        e = err(h)
        if e < best_e or (abs(e - best_e) < 1e-12 and h < best_h):
            best_e = e
            best_h = h
    if best_e <= tolerance:
        return round(best_h, 2)

    span = max(2.0, 0.2 * (b - a))
    left = max(h_min, best_h - span)
    right = min(h_max, best_h + span)
    h_opt = golden_section_min(err, left, right, max_iter, GOLDEN_TOL)
    e_opt = err(h_opt)

    candidates = sorted([(e_opt, h_opt), (best_e, best_h)])
    return round(candidates[0][1], 2)


__all__ = [
    "golden_section_min",
    "calibrate_depth_for_target_vsa",
]
