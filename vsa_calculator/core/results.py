"""
Result aggregation across all averaging methods.

compute_results evaluates two method groups on (possibly) different
sub-profiles:

- geometric group (M1, M2, M4, M5): profile trimmed to ``depth_m12``
- period group (M3, M6, M7, Exact): full profile ("TOTAL") or profile
  trimmed to ``depth_m3`` ("TARGET")

A Result is only meaningful as a complete comparison set, so any method
that cannot be evaluated makes the whole result None.
"""

import math
from typing import Dict, Mapping, NamedTuple, Optional, Sequence

from .averages import compute_vsa_m1, compute_vsa_m2, compute_vsa_m4, compute_vsa_m5
from .layers import DEFAULT_RHO, compute_h, trim_layers_to_depth
from .period import (
    compute_t_moc,
    compute_t_rayleigh,
    compute_vsa_from_t,
    compute_vsa_m6,
    compute_vsa_m7,
)
from .transfer_matrix import compute_t_exact


DEPTH_MODES = ("TOTAL", "TARGET")
M3_FORMULAS = ("MOC", "RAYLEIGH", "EXACT")

METHOD_KEYS = ("M1", "M2", "M3", "M4", "M5", "M6", "M7", "Exact")


class Result(NamedTuple):
    """Average shear-wave velocities of one profile (m/s).

    h_used is the depth basis of the period group (M3, M6, M7, Exact),
    h_m12 the one of the geometric group (M1, M2, M4, M5).
    """
    h_used: float
    h_m12: float
    vsa_m1: float
    vsa_m2: float
    vsa_m3: float
    vsa_m4: float
    vsa_m5: float
    vsa_m6: float
    vsa_m7: float
    vsa_exact: float

    def by_method(self) -> Dict[str, float]:
        """Velocities keyed by method name ("M1" ... "M7", "Exact")."""
        return {
            "M1": self.vsa_m1,
            "M2": self.vsa_m2,
            "M3": self.vsa_m3,
            "M4": self.vsa_m4,
            "M5": self.vsa_m5,
            "M6": self.vsa_m6,
            "M7": self.vsa_m7,
            "Exact": self.vsa_exact,
        }


def _check_choice(value: str, choices, name: str) -> str:
    if value not in choices:
        raise ValueError(f"Unknown {name}: {value!r} (expected one of {', '.join(choices)})")
    return value


def period_for_formula(layers: Sequence[Mapping], default_rho: float = DEFAULT_RHO,
                       formula: str = "MOC", solver_config: Optional[Dict] = None) -> Optional[float]:
    """Fundamental period by the selected M3 formula."""
    _check_choice(formula, M3_FORMULAS, "M3 formula")
    if formula == "MOC":
        return compute_t_moc(layers, default_rho)
    if formula == "RAYLEIGH":
        return compute_t_rayleigh(layers, default_rho)
    return compute_t_exact(layers, default_rho, solver_config)


def compute_vsa_m3_at_depth(layers: Sequence[Mapping], default_rho: float, depth: float,
                            formula: str = "EXACT", solver_config: Optional[Dict] = None) -> Optional[float]:
    """Vsa of the selected period formula on the profile trimmed to ``depth``."""
    trimmed = trim_layers_to_depth(layers, depth)
    h = compute_h(trimmed)
    if not h > 0:
        return None
    return compute_vsa_from_t(h, period_for_formula(trimmed, default_rho, formula, solver_config))


def collect_all(**values) -> Optional[Dict[str, float]]:
    """Return ``values`` unchanged, or None if any of them is None."""
    if any(v is None for v in values.values()):
        return None
    return values


def compute_results(layers: Sequence[Mapping], default_rho: float = DEFAULT_RHO,
                    depth_m12: float = math.inf, depth_m3: float = math.inf,
                    m3_mode: str = "TOTAL", m3_formula: str = "MOC",
                    solver_config: Optional[Dict] = None) -> Optional[Result]:
    """Evaluate every method on a surface-down layer list.

    Parameters:
    -----------
    layers : list of dict
        Layers with ``d``, ``vs`` and optional ``rho``, surface first
    default_rho : float
        Density used for layers without one (kg/m3 or t/m3)
    depth_m12 : float
        Depth for M1, M2, M4, M5; non-finite means the whole profile
    depth_m3 : float
        Depth for M3, M6, M7, Exact when ``m3_mode`` is "TARGET"
    m3_mode : str
        "TOTAL" (whole profile) or "TARGET" (trim to ``depth_m3``)
    m3_formula : str
        Period formula behind M3: "MOC", "RAYLEIGH" or "EXACT"
    solver_config : dict, optional
        Overrides for the exact solver (see transfer_matrix.DEFAULT_CONFIG)

    Returns:
    --------
    Result or None
        None when any method cannot be evaluated
    """
    _check_choice(m3_mode, DEPTH_MODES, "depth mode")
    _check_choice(m3_formula, M3_FORMULAS, "M3 formula")
    if depth_m12 is None:
        depth_m12 = math.inf
    if depth_m3 is None:
        depth_m3 = math.inf

    layers12 = trim_layers_to_depth(layers, depth_m12) if math.isfinite(depth_m12) else list(layers)
    if not layers12:
        return None
    h12 = compute_h(layers12)

    if m3_mode == "TOTAL":
        layers3 = list(layers)
    else:
        layers3 = trim_layers_to_depth(layers, depth_m3)
    h3 = compute_h(layers3)
    if not layers3 or not h3 > 0:
        return None

    geometric = collect_all(
        vsa_m1=compute_vsa_m1(layers12),
        vsa_m2=compute_vsa_m2(layers12),
        vsa_m4=compute_vsa_m4(layers12),
        vsa_m5=compute_vsa_m5(layers12),
    )
    if geometric is None:
        return None

    mass_based = collect_all(
        vsa_m6=compute_vsa_m6(layers3, default_rho),
        vsa_m7=compute_vsa_m7(layers3, default_rho),
    )
    if mass_based is None:
        return None

    t_exact = compute_t_exact(layers3, default_rho, solver_config)
    if m3_formula == "EXACT":
        t_m3 = t_exact
    else:
        t_m3 = period_for_formula(layers3, default_rho, m3_formula)

    periodic = collect_all(
        vsa_m3=compute_vsa_from_t(h3, t_m3),
        vsa_exact=compute_vsa_from_t(h3, t_exact),
    )
    if periodic is None:
        return None

    return Result(h_used=h3, h_m12=h12, **geometric, **mass_based, **periodic)


__all__ = [
    "Result",
    "DEPTH_MODES",
    "M3_FORMULAS",
    "METHOD_KEYS",
    "collect_all",
    "period_for_formula",
    "compute_vsa_m3_at_depth",
    "compute_results",
]
