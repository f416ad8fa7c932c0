"""
Approximate fundamental periods of a layered soil column.

The column sits on a rigid base. Estimators work base-up (index 0 is the
layer on the bedrock, index n-1 the surface layer) because the mode shape
is built from the fixed base towards the free surface.

- MOC: Mexican building code (MOC-2008) weighted formula, feeds M3
- Rayleigh: lumped masses with a linear assumed shape, feeds M6
- Proposed: calibrated overburden-mass formula, feeds M7

Periods convert to an average velocity through Vsa = 4H / T.
"""

import math
from typing import Mapping, Optional, Sequence

import numpy as np

from .layers import DEFAULT_RHO, compute_g, compute_h, layer_arrays


# Calibration constant of the proposed (M7) formula for layered profiles
M7_MULTI_LAYER_K = 5.515
# Single layer closed form: T = 4H/vs
M7_SINGLE_LAYER_K = 4.0 * math.sqrt(2.0)


def _base_up(layers: Sequence[Mapping], default_rho: float):
    arrays = layer_arrays(layers, default_rho)
    if arrays is None:
        return None
    d, vs, rho = (a[::-1] for a in arrays)
    return d, vs, rho, compute_g(vs, rho)


def compute_t_moc(layers: Sequence[Mapping], default_rho: float = DEFAULT_RHO) -> Optional[float]:
    """Fundamental period by the MOC-2008 formula.

    T = 4 * sqrt( sum(d/G) * sum(rho * d * (w_top^2 + w_top*w_bot + w_bot^2)) )

    where w are the normalised cumulative flexibilities at the layer
    boundaries (0 at the base, 1 at the surface).
    """
    arrays = _base_up(layers, default_rho)
    if arrays is None:
        return None
    d, vs, rho, G = arrays

    t = d / G
    sum_d_over_g = float(np.sum(t))
    if not sum_d_over_g > 0:
        return None

    w = np.concatenate([[0.0], np.cumsum(t) / sum_d_over_g])
    w[-1] = 1.0
    w_bot, w_top = w[:-1], w[1:]

    mass_term = float(np.sum(rho * d * (w_top ** 2 + w_top * w_bot + w_bot ** 2)))
    if not mass_term > 0:
        return None

    return 4.0 * math.sqrt(sum_d_over_g * mass_term)


def compute_t_rayleigh(layers: Sequence[Mapping], default_rho: float = DEFAULT_RHO) -> Optional[float]:
    """Fundamental period by Rayleigh's method on a lumped-mass column.

    Nodes sit on top of each layer. Interface nodes carry half of each
    adjacent layer, the surface node half of the top layer. Lateral forces
    follow a linear shape, f_i = m_i y_i / sum(m_j y_j).
    """
    arrays = _base_up(layers, default_rho)
    if arrays is None:
        return None
    d, vs, rho, G = arrays
    if np.any(G <= 0):
        return None

    layer_mass = rho * d
    m = np.empty_like(layer_mass)
    m[:-1] = (layer_mass[:-1] + layer_mass[1:]) / 2.0
    m[-1] = layer_mass[-1] / 2.0

    height = np.cumsum(d)
    denom = float(np.sum(m * height))
    if not denom > 0:
        return None
    f = m * height / denom

    # shear in layer i: sum of nodal forces from the surface down to node i
    Q = np.cumsum(f[::-1])[::-1]
    delta = np.cumsum(Q * d / G)

    sum_m_delta2 = float(np.sum(m * delta ** 2))
    sum_f_delta = float(np.sum(f * delta))
    if not sum_f_delta > 0:
        return None

    return 2.0 * math.pi * math.sqrt(sum_m_delta2 / sum_f_delta)


def compute_t_m7(layers: Sequence[Mapping], default_rho: float = DEFAULT_RHO,
                 use_single_layer_constant: bool = False) -> Optional[float]:
    """Proposed period, T = k * sqrt( sum(S_i * d_i / G_i) ).

    S_i is the overburden mass of the layers above plus half of layer i.
    k = 5.515 for layered profiles; with ``use_single_layer_constant`` a
    single layer uses k = 4*sqrt(2), which reproduces T = 4H/vs.
    """
    arrays = _base_up(layers, default_rho)
    if arrays is None:
        return None
    d, vs, rho, G = arrays

    layer_mass = rho * d
    # accumulate from the surface (last index) towards the base
    mass_above = np.concatenate([np.cumsum(layer_mass[::-1])[::-1][1:], [0.0]])
    S = mass_above + layer_mass / 2.0

    sum_term = float(np.sum(S * d / G))
    if not sum_term > 0:
        return None

    if len(d) == 1 and use_single_layer_constant:
        k = M7_SINGLE_LAYER_K
    else:
        k = M7_MULTI_LAYER_K
    return k * math.sqrt(sum_term)


def compute_vsa_from_t(h: Optional[float], t: Optional[float]) -> Optional[float]:
    """Vsa = 4H / T."""
    if h is None or t is None:
        return None
    if not (math.isfinite(h) and h > 0 and math.isfinite(t) and t > 0):
        return None
    return 4.0 * h / t


def compute_t(h: Optional[float], vsa: Optional[float]) -> Optional[float]:
    """T = 4H / Vsa."""
    if h is None or vsa is None:
        return None
    if not (math.isfinite(h) and h > 0 and math.isfinite(vsa) and vsa > 0):
        return None
    return 4.0 * h / vsa


def compute_vsa_m3(layers: Sequence[Mapping], default_rho: float = DEFAULT_RHO) -> Optional[float]:
    """M3 with the MOC period."""
    return compute_vsa_from_t(compute_h(layers), compute_t_moc(layers, default_rho))


def compute_vsa_m6(layers: Sequence[Mapping], default_rho: float = DEFAULT_RHO) -> Optional[float]:
    """M6 with the Rayleigh period."""
    return compute_vsa_from_t(compute_h(layers), compute_t_rayleigh(layers, default_rho))


def compute_vsa_m7(layers: Sequence[Mapping], default_rho: float = DEFAULT_RHO) -> Optional[float]:
    return compute_vsa_from_t(compute_h(layers), compute_t_m7(layers, default_rho))


__all__ = [
    "compute_t_moc",
    "compute_t_rayleigh",
    "compute_t_m7",
    "compute_vsa_from_t",
    "compute_t",
    "compute_vsa_m3",
    "compute_vsa_m6",
    "compute_vsa_m7",
]
