"""
Exact fundamental period by the 1D transfer-matrix method.

Each layer is an elastic shear rod. The state vector (displacement, shear
stress) is carried across a layer by

    M(w, d, vs, rho) = [[ cos(a),               sin(a) / (rho vs w) ],
                        [ -rho vs w sin(a),     cos(a)              ]],  a = w d / vs

Composing the layer matrices from the rigid base to the free surface gives
the global matrix. With zero displacement at the base and zero stress at
the surface, natural frequencies are the roots of its (2,2) entry. The
fundamental one is the first root above zero.

Root search: the boundary function is sampled on a fixed frequency grid
(vectorised in chunks with numpy), the first sign change brackets the root
and scipy's bisection refines it. No sign change below ``omega_max`` means
the search is exhausted and the period is reported as None.
"""

import math
from typing import Dict, Mapping, Optional, Sequence

import numpy as np
from scipy.optimize import bisect

from .layers import DEFAULT_RHO, compute_h, layer_arrays


DEFAULT_CONFIG = {
    "step": 0.01,         # rad/s between scan samples
    "omega_max": 2000.0,  # rad/s, scan ceiling
    "xtol": 1e-6,         # rad/s, bisection tolerance
    "chunk_size": 4096,   # samples evaluated per vectorised block
}

# Keeps the stress-to-displacement term finite at w = 0
IMPEDANCE_EPS = 1e-10


def transfer_matrix(omega: float, d: float, vs: float, rho: float) -> np.ndarray:
    """2x2 layer transfer matrix at angular frequency ``omega``."""
    alpha = omega * d / vs
    cos_a = math.cos(alpha)
    sin_a = math.sin(alpha)
    z = rho * vs * omega
    return np.array([
        [cos_a, sin_a / (z + IMPEDANCE_EPS)],
        [-z * sin_a, cos_a],
    ])


def global_matrix(omega: float, d: np.ndarray, vs: np.ndarray, rho: np.ndarray) -> np.ndarray:
    """Product of the layer matrices, base layer first (arrays are base-up)."""
    M = np.identity(2)
    for d_i, vs_i, rho_i in zip(d, vs, rho):
        M = transfer_matrix(omega, d_i, vs_i, rho_i) @ M
    return M


def boundary_function(omegas, d: np.ndarray, vs: np.ndarray, rho: np.ndarray):
    """(2,2) entry of the global matrix for every frequency in ``omegas``.

    Arrays are base-up. Works on scalars as well as frequency arrays.
    """
    omegas = np.asarray(omegas, dtype=float)
    m11 = np.ones_like(omegas)
    m12 = np.zeros_like(omegas)
    m21 = np.zeros_like(omegas)
    m22 = np.ones_like(omegas)
    for d_i, vs_i, rho_i in zip(d, vs, rho):
        alpha = omegas * d_i / vs_i
        c = np.cos(alpha)
        s = np.sin(alpha)
        z = rho_i * vs_i * omegas
        a12 = s / (z + IMPEDANCE_EPS)
        a21 = -z * s
        m11, m12, m21, m22 = (
            c * m11 + a12 * m21,
            c * m12 + a12 * m22,
            a21 * m11 + c * m21,
            a21 * m12 + c * m22,
        )
    return m22


def find_fundamental_omega(d: np.ndarray, vs: np.ndarray, rho: np.ndarray,
                           config: Optional[Dict] = None) -> Optional[float]:
    """Lowest positive root of the boundary function, or None if none is
    found below the scan ceiling."""
    cfg = dict(DEFAULT_CONFIG)
    if config:
        cfg.update(config)
    step = float(cfg["step"])
    omega_max = float(cfg["omega_max"])
    xtol = float(cfg["xtol"])
    chunk = int(cfg["chunk_size"])
    if step <= 0 or omega_max <= step or chunk < 1:
        raise ValueError("Invalid solver configuration: need 0 < step < omega_max and chunk_size >= 1")

    def f(omega):
        return float(boundary_function(omega, d, vs, rho))

    n_samples = int(math.ceil(omega_max / step))
    f_prev = 1.0  # value at omega = 0
    k = 1
    while k < n_samples:
        ks = np.arange(k, min(k + chunk, n_samples))
        omegas = ks * step
        values = boundary_function(omegas, d, vs, rho)
        prev = np.concatenate([[f_prev], values[:-1]])
        hits = np.nonzero(values * prev <= 0)[0]
        if hits.size:
            i = int(hits[0])
            if values[i] == 0.0:
                return float(omegas[i])
            a = float(ks[i] - 1) * step
            b = float(omegas[i])
            return float(bisect(f, a, b, xtol=xtol))
        f_prev = float(values[-1])
        k = int(ks[-1]) + 1
    return None


def compute_t_exact(layers: Sequence[Mapping], default_rho: float = DEFAULT_RHO,
                    config: Optional[Dict] = None) -> Optional[float]:
    """Exact fundamental period T = 2*pi / omega0 of the layered column."""
    arrays = layer_arrays(layers, default_rho)
    if arrays is None:
        return None
    d, vs, rho = (a[::-1] for a in arrays)
    omega0 = find_fundamental_omega(d, vs, rho, config)
    if omega0 is None or not omega0 > 0:
        return None
    return 2.0 * math.pi / omega0


def compute_vsa_exact(layers: Sequence[Mapping], default_rho: float = DEFAULT_RHO,
                      config: Optional[Dict] = None) -> Optional[float]:
    """Vsa = 4H / T with the exact period."""
    T = compute_t_exact(layers, default_rho, config)
    H = compute_h(layers)
    if T is None or not H > 0:
        return None
    return 4.0 * H / T


__all__ = [
    "DEFAULT_CONFIG",
    "transfer_matrix",
    "global_matrix",
    "boundary_function",
    "find_fundamental_omega",
    "compute_t_exact",
    "compute_vsa_exact",
]
