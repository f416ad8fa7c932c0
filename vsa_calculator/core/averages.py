"""
Closed-form averaging methods (no period calculation).

- M1: root-mean-square, thickness weighted
- M2: linear, thickness weighted
- M4: Japanese code weighted form, T = sqrt(32 * sum(d_i * (H_{i-1} + H_i) / 2 / vs_i^2))
- M5: travel-time (harmonic) average

Every function returns None when the profile is empty or contains a layer
with a non-numeric or non-positive thickness or velocity.
"""

import math
from typing import Mapping, Optional, Sequence

from .layers import compute_h, profile_is_valid


def compute_vsa_m1(layers: Sequence[Mapping]) -> Optional[float]:
    """M1: Vsa = sqrt(sum(d_i * vs_i^2) / H)."""
    if not profile_is_valid(layers):
        return None
    H = compute_h(layers)
    total = sum(L["d"] * L["vs"] * L["vs"] for L in layers)
    return math.sqrt(total / H)


def compute_vsa_m2(layers: Sequence[Mapping]) -> Optional[float]:
    """M2: Vsa = sum(d_i * vs_i) / H."""
    if not profile_is_valid(layers):
        return None
    H = compute_h(layers)
    return sum(L["d"] * L["vs"] for L in layers) / H


def compute_vsa_m4(layers: Sequence[Mapping]) -> Optional[float]:
    """M4: depth-moment weighted period, Vsa = 4H / T.

    A single layer returns its own velocity.
    """
    if not profile_is_valid(layers):
        return None
    if len(layers) == 1:
        return float(layers[0]["vs"])

    H = compute_h(layers)
    total = 0.0
    acc = 0.0
    for L in layers:
        h_top = acc
        acc += L["d"]
        total += L["d"] * (h_top + acc) / 2.0 / (L["vs"] * L["vs"])
    if not total > 0:
        return None
    T = math.sqrt(32.0 * total)
    if not T > 0:
        return None
    return 4.0 * H / T


def compute_vsa_m5(layers: Sequence[Mapping]) -> Optional[float]:
    """M5: Vsa = H / sum(d_i / vs_i)."""
    if not profile_is_valid(layers):
        return None
    H = compute_h(layers)
    travel_time = sum(L["d"] / L["vs"] for L in layers)
    if not travel_time > 0:
        return None
    return H / travel_time


__all__ = [
    "compute_vsa_m1",
    "compute_vsa_m2",
    "compute_vsa_m4",
    "compute_vsa_m5",
]
