"""
Average Shear-Wave Velocity (Vsa) Calculator
============================================

Computes the average shear-wave velocity of a 1D layered soil column.

This package provides:
- Simple averages (M1, M2, M4, M5)
- Period-based estimators (MOC, Rayleigh, proposed M7)
- Exact fundamental period by the transfer-matrix method
- Depth calibration against a target Vsa
- Literature benchmark presets, batch evaluation and reports
- Command-line interface

Example usage:
    >>> from vsa_calculator.core.results import compute_results
    >>> layers = [{"d": 5, "vs": 180}, {"d": 10, "vs": 300}, {"d": 15, "vs": 600}]
    >>> result = compute_results(layers, 1900)
    >>> round(result.vsa_m1, 2)
    464.11
"""

__version__ = "1.0.0"

from .core import (
    layers,
    averages,
    period,
    transfer_matrix,
    results,
    calibration,
    deviation,
    presets,
    batch_workflow,
    report_generator
)

__all__ = [
    "layers",
    "averages",
    "period",
    "transfer_matrix",
    "results",
    "calibration",
    "deviation",
    "presets",
    "batch_workflow",
    "report_generator",
    "__version__"
]
