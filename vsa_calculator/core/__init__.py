"""
Core modules for average shear-wave velocity analysis.

This package contains the main analysis modules:
- layers: Layer model, density normalisation, depth trimming
- averages: M1, M2, M4, M5
- period: MOC, Rayleigh and M7 periods
- transfer_matrix: Exact fundamental period
- results: Aggregation of all methods
- calibration: Depth calibration for a target Vsa
- deviation: Comparison with expected values
- presets, profile_io: Input profiles
- batch_workflow, report_generator: Batch evaluation and reports
"""

from . import (
    layers,
    averages,
    period,
    transfer_matrix,
    results,
    calibration,
    deviation,
    presets,
    profile_io,
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
    "profile_io",
    "batch_workflow",
    "report_generator"
]
