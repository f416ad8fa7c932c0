"""
Visualization tools for Vsa analysis.
"""

from .plotting import VsaPlotter, create_comparison_plot

__all__ = [
    "VsaPlotter",
    "create_comparison_plot"
]
