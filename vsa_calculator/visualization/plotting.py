"""
Plotting utilities for Vsa analysis.
"""

import numpy as np
import matplotlib.pyplot as plt
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence
import seaborn as sns

from ..core.layers import is_number
from ..core.results import METHOD_KEYS


class VsaPlotter:
    """Plotting class for Vs profiles and Vsa method comparisons."""

    def __init__(self, style='publication', palette='deep'):
        """
        Initialize plotter.

        Parameters:
            style: Plot style ('publication', 'presentation', 'minimal')
            palette: Seaborn palette name used for the method bars
        """
        self.style = style
        self.palette = palette
        self._setup_style()

    def _setup_style(self):
        """Configure plotting style."""
        if self.style == 'publication':
            sns.set_style("whitegrid")
            self.figsize = (8, 6)
        elif self.style == 'presentation':
            sns.set_style("darkgrid")
            self.figsize = (12, 8)
        else:  # minimal
            sns.set_style("white")
            self.figsize = (6, 4)

    def plot_vs_profile(self, layers: Sequence[Mapping],
                        vsa_values: Optional[Mapping[str, float]] = None,
                        title: str = "Vs Profile",
                        save_path: Optional[Path] = None,
                        dpi: int = 300) -> plt.Figure:
        """Step plot of Vs against depth, with optional vertical Vsa lines."""
        depths = [0.0]
        vs_steps = []
        for layer in layers:
            if not (is_number(layer.get("d")) and is_number(layer.get("vs"))):
                continue
            depths.append(depths[-1] + layer["d"])
            vs_steps.append(layer["vs"])

        fig, ax = plt.subplots(figsize=(self.figsize[0] * 0.75, self.figsize[1]))
        if vs_steps:
            x = np.repeat(vs_steps, 2)
            y = np.column_stack([depths[:-1], depths[1:]]).ravel()
            ax.plot(x, y, color='black', linewidth=2, label='Vs')
            ax.set_ylim(depths[-1], 0)

        if vsa_values:
            colors = sns.color_palette(self.palette, len(vsa_values))
            for color, (label, value) in zip(colors, vsa_values.items()):
                if value is None:
                    continue
                ax.axvline(value, color=color, linestyle='--', linewidth=1.5,
                           label=f"{label}: {value:.0f} m/s")

        ax.set_xlabel('Vs (m/s)', fontsize=11)
        ax.set_ylabel('Depth (m)', fontsize=11)
        ax.set_title(title, fontsize=12, fontweight='bold')
        ax.grid(True, alpha=0.3)
        ax.legend(loc='lower left', fontsize=8)

        plt.tight_layout()

        if save_path:
            fig.savefig(save_path, dpi=dpi, bbox_inches='tight')

        return fig

    def plot_method_comparison(self, vsa_values: Mapping[str, float],
                               expected: Optional[Mapping[str, float]] = None,
                               title: str = "Vsa Method Comparison",
                               save_path: Optional[Path] = None,
                               dpi: int = 300) -> plt.Figure:
        """Bar chart of Vsa per method; expected values drawn as markers."""
        labels = [k for k in METHOD_KEYS if vsa_values.get(k) is not None]
        values = [vsa_values[k] for k in labels]
        positions = np.arange(len(labels))

        fig, ax = plt.subplots(figsize=self.figsize)
        colors = sns.color_palette(self.palette, len(labels))
        bars = ax.bar(positions, values, color=colors, alpha=0.8)
        for bar, value in zip(bars, values):
            ax.annotate(f"{value:.0f}", (bar.get_x() + bar.get_width() / 2, bar.get_height()),
                        ha='center', va='bottom', fontsize=8)

        if expected:
            exp_x = [i for i, k in enumerate(labels) if expected.get(k)]
            exp_y = [expected[labels[i]] for i in exp_x]
            if exp_x:
                ax.scatter(exp_x, exp_y, marker='D', color='black', zorder=3, label='Expected')
                ax.legend(loc='best')

        ax.set_xticks(positions)
        ax.set_xticklabels(labels)
        ax.set_ylabel('Vsa (m/s)', fontsize=11)
        ax.set_title(title, fontsize=12, fontweight='bold')
        ax.grid(True, alpha=0.3, axis='y')

        plt.tight_layout()

        if save_path:
            fig.savefig(save_path, dpi=dpi, bbox_inches='tight')

        return fig


def create_comparison_plot(data_dict: Dict[str, Dict],
                           output_path: Optional[Path] = None) -> plt.Figure:
    """Create a comparison figure from several profiles.

    ``data_dict`` maps a profile name to a dict with ``vsa`` (method -> value)
    and optional ``expected``.
    """
    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(14, 6))

    labels = list(data_dict.keys())
    colors = plt.cm.tab10(np.linspace(0, 1, max(len(labels), 1)))

    # Panel 1: Vsa per method, one line per profile
    x = np.arange(len(METHOD_KEYS))
    for i, (label, data) in enumerate(data_dict.items()):
        vsa = data.get('vsa', {})
        y = [vsa.get(k) if vsa.get(k) is not None else np.nan for k in METHOD_KEYS]
        ax1.plot(x, y, 'o-', color=colors[i], linewidth=2, label=label, alpha=0.8)
    ax1.set_xticks(x)
    ax1.set_xticklabels(METHOD_KEYS)
    ax1.set_ylabel('Vsa (m/s)')
    ax1.set_title('(a) Vsa by Method')
    ax1.grid(True, alpha=0.3)
    ax1.legend(fontsize=8)

    # Panel 2: ratio to the exact solution
    for i, (label, data) in enumerate(data_dict.items()):
        vsa = data.get('vsa', {})
        exact = vsa.get('Exact')
        if not exact:
            continue
        ratios = [vsa[k] / exact if vsa.get(k) is not None else np.nan for k in METHOD_KEYS[:-1]]
        ax2.plot(x[:-1], ratios, 's--', color=colors[i], label=label, alpha=0.8)
    ax2.axhline(1.0, color='black', linewidth=1)
    ax2.set_xticks(x[:-1])
    ax2.set_xticklabels(METHOD_KEYS[:-1])
    ax2.set_ylabel('Vsa / Vsa(Exact)')
    ax2.set_title('(b) Ratio to Exact Solution')
    ax2.grid(True, alpha=0.3)

    plt.suptitle('Vsa Method Comparison', fontsize=14, fontweight='bold')
    plt.tight_layout()

    if output_path:
        fig.savefig(output_path, dpi=300, bbox_inches='tight')

    return fig


__all__ = [
    "VsaPlotter",
    "create_comparison_plot"
]
