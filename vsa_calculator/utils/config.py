"""
Configuration management utilities.
"""

import copy
import json
from pathlib import Path
from typing import Dict, Union

import yaml


# Defaults for every configurable part of a calculation run
DEFAULT_CONFIG = {
    "calculation": {
        "default_rho": 1900.0,   # kg/m3 (values below 50 are read as t/m3)
        "depth_m12": None,       # None: whole profile for M1, M2, M4, M5
        "depth_m3": 30.0,        # used when m3_mode is TARGET
        "m3_mode": "TOTAL",      # TOTAL or TARGET
        "m3_formula": "MOC",     # MOC, RAYLEIGH or EXACT
    },
    "solver": {
        "step": 0.01,
        "omega_max": 2000.0,
        "xtol": 1e-6,
        "chunk_size": 4096,
    },
    "calibration": {
        "h_min": 5.0,
        "h_max": 120.0,
        "tolerance": 0.5,
        "max_iter": 40,
        "formula": "EXACT",
    },
    "output": {
        "summary_filename": "vsa_summary.csv",
        "deviation_filename": "vsa_deviations.csv",
        "report_filename": "vsa_report.txt",
        "json_filename": "vsa_report.json",
        "comparison_filename": "method_comparison.png",
        "profile_filename": "vs_profile.png",
        "dpi": 200,
    },
}


def load_config(config_path: Union[str, Path]) -> Dict:
    """Load configuration from YAML or JSON file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        if config_path.suffix.lower() in ['.yaml', '.yml']:
            return yaml.safe_load(f) or {}
        elif config_path.suffix.lower() == '.json':
            return json.load(f)
        else:
            raise ValueError(f"Unsupported config format: {config_path.suffix}")


def merge_configs(base: Dict, update: Dict) -> Dict:
    """Recursively merge configuration dictionaries without touching ``base``."""
    result = base.copy()

    for key, value in update.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return result


def get_config(config_path: Union[str, Path, None] = None, overrides: Union[Dict, None] = None) -> Dict:
    """Defaults merged with an optional config file, then with ``overrides``."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if config_path:
        config = merge_configs(config, load_config(config_path))
    if overrides:
        config = merge_configs(config, overrides)
    return copy.deepcopy(config)


def save_config(config: Dict, output_path: Union[str, Path], format: str = 'yaml') -> Path:
    """Save configuration to file."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', encoding='utf-8') as f:
        if format.lower() in ['yaml', 'yml']:
            yaml.safe_dump(config, f, default_flow_style=False, indent=2, allow_unicode=True)
        elif format.lower() == 'json':
            json.dump(config, f, indent=2, ensure_ascii=False)
        else:
            raise ValueError(f"Unsupported format: {format}")

    return output_path


__all__ = [
    "DEFAULT_CONFIG",
    "load_config",
    "merge_configs",
    "get_config",
    "save_config"
]
