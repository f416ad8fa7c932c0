"""
Literature preset catalogue.

Presets are plain dicts:

  name, layers, expected, default_rho, auto_depth_mode, auto_depth_value

The bundled catalogue lives in ``vsa_calculator/data/presets.yaml``; a
user catalogue in the same YAML/JSON layout can be loaded instead.
"""

from pathlib import Path
from typing import Dict, List, Optional, Union

from ..utils.config import load_config


PRESETS_FILE = Path(__file__).resolve().parent.parent / "data" / "presets.yaml"

DEPTH_MODES = ("VS30", "CUSTOM")


def _normalize_preset(raw: Dict) -> Dict:
    if "name" not in raw or "layers" not in raw:
        raise ValueError("Preset entries need 'name' and 'layers'")
    mode = raw.get("auto_depth_mode", "VS30")
    if mode not in DEPTH_MODES:
        raise ValueError(f"Preset {raw['name']!r}: unknown auto_depth_mode {mode!r}")
    return {
        "name": str(raw["name"]),
        "layers": [dict(L) for L in raw["layers"]],
        "expected": dict(raw.get("expected") or {}),
        "default_rho": float(raw.get("default_rho", 1900.0)),
        "auto_depth_mode": mode,
        "auto_depth_value": float(raw.get("auto_depth_value", 30.0)),
    }


def load_presets(path: Optional[Union[str, Path]] = None) -> List[Dict]:
    """Load a preset catalogue (bundled one by default)."""
    data = load_config(path or PRESETS_FILE)
    if not isinstance(data, dict) or not isinstance(data.get("presets"), list):
        raise ValueError("Preset file must contain a 'presets' list")
    return [_normalize_preset(p) for p in data["presets"]]


def get_preset(name: str, presets: Optional[List[Dict]] = None) -> Dict:
    """Preset by name (case-insensitive)."""
    presets = presets if presets is not None else load_presets()
    for preset in presets:
        if preset["name"].casefold() == name.casefold():
            return preset
    raise KeyError(f"Unknown preset: {name!r}")


def auto_configure_depth(preset: Dict) -> Dict:
    """Depth settings recommended for a preset."""
    return {
        "depth_mode": preset["auto_depth_mode"],
        "target_depth": preset["auto_depth_value"],
    }


__all__ = [
    "PRESETS_FILE",
    "load_presets",
    "get_preset",
    "auto_configure_depth",
]
