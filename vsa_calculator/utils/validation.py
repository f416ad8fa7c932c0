"""
Input validation utilities.
"""

from pathlib import Path
from typing import List, Mapping, Optional, Sequence, Tuple

from ..core.layers import is_number, normalize_rho


MAX_THICKNESS = 10000.0   # m
MAX_VS = 6000.0           # m/s
MAX_RHO = 5000.0          # kg/m3


def validate_layer(layer: Mapping) -> Tuple[bool, List[str]]:
    """Check a single layer.

    Returns:
        (is_valid, error_messages)
    """
    errors: List[str] = []
    d = layer.get("d")
    vs = layer.get("vs")
    rho = layer.get("rho")

    if not is_number(d) or d <= 0:
        errors.append("Thickness must be a positive number")
    elif d > MAX_THICKNESS:
        errors.append(f"Thickness too large (more than {MAX_THICKNESS:,.0f} m)")

    if not is_number(vs) or vs <= 0:
        errors.append("Shear-wave velocity must be a positive number")
    elif vs > MAX_VS:
        errors.append(f"Shear-wave velocity too large (more than {MAX_VS:,.0f} m/s)")

    if is_number(rho):
        try:
            rho_kg = normalize_rho(rho, layer.get("rho_unit"))
        except ValueError as exc:
            errors.append(str(exc))
        else:
            if rho_kg <= 0 or rho_kg > MAX_RHO:
                errors.append(f"Density must be between 0 and {MAX_RHO:,.0f} kg/m3")
    elif rho not in (None, ""):
        errors.append("Density must be numeric or empty")

    return len(errors) == 0, errors


def validate_profile(layers: Sequence[Mapping]) -> Tuple[bool, List[str]]:
    """Check every layer of a profile; messages are prefixed with the layer number."""
    if not layers:
        return False, ["Profile has no layers"]
    errors: List[str] = []
    for i, layer in enumerate(layers, 1):
        ok, layer_errors = validate_layer(layer)
        if not ok:
            errors.extend(f"Layer {i}: {msg}" for msg in layer_errors)
    return len(errors) == 0, errors


def validate_profile_file(profile_path: Path) -> Tuple[bool, Optional[str]]:
    """Validate a profile file (text model or CSV).

    Returns:
        (is_valid, error_message)
    """
    from ..core.profile_io import read_profile

    profile_path = Path(profile_path)
    if not profile_path.exists():
        return False, f"Profile file not found: {profile_path}"

    try:
        layers = read_profile(profile_path)
    except (ValueError, KeyError) as e:
        return False, f"Error reading profile file: {e}"

    ok, errors = validate_profile(layers)
    if not ok:
        return False, "; ".join(errors)
    return True, None


__all__ = [
    "validate_layer",
    "validate_profile",
    "validate_profile_file",
]
