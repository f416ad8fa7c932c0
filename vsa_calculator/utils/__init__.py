"""
Utility functions for vsa-calculator package.
"""

from .config import load_config, merge_configs, get_config
from .validation import validate_layer, validate_profile, validate_profile_file

__all__ = [
    "load_config",
    "merge_configs",
    "get_config",
    "validate_layer",
    "validate_profile",
    "validate_profile_file"
]
