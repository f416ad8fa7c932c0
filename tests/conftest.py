"""
Shared fixtures for the Vsa calculator tests.
"""

import os
import sys

os.environ.setdefault("MPLBACKEND", "Agg")
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from vsa_calculator.core.presets import get_preset


@pytest.fixture
def three_layers():
    """Three-layer profile, 30 m deep."""
    return [
        {"id": "1", "d": 5.0, "vs": 180.0},
        {"id": "2", "d": 10.0, "vs": 300.0},
        {"id": "3", "d": 15.0, "vs": 600.0},
    ]


@pytest.fixture
def single_layer():
    return [{"id": "1", "d": 20.0, "vs": 250.0}]


@pytest.fixture
def ozkan():
    return get_preset("Özkan")


@pytest.fixture
def hasanoglu():
    return get_preset("Hasanoğlu")
