"""
Deviation analysis of computed Vsa values against expected (published or
field-measured) ones.
"""

from typing import Dict, List, Mapping, Optional, Union

from .results import METHOD_KEYS, Result


HIGH_DEVIATION_PCT = 5.0


def calculate_deviation(calculated: float, expected: float) -> float:
    """Absolute percentage deviation |calculated - expected| / |expected| * 100."""
    if expected == 0:
        raise ValueError("Expected value must be non-zero")
    return abs((calculated - expected) / expected) * 100.0


def is_deviation_high(calculated: float, expected: float) -> bool:
    """True when the deviation exceeds 5 % (exactly 5 % is acceptable)."""
    return calculate_deviation(calculated, expected) > HIGH_DEVIATION_PCT


def analyze_deviations(result: Union[Result, Mapping[str, float]],
                       expected: Mapping[str, Optional[float]]) -> Dict:
    """Per-method deviations and the high-deviation summary.

    ``expected`` is keyed by method ("M1" ... "M7", "Exact"); methods with
    a missing or zero expected value are skipped.

    Returns a dict with:
    - deviations: method -> percentage
    - high_deviations: labels such as "M3: 7.2%"
    - needs_narrowing: True if any deviation is above 5 %
    """
    computed = result.by_method() if isinstance(result, Result) else dict(result)

    deviations: Dict[str, float] = {}
    high: List[str] = []
    for key in METHOD_KEYS:
        exp = expected.get(key)
        calc = computed.get(key)
        if not exp or calc is None:
            continue
        dev = calculate_deviation(calc, exp)
        deviations[key] = dev
        if dev > HIGH_DEVIATION_PCT:
            high.append(f"{key}: {dev:.1f}%")

    return {
        "deviations": deviations,
        "high_deviations": high,
        "needs_narrowing": len(high) > 0,
    }


def suggest_narrowed_depth(current_depth: float, deviation: float, direction: str) -> float:
    """Next trial depth when a deviation is too high.

    Steps 20 % for deviations above 10 %, otherwise 10 %.
    """
    factor = 0.8 if deviation > 10 else 0.9
    if direction == "increase":
        return current_depth * (2.0 - factor)
    if direction == "decrease":
        return current_depth * factor
    raise ValueError(f"direction must be 'increase' or 'decrease', got {direction!r}")


__all__ = [
    "HIGH_DEVIATION_PCT",
    "calculate_deviation",
    "is_deviation_high",
    "analyze_deviations",
    "suggest_narrowed_depth",
]
