"""Shared validators for Pydantic config models.

- Weight sum validation
- String list normalization
- Weight clamping and rounding for persisted source weights
"""

import math
from typing import Any

MIN_SOURCE_WEIGHT = 0.1
MAX_SOURCE_WEIGHT = 2.0


def validate_weights_sum(
    values: dict[str, float],
    tolerance: float = 0.01,
    expected_sum: float = 1.0,
) -> None:
    """Validate that numeric values sum to expected value.

    Args:
        values: Dictionary of field names to weight values
        tolerance: Allowed deviation from expected_sum
        expected_sum: Expected sum of all weights

    Raises:
        ValueError: If sum deviates from expected by more than tolerance
    """
    total = sum(values.values())
    if abs(total - expected_sum) > tolerance:
        raise ValueError(
            f"Weights must sum to {expected_sum} (got {total:.2f}). " f"Values: {values}"
        )


def normalize_string_list(value: Any) -> list[str]:
    """Normalize string list to lowercase.

    Handles None, single strings, and lists.

    Args:
        value: Input value (None, str, or list[str])

    Returns:
        List of lowercased strings
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [value.lower()]
    if isinstance(value, list):
        return [s.lower() for s in value if isinstance(s, str)]
    return []


def round_half_up(value: float, digits: int = 1) -> float:
    """Round half away from zero for non-negative values (1.25 -> 1.3)."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def clamp_source_weight(value: float) -> float:
    """Clamp a weight into the persisted range [0.1, 2.0]."""
    return max(MIN_SOURCE_WEIGHT, min(MAX_SOURCE_WEIGHT, value))


__all__ = [
    "MIN_SOURCE_WEIGHT",
    "MAX_SOURCE_WEIGHT",
    "validate_weights_sum",
    "normalize_string_list",
    "round_half_up",
    "clamp_source_weight",
]
