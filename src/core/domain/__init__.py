"""
Domain models and value objects.

Contains RoundingPolicy and FormatPattern.
"""

from src.core.domain.format_pattern import (
    PATTERN_GROUPED_TWO_DECIMAL_POINTS,
    PATTERN_NO_SCALE,
    PATTERN_PERCENT_NO_POINT,
    PATTERN_PERCENT_ONE_POINT,
    PATTERN_PERCENT_TWO_POINT,
    PATTERN_TWO_DECIMAL_POINTS,
    FormatPattern,
)
from src.core.domain.rounding import DEFAULT_ROUNDING, RoundingPolicy

__all__ = [
    # Rounding
    "RoundingPolicy",
    "DEFAULT_ROUNDING",
    # Format pattern model
    "FormatPattern",
    "PATTERN_NO_SCALE",
    "PATTERN_TWO_DECIMAL_POINTS",
    "PATTERN_GROUPED_TWO_DECIMAL_POINTS",
    "PATTERN_PERCENT_NO_POINT",
    "PATTERN_PERCENT_ONE_POINT",
    "PATTERN_PERCENT_TWO_POINT",
]
