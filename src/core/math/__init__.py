"""
Core math modules

Точная decimal арифметика и форматирование чисел по шаблону.
"""

# Decimal Arithmetic
from src.core.math.decimal_arithmetic import (
    # Types
    NumberLike,
    RoundingLike,
    # Conversion
    exact_context,
    to_decimal,
    to_rounding_policy,
    # Scale & rounding
    round_to_integer,
    round_to_nearest_half_step,
    set_scale,
    # Arithmetic
    divide,
    divide_to_integer,
    multiply,
    sum_values,
    # Comparison
    is_equal_to_specific_number,
    # Hex
    hex_string_to_int,
    int_to_hex_string,
)

# Number Format
from src.core.math.number_format import (
    PROGRESS_SCALE,
    format_number,
    format_percentage_progress,
    parse_number,
)

__all__ = [
    # Decimal Arithmetic — Types
    "NumberLike",
    "RoundingLike",
    # Decimal Arithmetic — Conversion
    "exact_context",
    "to_decimal",
    "to_rounding_policy",
    # Decimal Arithmetic — Scale & rounding
    "round_to_integer",
    "round_to_nearest_half_step",
    "set_scale",
    # Decimal Arithmetic — Arithmetic
    "divide",
    "divide_to_integer",
    "multiply",
    "sum_values",
    # Decimal Arithmetic — Comparison
    "is_equal_to_specific_number",
    # Decimal Arithmetic — Hex
    "hex_string_to_int",
    "int_to_hex_string",
    # Number Format — Constants
    "PROGRESS_SCALE",
    # Number Format — Functions
    "format_number",
    "format_percentage_progress",
    "parse_number",
]
