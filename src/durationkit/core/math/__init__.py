"""
Core math modules для durationkit

Численные примитивы с гарантией стабильности.
"""

from durationkit.core.math.numerical_safeguards import (
    # Constants
    DISPLAY_DECIMALS,
    EXACT_INT_LIMIT,
    # Type and NaN/Inf checks
    is_valid_float,
    require_real,
    # Overflow-checked arithmetic
    checked_difference,
    checked_product,
    checked_quotient,
    checked_sum,
    # Utilities
    clamp,
    format_magnitude,
    format_raw,
    is_multiple_of,
)

__all__ = [
    "DISPLAY_DECIMALS",
    "EXACT_INT_LIMIT",
    "is_valid_float",
    "require_real",
    "checked_difference",
    "checked_product",
    "checked_quotient",
    "checked_sum",
    "clamp",
    "format_magnitude",
    "format_raw",
    "is_multiple_of",
]
