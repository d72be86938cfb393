"""
Core math modules для goker-ledger

Целочисленная денежная арифметика (minor units) без float.
"""

from src.core.math.minor_units import (
    DEFAULT_CURRENCY_EXPONENT,
    DEFAULT_CURRENCY_SYMBOL,
    is_minor_units,
    minor_units_to_display,
    to_minor_units,
    validate_minor_units,
)

__all__ = [
    # Constants
    "DEFAULT_CURRENCY_EXPONENT",
    "DEFAULT_CURRENCY_SYMBOL",
    # Validation
    "is_minor_units",
    "validate_minor_units",
    # Conversion
    "to_minor_units",
    "minor_units_to_display",
]
