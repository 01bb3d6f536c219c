"""
Exact math primitives для exact-root-two

Точная арифметика над дробями x / 2^k и кольцом a + b√2.
"""

# Fixed-Width Integers
from src.exact.math.fixed_width import (
    # Config
    DEFAULT_LIMITS,
    INT64,
    UINT32,
    ArithmeticLimits,
    IntegerWidth,
    # Exceptions
    FixedWidthOverflow,
    # Checked arithmetic
    checked_add,
    checked_mul,
    checked_neg,
    checked_shift,
    checked_sub,
    ensure_fits,
)

# Dyadic
from src.exact.math.dyadic import (
    Dyadic,
    canonicalize,
)

# RootTwo
from src.exact.math.root_two import (
    SQRT2,
    InvalidExponent,
    RingCoefficient,
    RootTwo,
    adj2,
)

__all__ = [
    # Fixed-Width — Config
    "DEFAULT_LIMITS",
    "INT64",
    "UINT32",
    "ArithmeticLimits",
    "IntegerWidth",
    # Fixed-Width — Exceptions
    "FixedWidthOverflow",
    # Fixed-Width — Checked arithmetic
    "checked_add",
    "checked_mul",
    "checked_neg",
    "checked_shift",
    "checked_sub",
    "ensure_fits",
    # Dyadic
    "Dyadic",
    "canonicalize",
    # RootTwo — Constants
    "SQRT2",
    # RootTwo — Exceptions
    "InvalidExponent",
    # RootTwo — Types
    "RingCoefficient",
    "RootTwo",
    # RootTwo — Functions
    "adj2",
]
